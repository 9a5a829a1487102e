from rest_framework.test import APITestCase

from apps.notes.models import Note


class NotesApiTests(APITestCase):
    def create(self, title="Groceries", content="Milk, eggs"):
        response = self.client.post("/api/notes", {"title": title, "content": content}, format="json")
        self.assertEqual(response.status_code, 201, response.data)
        return response.data

    def test_create_and_fetch_note(self):
        created = self.create()
        self.assertEqual(created["title"], "Groceries")
        self.assertIsNotNone(created["createdAt"])
        self.assertIsNotNone(created["lastModified"])

        fetched = self.client.get(f"/api/notes/{created['id']}")
        self.assertEqual(fetched.status_code, 200)
        self.assertEqual(fetched.data, created)

    def test_title_and_content_are_required(self):
        response = self.client.post("/api/notes", {"title": ""}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertIn("title", response.data["errors"])
        self.assertIn("content", response.data["errors"])

    def test_content_length_limit(self):
        response = self.client.post("/api/notes", {"title": "Long", "content": "x" * 1001}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertIn("content", response.data["errors"])
        self.assertEqual(self.client.post("/api/notes", {"title": "Max", "content": "x" * 1000}, format="json").status_code, 201)

    def test_list_is_most_recently_modified_first(self):
        first = self.create(title="First")
        second = self.create(title="Second")
        self.client.put(f"/api/notes/{first['id']}", {"title": "First, edited", "content": "again"}, format="json")

        response = self.client.get("/api/notes")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([note["id"] for note in response.data], [first["id"], second["id"]])

    def test_full_update(self):
        created = self.create()
        response = self.client.put(f"/api/notes/{created['id']}", {"title": "Errands", "content": "Post office"}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["title"], "Errands")
        self.assertEqual(response.data["createdAt"], created["createdAt"])
        self.assertGreaterEqual(response.data["lastModified"], created["lastModified"])

        partial = self.client.put(f"/api/notes/{created['id']}", {"title": "Only title"}, format="json")
        self.assertEqual(partial.status_code, 400)

    def test_patch_is_not_allowed(self):
        created = self.create()
        response = self.client.patch(f"/api/notes/{created['id']}", {"title": "x"}, format="json")
        self.assertEqual(response.status_code, 405)

    def test_delete_note(self):
        created = self.create()
        self.assertEqual(self.client.delete(f"/api/notes/{created['id']}").status_code, 204)
        self.assertFalse(Note.objects.exists())
        missing = self.client.get(f"/api/notes/{created['id']}")
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.data["message"], f"Note with id {created['id']} not found.")
