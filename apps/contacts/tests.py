from datetime import date, timedelta

from django.utils import timezone
from rest_framework.test import APITestCase

from apps.contacts.models import Contact


class ContactsApiTests(APITestCase):
    def payload(self, **overrides):
        data = {
            "firstName": "Ada",
            "lastName": "Lovelace",
            "email": "ada@example.com",
            "phone": "+34600111222",
            "address": "12 St James's Square",
            "birthDate": "1815-12-10",
            "notes": "Analytical engine",
        }
        data.update(overrides)
        return data

    def create(self, **overrides):
        response = self.client.post("/api/contacts", self.payload(**overrides), format="json")
        self.assertEqual(response.status_code, 201, response.data)
        return response.data

    def test_create_and_fetch_contact(self):
        created = self.create()
        self.assertEqual(created["firstName"], "Ada")
        self.assertEqual(created["birthDate"], "1815-12-10")
        self.assertIsNotNone(created["createdAt"])

        fetched = self.client.get(f"/api/contacts/{created['id']}")
        self.assertEqual(fetched.status_code, 200)
        self.assertEqual(fetched.data, created)

    def test_duplicate_email_is_conflict(self):
        self.create()
        response = self.client.post("/api/contacts", self.payload(email="ADA@example.com", firstName="Other"), format="json")
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data["status"], 409)
        self.assertEqual(Contact.objects.count(), 1)

    def test_invalid_fields_are_reported(self):
        tomorrow = timezone.localdate() + timedelta(days=1)
        response = self.client.post(
            "/api/contacts",
            self.payload(firstName="A", email="not-an-email", phone="12ab", birthDate=str(tomorrow)),
            format="json",
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["message"], "Validation failed")
        for field in ("firstName", "email", "phone", "birthDate"):
            self.assertIn(field, response.data["errors"])

    def test_birth_date_today_is_rejected(self):
        response = self.client.post("/api/contacts", self.payload(birthDate=str(timezone.localdate())), format="json")
        self.assertEqual(response.status_code, 400)
        self.assertIn("birthDate", response.data["errors"])

    def test_optional_fields_may_be_omitted(self):
        created = self.create(phone=None, address=None, birthDate=None, notes=None)
        self.assertIsNone(created["phone"])
        self.assertIsNone(created["birthDate"])

    def test_list_is_ordered_by_last_then_first_name(self):
        self.create(firstName="Grace", lastName="Hopper", email="grace@example.com")
        self.create(firstName="Alan", lastName="Turing", email="alan@example.com")
        self.create(firstName="Ada", lastName="Byron", email="ada.b@example.com")
        self.create(firstName="Charles", lastName="Byron", email="charles@example.com")

        response = self.client.get("/api/contacts")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            [(c["lastName"], c["firstName"]) for c in response.data],
            [("Byron", "Ada"), ("Byron", "Charles"), ("Hopper", "Grace"), ("Turing", "Alan")],
        )

    def test_lookup_by_email(self):
        created = self.create()
        response = self.client.get("/api/contacts/email/ada@example.com")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["id"], created["id"])

        missing = self.client.get("/api/contacts/email/nobody@example.com")
        self.assertEqual(missing.status_code, 404)

    def test_partial_update_keeps_untouched_fields(self):
        created = self.create()
        response = self.client.patch(f"/api/contacts/{created['id']}", {"phone": "+441234567890"}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["phone"], "+441234567890")
        self.assertEqual(response.data["firstName"], "Ada")
        self.assertEqual(response.data["notes"], "Analytical engine")
        self.assertEqual(response.data["email"], "ada@example.com")

    def test_partial_update_cannot_change_email(self):
        created = self.create()
        response = self.client.patch(f"/api/contacts/{created['id']}", {"email": "new@example.com"}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(Contact.objects.get(pk=created["id"]).email, "ada@example.com")

    def test_partial_update_is_validated(self):
        created = self.create()
        response = self.client.patch(
            f"/api/contacts/{created['id']}",
            {"lastName": "", "birthDate": str(date.today() + timedelta(days=30))},
            format="json",
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("lastName", response.data["errors"])
        self.assertEqual(Contact.objects.get(pk=created["id"]).last_name, "Lovelace")

    def test_partial_update_may_clear_optional_fields(self):
        created = self.create()
        response = self.client.patch(f"/api/contacts/{created['id']}", {"notes": None, "phone": None}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.data["notes"])
        self.assertIsNone(response.data["phone"])

    def test_delete_contact(self):
        created = self.create()
        response = self.client.delete(f"/api/contacts/{created['id']}")
        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.client.get(f"/api/contacts/{created['id']}").status_code, 404)
        self.assertEqual(self.client.delete(f"/api/contacts/{created['id']}").status_code, 404)

    def test_unknown_contact_is_not_found(self):
        for method in ("get", "patch", "delete"):
            response = getattr(self.client, method)("/api/contacts/999")
            self.assertEqual(response.status_code, 404)
            self.assertEqual(response.data["path"], "/api/contacts/999")

    def test_blank_optional_text_is_stored_as_null(self):
        created = self.create(address="", notes="  ")
        self.assertIsNone(created["address"])
        self.assertIsNone(created["notes"])

        response = self.client.patch(f"/api/contacts/{created['id']}", {"address": ""}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(Contact.objects.get(pk=created["id"]).address)
