import json

from django.test import RequestFactory
from rest_framework.test import APITestCase

from apps.common.views import server_error


class ErrorResponseTests(APITestCase):
    def assert_error_body(self, response, status_code, path):
        self.assertEqual(response.status_code, status_code)
        self.assertEqual(response["Content-Type"], "application/json")
        body = json.loads(response.content)
        self.assertEqual(set(body), {"timestamp", "status", "error", "message", "path"})
        self.assertEqual(body["status"], status_code)
        self.assertEqual(body["path"], path)
        return body

    def test_unrouted_paths_return_json_not_found(self):
        for path in ("/api/products/abc", "/api/products/", "/api/unknown"):
            body = self.assert_error_body(self.client.get(path), 404, path)
            self.assertEqual(body["error"], "Not Found")

    def test_server_error_handler_returns_json(self):
        request = RequestFactory().get("/api/expenses")
        body = self.assert_error_body(server_error(request), 500, "/api/expenses")
        self.assertEqual(body["error"], "Internal Server Error")

    def test_domain_not_found_keeps_its_message(self):
        response = self.client.get("/api/products/999")
        body = self.assert_error_body(response, 404, "/api/products/999")
        self.assertEqual(body["message"], "Product with id 999 not found.")
