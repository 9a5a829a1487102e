from unittest import mock

from django.db import OperationalError
from rest_framework.test import APITestCase


class HealthTests(APITestCase):
    def test_health_reports_database(self):
        response = self.client.get("/health/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok", "database": "ok"})

    def test_health_when_database_is_down(self):
        with mock.patch("apps.health.views.connection.cursor", side_effect=OperationalError("down")):
            response = self.client.get("/health/")
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["database"], "unavailable")
