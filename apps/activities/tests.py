from datetime import timedelta
from decimal import Decimal

from django.utils import timezone
from rest_framework.test import APITestCase

from apps.activities import services
from apps.activities.models import Activity


def make_activity(days_ago=0, exercise_type="Running", duration=30, distance="5.00", calories=300, heart_rate=None):
    return Activity.objects.create(
        exercise_type=exercise_type,
        duration_minutes=duration,
        distance_km=Decimal(distance) if distance is not None else None,
        calories_burned=calories,
        date=timezone.localdate() - timedelta(days=days_ago),
        heart_rate=heart_rate,
    )


class ActivitiesApiTests(APITestCase):
    def payload(self, **overrides):
        data = {
            "exerciseType": "Running",
            "durationMinutes": 45,
            "distanceKm": 7.5,
            "caloriesBurned": 420,
            "date": str(timezone.localdate()),
            "notes": "Morning loop",
            "heartRate": 150,
        }
        data.update(overrides)
        return data

    def test_create_and_fetch_activity(self):
        created = self.client.post("/api/activities", self.payload(), format="json")
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.data["distanceKm"], Decimal("7.50"))
        self.assertEqual(created.data["heartRate"], 150)
        self.assertIsNotNone(created.data["createdAt"])

        fetched = self.client.get(f"/api/activities/{created.data['id']}")
        self.assertEqual(fetched.status_code, 200)
        self.assertEqual(fetched.data, created.data)

    def test_optional_fields_may_be_omitted(self):
        data = self.payload()
        for field in ("distanceKm", "notes", "heartRate"):
            del data[field]
        response = self.client.post("/api/activities", data, format="json")
        self.assertEqual(response.status_code, 201)
        self.assertIsNone(response.data["distanceKm"])
        self.assertIsNone(response.data["heartRate"])

    def test_heart_rate_bounds(self):
        for heart_rate in (40, 220):
            response = self.client.post("/api/activities", self.payload(heartRate=heart_rate), format="json")
            self.assertEqual(response.status_code, 201)
        for heart_rate in (39, 221, -60):
            response = self.client.post("/api/activities", self.payload(heartRate=heart_rate), format="json")
            self.assertEqual(response.status_code, 400)
            self.assertIn("heartRate", response.data["errors"])

    def test_invalid_fields_are_reported(self):
        tomorrow = timezone.localdate() + timedelta(days=1)
        response = self.client.post(
            "/api/activities",
            self.payload(exerciseType=" ", durationMinutes=0, distanceKm=-1, caloriesBurned=-5, date=str(tomorrow)),
            format="json",
        )
        self.assertEqual(response.status_code, 400)
        for field in ("exerciseType", "durationMinutes", "distanceKm", "caloriesBurned", "date"):
            self.assertIn(field, response.data["errors"])
        self.assertFalse(Activity.objects.exists())

    def test_list_is_newest_first(self):
        older = make_activity(days_ago=3)
        first_today = make_activity()
        second_today = make_activity()

        response = self.client.get("/api/activities")
        self.assertEqual([item["id"] for item in response.data], [second_today.id, first_today.id, older.id])

    def test_filter_by_type_ignores_case(self):
        run = make_activity(exercise_type="Running")
        make_activity(exercise_type="Cycling")

        response = self.client.get("/api/activities", {"type": "running"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual([item["id"] for item in response.data], [run.id])

    def test_filter_by_date_range_is_inclusive(self):
        make_activity(days_ago=10)
        inside_start = make_activity(days_ago=5)
        inside_end = make_activity(days_ago=2)
        make_activity(days_ago=1)
        today = timezone.localdate()

        response = self.client.get(
            "/api/activities",
            {"startDate": str(today - timedelta(days=5)), "endDate": str(today - timedelta(days=2))},
        )
        self.assertEqual([item["id"] for item in response.data], [inside_end.id, inside_start.id])

        inverted = self.client.get(
            "/api/activities",
            {"startDate": str(today), "endDate": str(today - timedelta(days=5))},
        )
        self.assertEqual(inverted.data, [])

        half_open = self.client.get("/api/activities", {"startDate": str(today)})
        self.assertEqual(half_open.status_code, 400)

    def test_update_changes_only_supplied_fields(self):
        activity = make_activity(duration=30, heart_rate=120)
        response = self.client.put(f"/api/activities/{activity.id}", {"durationMinutes": 50}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["durationMinutes"], 50)
        self.assertEqual(response.data["heartRate"], 120)
        self.assertEqual(response.data["exerciseType"], "Running")

    def test_update_is_validated(self):
        activity = make_activity(heart_rate=120)
        response = self.client.put(f"/api/activities/{activity.id}", {"heartRate": 300}, format="json")
        self.assertEqual(response.status_code, 400)
        activity.refresh_from_db()
        self.assertEqual(activity.heart_rate, 120)

    def test_delete_and_missing_activity(self):
        activity = make_activity()
        self.assertEqual(self.client.delete(f"/api/activities/{activity.id}").status_code, 204)
        for method in ("get", "put", "delete"):
            response = getattr(self.client, method)(f"/api/activities/{activity.id}")
            self.assertEqual(response.status_code, 404)

    def test_weekly_monthly_and_totals(self):
        make_activity(days_ago=0, duration=30, distance="5.00", calories=300)
        make_activity(days_ago=3, duration=45, distance=None, calories=200)
        make_activity(days_ago=7, duration=20, distance="2.25", calories=150)
        make_activity(days_ago=8, duration=60, distance="10.00", calories=500)
        make_activity(days_ago=31, duration=10, distance=None, calories=50)

        weekly = self.client.get("/api/activities/stats/weekly")
        self.assertEqual(weekly.status_code, 200)
        self.assertEqual(
            dict(weekly.data),
            {
                "activityCount": 3,
                "avgDurationMinutes": Decimal("31.67"),
                "avgDistanceKm": Decimal("3.63"),
                "totalCalories": 650,
            },
        )

        monthly = self.client.get("/api/activities/stats/monthly")
        self.assertEqual(
            dict(monthly.data),
            {
                "activityCount": 4,
                "avgDurationMinutes": Decimal("38.75"),
                "avgDistanceKm": Decimal("5.75"),
                "totalCalories": 1150,
            },
        )

        totals = self.client.get("/api/activities/totals")
        self.assertEqual(
            dict(totals.data),
            {
                "totalActivities": 5,
                "totalDurationMinutes": 165,
                "totalDistanceKm": Decimal("17.25"),
                "totalCalories": 1200,
            },
        )


class ActivityStatsServiceTests(APITestCase):
    def test_stats_without_activities_are_zero(self):
        self.assertEqual(
            services.weekly_stats(),
            {
                "activity_count": 0,
                "avg_duration_minutes": Decimal("0.00"),
                "avg_distance_km": Decimal("0.00"),
                "total_calories": 0,
            },
        )
        self.assertEqual(
            services.totals(),
            {
                "total_activities": 0,
                "total_duration_minutes": 0,
                "total_distance_km": Decimal("0.00"),
                "total_calories": 0,
            },
        )

    def test_window_is_relative_to_given_day(self):
        make_activity(days_ago=20, duration=40)
        later = timezone.localdate() + timedelta(days=10)
        self.assertEqual(services.weekly_stats(today=later)["activity_count"], 0)
        self.assertEqual(services.monthly_stats(today=later)["activity_count"], 1)
