import logging
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal

from django.db import transaction
from django.utils import timezone

from apps.activities.models import Activity
from apps.common.exceptions import ResourceNotFound

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
WEEK_DAYS = 7
MONTH_DAYS = 30

FIELDS = (
    "exercise_type",
    "duration_minutes",
    "distance_km",
    "calories_burned",
    "date",
    "notes",
    "heart_rate",
)


def create_activity(*, data) -> Activity:
    activity = Activity.objects.create(**{field: data.get(field) for field in FIELDS})
    logger.info("Activity %s created (%s, %s min)", activity.id, activity.exercise_type, activity.duration_minutes)
    return activity


def list_activities(*, exercise_type=None, date_from=None, date_to=None):
    activities = Activity.objects.newest_first()
    if exercise_type is not None:
        return activities.of_type(exercise_type)
    if date_from is not None and date_to is not None:
        return activities.between(date_from, date_to)
    return activities


def get_activity(activity_id) -> Activity:
    try:
        return Activity.objects.get(pk=activity_id)
    except Activity.DoesNotExist:
        raise ResourceNotFound(f"Activity with id {activity_id} not found.")


def update_activity(activity, *, data) -> Activity:
    """Apply a validated partial update; fields missing from ``data`` keep their value."""
    if not data:
        return activity
    with transaction.atomic():
        for field, value in data.items():
            setattr(activity, field, value)
        activity.save(update_fields=[*data.keys(), "updated_at"])
    logger.info("Activity %s updated (%s)", activity.id, ", ".join(sorted(data)))
    return activity


def delete_activity(activity_id):
    deleted, _ = Activity.objects.filter(pk=activity_id).delete()
    if not deleted:
        raise ResourceNotFound(f"Activity with id {activity_id} not found.")
    logger.info("Activity %s deleted", activity_id)


def _round_half_up(value) -> Decimal:
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def stats_since(day):
    stats = Activity.objects.since(day).stats()
    return {
        "activity_count": stats["activity_count"],
        "avg_duration_minutes": _round_half_up(stats["avg_duration_minutes"]),
        "avg_distance_km": _round_half_up(stats["avg_distance_km"]),
        "total_calories": stats["total_calories"],
    }


def weekly_stats(today=None):
    """Activities dated on or after the day one week before ``today``."""
    today = today or timezone.localdate()
    return stats_since(today - timedelta(days=WEEK_DAYS))


def monthly_stats(today=None):
    today = today or timezone.localdate()
    return stats_since(today - timedelta(days=MONTH_DAYS))


def totals():
    result = Activity.objects.totals()
    result["total_distance_km"] = _round_half_up(result["total_distance_km"])
    return result
