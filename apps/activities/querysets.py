from django.db import models
from django.db.models import Avg, Count, DecimalField, FloatField, IntegerField, Sum
from django.db.models.functions import Coalesce

DISTANCE_TOTAL_FIELD = DecimalField(max_digits=12, decimal_places=2)


class ActivityQuerySet(models.QuerySet):
    def newest_first(self):
        return self.order_by("-date", "-id")

    def of_type(self, exercise_type):
        return self.filter(exercise_type__iexact=exercise_type.strip())

    def between(self, date_from, date_to):
        if date_from > date_to:
            return self.none()
        return self.filter(date__gte=date_from, date__lte=date_to)

    def since(self, day):
        return self.filter(date__gte=day)

    def stats(self):
        # Avg skips NULL distances, so only activities with a distance count.
        return self.aggregate(
            activity_count=Count("id"),
            avg_duration_minutes=Avg("duration_minutes", output_field=FloatField()),
            avg_distance_km=Avg("distance_km", output_field=FloatField()),
            total_calories=Coalesce(Sum("calories_burned"), 0, output_field=IntegerField()),
        )

    def totals(self):
        return self.aggregate(
            total_activities=Count("id"),
            total_duration_minutes=Coalesce(Sum("duration_minutes"), 0, output_field=IntegerField()),
            total_distance_km=Coalesce(Sum("distance_km"), 0, output_field=DISTANCE_TOTAL_FIELD),
            total_calories=Coalesce(Sum("calories_burned"), 0, output_field=IntegerField()),
        )
