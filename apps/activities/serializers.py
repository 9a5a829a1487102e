from decimal import Decimal

from django.utils import timezone
from rest_framework import serializers

from apps.activities.models import MAX_HEART_RATE, MIN_HEART_RATE, Activity
from apps.common.serializers import OptionalTextField


class ActivitySerializer(serializers.ModelSerializer):
    exerciseType = serializers.CharField(source="exercise_type", max_length=50)
    durationMinutes = serializers.IntegerField(source="duration_minutes", min_value=1)
    distanceKm = serializers.DecimalField(
        source="distance_km",
        max_digits=8,
        decimal_places=2,
        min_value=Decimal("0"),
        required=False,
        allow_null=True,
    )
    caloriesBurned = serializers.IntegerField(source="calories_burned", min_value=0)
    notes = OptionalTextField(max_length=500)
    heartRate = serializers.IntegerField(
        source="heart_rate",
        min_value=MIN_HEART_RATE,
        max_value=MAX_HEART_RATE,
        required=False,
        allow_null=True,
    )
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Activity
        fields = [
            "id",
            "exerciseType",
            "durationMinutes",
            "distanceKm",
            "caloriesBurned",
            "date",
            "notes",
            "heartRate",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = ["id"]

    def validate_date(self, value):
        if value > timezone.localdate():
            raise serializers.ValidationError("date cannot be in the future")
        return value


class ActivityFilterQuerySerializer(serializers.Serializer):
    type = serializers.CharField(max_length=50, required=False)
    startDate = serializers.DateField(source="start_date", required=False)
    endDate = serializers.DateField(source="end_date", required=False)

    def validate(self, attrs):
        if ("start_date" in attrs) != ("end_date" in attrs):
            raise serializers.ValidationError("startDate and endDate must be given together")
        return attrs


class ActivityStatsSerializer(serializers.Serializer):
    activityCount = serializers.IntegerField(source="activity_count")
    avgDurationMinutes = serializers.DecimalField(source="avg_duration_minutes", max_digits=12, decimal_places=2)
    avgDistanceKm = serializers.DecimalField(source="avg_distance_km", max_digits=12, decimal_places=2)
    totalCalories = serializers.IntegerField(source="total_calories")


class ActivityTotalsSerializer(serializers.Serializer):
    totalActivities = serializers.IntegerField(source="total_activities")
    totalDurationMinutes = serializers.IntegerField(source="total_duration_minutes")
    totalDistanceKm = serializers.DecimalField(source="total_distance_km", max_digits=12, decimal_places=2)
    totalCalories = serializers.IntegerField(source="total_calories")
