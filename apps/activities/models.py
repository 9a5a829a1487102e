from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from apps.activities.querysets import ActivityQuerySet

MIN_HEART_RATE = 40
MAX_HEART_RATE = 220


class Activity(models.Model):
    exercise_type = models.CharField(max_length=50)
    duration_minutes = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    distance_km = models.DecimalField(max_digits=8, decimal_places=2, blank=True, null=True)
    calories_burned = models.PositiveIntegerField()
    date = models.DateField()
    notes = models.CharField(max_length=500, blank=True, null=True)
    heart_rate = models.PositiveSmallIntegerField(
        blank=True,
        null=True,
        validators=[MinValueValidator(MIN_HEART_RATE), MaxValueValidator(MAX_HEART_RATE)],
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ActivityQuerySet.as_manager()

    class Meta:
        verbose_name_plural = "activities"
        ordering = ["-date", "-id"]
        indexes = [
            models.Index(fields=["date"], name="activity_date_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(duration_minutes__gte=1), name="activity_duration_positive"),
            models.CheckConstraint(condition=models.Q(distance_km__gte=0), name="activity_distance_non_negative"),
            models.CheckConstraint(
                condition=models.Q(heart_rate__gte=MIN_HEART_RATE, heart_rate__lte=MAX_HEART_RATE),
                name="activity_heart_rate_range",
            ),
        ]

    def __str__(self):
        return f"{self.date} {self.exercise_type} {self.duration_minutes}min"
