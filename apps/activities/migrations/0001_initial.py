import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Activity",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("exercise_type", models.CharField(max_length=50)),
                (
                    "duration_minutes",
                    models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)]),
                ),
                ("distance_km", models.DecimalField(blank=True, decimal_places=2, max_digits=8, null=True)),
                ("calories_burned", models.PositiveIntegerField()),
                ("date", models.DateField()),
                ("notes", models.CharField(blank=True, max_length=500, null=True)),
                (
                    "heart_rate",
                    models.PositiveSmallIntegerField(
                        blank=True,
                        null=True,
                        validators=[
                            django.core.validators.MinValueValidator(40),
                            django.core.validators.MaxValueValidator(220),
                        ],
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name_plural": "activities",
                "ordering": ["-date", "-id"],
                "indexes": [models.Index(fields=["date"], name="activity_date_idx")],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(duration_minutes__gte=1), name="activity_duration_positive"
                    ),
                    models.CheckConstraint(
                        condition=models.Q(distance_km__gte=0), name="activity_distance_non_negative"
                    ),
                    models.CheckConstraint(
                        condition=models.Q(heart_rate__gte=40, heart_rate__lte=220),
                        name="activity_heart_rate_range",
                    ),
                ],
            },
        ),
    ]
