from django.contrib import admin

from apps.activities.models import Activity


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = ("exercise_type", "date", "duration_minutes", "distance_km", "calories_burned", "heart_rate")
    list_filter = ("exercise_type", "date")
    search_fields = ("exercise_type", "notes")
    date_hierarchy = "date"
