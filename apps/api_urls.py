from django.urls import include, path

urlpatterns = [
    path("", include("apps.expenses.urls")),
    path("", include("apps.inventory.urls")),
    path("", include("apps.contacts.urls")),
    path("", include("apps.notes.urls")),
    path("", include("apps.activities.urls")),
]
