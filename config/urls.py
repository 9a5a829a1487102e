from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("health/", include("apps.health.urls")),
    path("api/", include("apps.api_urls")),
]

handler404 = "apps.common.views.not_found"
handler500 = "apps.common.views.server_error"
