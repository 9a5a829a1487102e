from rest_framework.routers import DefaultRouter

from apps.activities.views import ActivityViewSet

router = DefaultRouter(trailing_slash=False)
router.register("activities", ActivityViewSet, basename="activity")

urlpatterns = router.urls
