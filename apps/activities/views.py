from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.activities import services
from apps.activities.serializers import (
    ActivityFilterQuerySerializer,
    ActivitySerializer,
    ActivityStatsSerializer,
    ActivityTotalsSerializer,
)


class ActivityViewSet(viewsets.ViewSet):
    lookup_value_regex = r"\d+"

    def list(self, request):
        query = ActivityFilterQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        activities = services.list_activities(
            exercise_type=query.validated_data.get("type"),
            date_from=query.validated_data.get("start_date"),
            date_to=query.validated_data.get("end_date"),
        )
        return Response(ActivitySerializer(activities, many=True).data)

    def create(self, request):
        serializer = ActivitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        activity = services.create_activity(data=serializer.validated_data)
        return Response(ActivitySerializer(activity).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        return Response(ActivitySerializer(services.get_activity(pk)).data)

    def update(self, request, pk=None):
        activity = services.get_activity(pk)
        serializer = ActivitySerializer(activity, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        activity = services.update_activity(activity, data=serializer.validated_data)
        return Response(ActivitySerializer(activity).data)

    def destroy(self, request, pk=None):
        services.delete_activity(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"], url_path="stats/weekly")
    def weekly_stats(self, request):
        return Response(ActivityStatsSerializer(services.weekly_stats()).data)

    @action(detail=False, methods=["get"], url_path="stats/monthly")
    def monthly_stats(self, request):
        return Response(ActivityStatsSerializer(services.monthly_stats()).data)

    @action(detail=False, methods=["get"])
    def totals(self, request):
        return Response(ActivityTotalsSerializer(services.totals()).data)
