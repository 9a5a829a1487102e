from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from apps.expenses import services
from apps.expenses.models import ExpenseCategory, PaymentMethod
from apps.expenses.serializers import (
    CategoryReportSerializer,
    DateRangeQuerySerializer,
    ExpenseSerializer,
    MonthlyReportSerializer,
    PeriodReportSerializer,
)


class ExpenseViewSet(viewsets.ViewSet):
    lookup_value_regex = r"\d+"

    def list(self, request):
        return Response(ExpenseSerializer(services.list_expenses(), many=True).data)

    def create(self, request):
        serializer = ExpenseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        expense = services.create_expense(data=serializer.validated_data)
        return Response(ExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        return Response(ExpenseSerializer(services.get_expense(pk)).data)

    def update(self, request, pk=None):
        serializer = ExpenseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        expense = services.update_expense(pk, data=serializer.validated_data)
        return Response(ExpenseSerializer(expense).data)

    def destroy(self, request, pk=None):
        services.delete_expense(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"], url_path=r"category/(?P<category>[^/]+)")
    def by_category(self, request, category=None):
        if category not in ExpenseCategory.values:
            raise ValidationError({"category": f'"{category}" is not a valid choice.'})
        return Response(ExpenseSerializer(services.expenses_by_category(category), many=True).data)

    @action(detail=False, methods=["get"], url_path=r"payment-method/(?P<payment_method>[^/]+)")
    def by_payment_method(self, request, payment_method=None):
        if payment_method not in PaymentMethod.values:
            raise ValidationError({"paymentMethod": f'"{payment_method}" is not a valid choice.'})
        return Response(ExpenseSerializer(services.expenses_by_payment_method(payment_method), many=True).data)

    @action(detail=False, methods=["get"])
    def between(self, request):
        query = DateRangeQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        expenses = services.expenses_between(query.validated_data["start_date"], query.validated_data["end_date"])
        return Response(ExpenseSerializer(expenses, many=True).data)

    @action(detail=False, methods=["get"], url_path="reports/by-category")
    def report_by_category(self, request):
        return Response(CategoryReportSerializer(services.report_by_category(), many=True).data)

    @action(detail=False, methods=["get"], url_path="reports/period")
    def report_by_period(self, request):
        query = DateRangeQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        report = services.report_by_period(query.validated_data["start_date"], query.validated_data["end_date"])
        return Response(PeriodReportSerializer(report).data)

    @action(detail=False, methods=["get"], url_path="reports/current-month")
    def report_current_month(self, request):
        return Response(MonthlyReportSerializer(services.current_month_report()).data)
