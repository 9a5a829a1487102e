from decimal import Decimal

from django.utils import timezone
from rest_framework import serializers

from apps.expenses.models import Expense, ExpenseCategory, PaymentMethod


class ExpenseSerializer(serializers.ModelSerializer):
    description = serializers.CharField(min_length=3, max_length=200)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))
    category = serializers.ChoiceField(choices=ExpenseCategory.choices)
    paymentMethod = serializers.ChoiceField(source="payment_method", choices=PaymentMethod.choices)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Expense
        fields = [
            "id",
            "description",
            "amount",
            "category",
            "paymentMethod",
            "date",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = ["id"]

    def validate_date(self, value):
        if value > timezone.localdate():
            raise serializers.ValidationError("date cannot be in the future")
        return value


class DateRangeQuerySerializer(serializers.Serializer):
    startDate = serializers.DateField(source="start_date")
    endDate = serializers.DateField(source="end_date")


class CategoryReportSerializer(serializers.Serializer):
    category = serializers.CharField()
    totalAmount = serializers.DecimalField(source="total_amount", max_digits=16, decimal_places=2)
    expenseCount = serializers.IntegerField(source="expense_count")


class PeriodReportSerializer(serializers.Serializer):
    startDate = serializers.DateField(source="start_date")
    endDate = serializers.DateField(source="end_date")
    totalAmount = serializers.DecimalField(source="total_amount", max_digits=16, decimal_places=2)
    expenseCount = serializers.IntegerField(source="expense_count")
    averageExpense = serializers.DecimalField(source="average_expense", max_digits=16, decimal_places=2)


class MonthlyReportSerializer(serializers.Serializer):
    month = serializers.CharField()
    year = serializers.IntegerField()
    totalAmount = serializers.DecimalField(source="total_amount", max_digits=16, decimal_places=2)
    expenseCount = serializers.IntegerField(source="expense_count")
    mostExpensiveCategory = serializers.CharField(source="most_expensive_category", allow_null=True)
    leastExpensiveCategory = serializers.CharField(source="least_expensive_category", allow_null=True)
