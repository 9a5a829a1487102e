from datetime import date, timedelta
from decimal import Decimal
from unittest import mock

from django.db import DatabaseError
from django.utils import timezone
from rest_framework.test import APITestCase

from apps.expenses import services
from apps.expenses.models import Expense, ExpenseCategory, PaymentMethod


def make_expense(amount, category=ExpenseCategory.FOOD, expense_date=None, payment_method=PaymentMethod.CASH, description="Groceries"):
    return Expense.objects.create(
        description=description,
        amount=Decimal(amount),
        category=category,
        payment_method=payment_method,
        date=expense_date or timezone.localdate(),
    )


class ExpensesApiTests(APITestCase):
    def payload(self, **overrides):
        data = {
            "description": "Lunch",
            "amount": 25.50,
            "category": "FOOD",
            "date": str(timezone.localdate()),
            "paymentMethod": "CREDIT_CARD",
        }
        data.update(overrides)
        return data

    def test_create_and_fetch_expense(self):
        created = self.client.post("/api/expenses", self.payload(), format="json")
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.data["amount"], Decimal("25.50"))
        self.assertEqual(created.data["paymentMethod"], "CREDIT_CARD")
        self.assertIsNotNone(created.data["createdAt"])
        self.assertIsNotNone(created.data["updatedAt"])

        fetched = self.client.get(f"/api/expenses/{created.data['id']}")
        self.assertEqual(fetched.status_code, 200)
        self.assertEqual(fetched.data, created.data)

    def test_future_date_is_rejected(self):
        tomorrow = timezone.localdate() + timedelta(days=1)
        response = self.client.post("/api/expenses", self.payload(date=str(tomorrow)), format="json")
        self.assertEqual(response.status_code, 400)
        self.assertIn("date", response.data["errors"])
        self.assertEqual(response.data["status"], 400)
        self.assertEqual(response.data["path"], "/api/expenses")
        self.assertEqual(Expense.objects.count(), 0)

    def test_amount_boundaries(self):
        ok = self.client.post("/api/expenses", self.payload(amount="0.01"), format="json")
        self.assertEqual(ok.status_code, 201)

        for amount in ("0.00", "0.001", "-5.00"):
            response = self.client.post("/api/expenses", self.payload(amount=amount), format="json")
            self.assertEqual(response.status_code, 400, amount)
            self.assertIn("amount", response.data["errors"])
        self.assertEqual(Expense.objects.count(), 1)

    def test_missing_fields_and_unknown_enums_are_rejected(self):
        response = self.client.post(
            "/api/expenses",
            {"description": "ab", "amount": "10.00", "category": "PETS", "date": str(timezone.localdate())},
            format="json",
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(set(response.data["errors"]), {"description", "category", "paymentMethod"})
        self.assertEqual(response.data["message"], "Validation failed")

    def test_update_is_full_replacement_and_keeps_created_at(self):
        expense = make_expense("10.00", expense_date=timezone.localdate() - timedelta(days=3))
        original_created_at = expense.created_at

        partial = self.client.put(f"/api/expenses/{expense.id}", {"amount": "12.00"}, format="json")
        self.assertEqual(partial.status_code, 400)

        updated = self.client.put(
            f"/api/expenses/{expense.id}",
            self.payload(description="Dinner", amount="40.10", category="ENTERTAINMENT", paymentMethod="CASH"),
            format="json",
        )
        self.assertEqual(updated.status_code, 200)
        expense.refresh_from_db()
        self.assertEqual(expense.description, "Dinner")
        self.assertEqual(expense.amount, Decimal("40.10"))
        self.assertEqual(expense.category, ExpenseCategory.ENTERTAINMENT)
        self.assertEqual(expense.created_at, original_created_at)
        self.assertGreaterEqual(expense.updated_at, expense.created_at)

    def test_missing_expense_returns_404(self):
        self.assertEqual(self.client.get("/api/expenses/999").status_code, 404)
        self.assertEqual(self.client.put("/api/expenses/999", self.payload(), format="json").status_code, 404)
        response = self.client.delete("/api/expenses/999")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"], "Not Found")

    def test_delete_expense(self):
        expense = make_expense("10.00")
        response = self.client.delete(f"/api/expenses/{expense.id}")
        self.assertEqual(response.status_code, 204)
        self.assertFalse(Expense.objects.filter(pk=expense.id).exists())

    def test_list_is_ordered_by_date_then_id_descending(self):
        today = timezone.localdate()
        older = make_expense("1.00", expense_date=today - timedelta(days=2))
        first_today = make_expense("2.00", expense_date=today)
        second_today = make_expense("3.00", expense_date=today)

        response = self.client.get("/api/expenses")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([item["id"] for item in response.data], [second_today.id, first_today.id, older.id])

    def test_filters_by_category_payment_method_and_range(self):
        today = timezone.localdate()
        food = make_expense("10.00", category=ExpenseCategory.FOOD, expense_date=today - timedelta(days=10))
        transport = make_expense(
            "7.25",
            category=ExpenseCategory.TRANSPORT,
            payment_method=PaymentMethod.DEBIT_CARD,
            expense_date=today,
        )

        by_category = self.client.get("/api/expenses/category/FOOD")
        self.assertEqual([item["id"] for item in by_category.data], [food.id])

        by_method = self.client.get("/api/expenses/payment-method/DEBIT_CARD")
        self.assertEqual([item["id"] for item in by_method.data], [transport.id])

        in_range = self.client.get(
            "/api/expenses/between",
            {"startDate": str(today - timedelta(days=10)), "endDate": str(today - timedelta(days=1))},
        )
        self.assertEqual([item["id"] for item in in_range.data], [food.id])

        inverted = self.client.get("/api/expenses/between", {"startDate": str(today), "endDate": str(today - timedelta(days=30))})
        self.assertEqual(inverted.status_code, 200)
        self.assertEqual(inverted.data, [])

    def test_unknown_filter_values_are_validation_errors(self):
        self.assertEqual(self.client.get("/api/expenses/category/PETS").status_code, 400)
        self.assertEqual(self.client.get("/api/expenses/payment-method/CHEQUE").status_code, 400)
        missing = self.client.get("/api/expenses/between", {"startDate": "2024-01-01"})
        self.assertEqual(missing.status_code, 400)
        self.assertIn("endDate", missing.data["errors"])

    def test_report_by_category(self):
        today = timezone.localdate()
        for amount in ("10.00", "20.00", "5.50"):
            make_expense(amount, category=ExpenseCategory.FOOD, expense_date=today)
        make_expense("7.25", category=ExpenseCategory.TRANSPORT, expense_date=today)

        response = self.client.get("/api/expenses/reports/by-category")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            [dict(row) for row in response.data],
            [
                {"category": "FOOD", "totalAmount": Decimal("35.50"), "expenseCount": 3},
                {"category": "TRANSPORT", "totalAmount": Decimal("7.25"), "expenseCount": 1},
            ],
        )

    def test_report_by_category_breaks_ties_by_name(self):
        make_expense("5.00", category=ExpenseCategory.TRANSPORT)
        make_expense("5.00", category=ExpenseCategory.HEALTH)

        response = self.client.get("/api/expenses/reports/by-category")
        self.assertEqual([row["category"] for row in response.data], ["HEALTH", "TRANSPORT"])

    def test_report_by_category_ties_on_exact_cent_totals(self):
        make_expense("0.10", category=ExpenseCategory.FOOD)
        make_expense("0.20", category=ExpenseCategory.FOOD)
        make_expense("0.30", category=ExpenseCategory.EDUCATION)

        response = self.client.get("/api/expenses/reports/by-category")
        self.assertEqual([row["category"] for row in response.data], ["EDUCATION", "FOOD"])
        self.assertEqual([row["totalAmount"] for row in response.data], [Decimal("0.30"), Decimal("0.30")])

    def test_report_by_period(self):
        make_expense("10.00", expense_date=date(2024, 3, 1))
        make_expense("10.00", expense_date=date(2024, 3, 15))
        make_expense("10.01", expense_date=date(2024, 3, 31))
        make_expense("99.00", expense_date=date(2024, 4, 1))

        response = self.client.get("/api/expenses/reports/period", {"startDate": "2024-03-01", "endDate": "2024-03-31"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["startDate"], "2024-03-01")
        self.assertEqual(response.data["endDate"], "2024-03-31")
        self.assertEqual(response.data["totalAmount"], Decimal("30.01"))
        self.assertEqual(response.data["expenseCount"], 3)
        self.assertEqual(response.data["averageExpense"], Decimal("10.00"))

    def test_report_by_period_without_expenses(self):
        response = self.client.get("/api/expenses/reports/period", {"startDate": "2020-01-01", "endDate": "2020-01-31"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["totalAmount"], Decimal("0.00"))
        self.assertEqual(response.data["expenseCount"], 0)
        self.assertEqual(response.data["averageExpense"], Decimal("0.00"))

    def test_current_month_report(self):
        today = timezone.localdate()
        first_of_month = today.replace(day=1)
        make_expense("30.00", category=ExpenseCategory.FOOD, expense_date=first_of_month)
        make_expense("12.00", category=ExpenseCategory.TRANSPORT, expense_date=today)
        make_expense("12.00", category=ExpenseCategory.HEALTH, expense_date=today)
        make_expense("500.00", category=ExpenseCategory.HOUSING, expense_date=first_of_month - timedelta(days=1))

        response = self.client.get("/api/expenses/reports/current-month")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["month"], services.MONTH_NAMES[today.month - 1])
        self.assertEqual(response.data["year"], today.year)
        self.assertEqual(response.data["totalAmount"], Decimal("54.00"))
        self.assertEqual(response.data["expenseCount"], 3)
        self.assertEqual(response.data["mostExpensiveCategory"], "FOOD")
        self.assertEqual(response.data["leastExpensiveCategory"], "HEALTH")

    def test_current_month_report_when_empty(self):
        response = self.client.get("/api/expenses/reports/current-month")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["expenseCount"], 0)
        self.assertIsNone(response.data["mostExpensiveCategory"])
        self.assertIsNone(response.data["leastExpensiveCategory"])

    def test_store_failures_surface_as_internal_errors(self):
        with mock.patch("apps.expenses.services.list_expenses", side_effect=DatabaseError("connection lost")):
            response = self.client.get("/api/expenses")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data["error"], "Internal Server Error")


class ExpenseServiceTests(APITestCase):
    def test_category_totals_add_up_to_global_sum(self):
        amounts = ["10.10", "0.01", "99.99", "45.00", "3.33"]
        categories = [ExpenseCategory.FOOD, ExpenseCategory.OTHER, ExpenseCategory.FOOD, ExpenseCategory.TRAVEL, ExpenseCategory.OTHER]
        for amount, category in zip(amounts, categories):
            make_expense(amount, category=category)

        rows = services.report_by_category()
        self.assertEqual(sum(row["total_amount"] for row in rows), sum(Decimal(amount) for amount in amounts))
        self.assertEqual(sum(row["expense_count"] for row in rows), len(amounts))

    def test_average_rounds_half_up(self):
        self.assertEqual(services.average_amount(Decimal("0.05"), 2), Decimal("0.03"))
        self.assertEqual(services.average_amount(Decimal("10.00"), 3), Decimal("3.33"))
        self.assertEqual(services.average_amount(Decimal("0.00"), 0), Decimal("0.00"))

    def test_current_month_report_for_given_day(self):
        make_expense("8.00", category=ExpenseCategory.SHOPPING, expense_date=date(2024, 11, 30))
        make_expense("9.00", category=ExpenseCategory.FOOD, expense_date=date(2024, 11, 1))
        make_expense("9.00", category=ExpenseCategory.EDUCATION, expense_date=date(2024, 11, 19))

        report = services.current_month_report(today=date(2024, 11, 19))
        self.assertEqual(report["month"], "NOVEMBER")
        self.assertEqual(report["year"], 2024)
        self.assertEqual(report["total_amount"], Decimal("26.00"))
        self.assertEqual(report["most_expensive_category"], "EDUCATION")
        self.assertEqual(report["least_expensive_category"], "SHOPPING")

    def test_month_bounds_handles_leap_years(self):
        self.assertEqual(services.month_bounds(date(2024, 2, 10)), (date(2024, 2, 1), date(2024, 2, 29)))
        self.assertEqual(services.month_bounds(date(2023, 12, 31)), (date(2023, 12, 1), date(2023, 12, 31)))
