import calendar
import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from django.db import transaction
from django.utils import timezone

from apps.common.exceptions import ResourceNotFound
from apps.expenses.models import Expense

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

MONTH_NAMES = (
    "JANUARY",
    "FEBRUARY",
    "MARCH",
    "APRIL",
    "MAY",
    "JUNE",
    "JULY",
    "AUGUST",
    "SEPTEMBER",
    "OCTOBER",
    "NOVEMBER",
    "DECEMBER",
)

MUTABLE_FIELDS = ("description", "amount", "category", "payment_method", "date")


def create_expense(*, data) -> Expense:
    expense = Expense.objects.create(**{field: data[field] for field in MUTABLE_FIELDS})
    logger.info("Expense %s created (%s %s)", expense.id, expense.category, expense.amount)
    return expense


def list_expenses():
    return Expense.objects.newest_first()


def get_expense(expense_id) -> Expense:
    try:
        return Expense.objects.get(pk=expense_id)
    except Expense.DoesNotExist:
        raise ResourceNotFound(f"Expense with id {expense_id} not found.")


def update_expense(expense_id, *, data) -> Expense:
    with transaction.atomic():
        expense = get_expense(expense_id)
        for field in MUTABLE_FIELDS:
            setattr(expense, field, data[field])
        expense.save(update_fields=[*MUTABLE_FIELDS, "updated_at"])
    logger.info("Expense %s updated", expense.id)
    return expense


def delete_expense(expense_id):
    deleted, _ = Expense.objects.filter(pk=expense_id).delete()
    if not deleted:
        raise ResourceNotFound(f"Expense with id {expense_id} not found.")
    logger.info("Expense %s deleted", expense_id)


def expenses_by_category(category):
    return Expense.objects.filter(category=category).newest_first()


def expenses_by_payment_method(payment_method):
    return Expense.objects.filter(payment_method=payment_method).newest_first()


def expenses_between(date_from, date_to):
    return Expense.objects.between(date_from, date_to).newest_first()


def report_by_category():
    """Totals per category, largest first; categories without expenses are omitted."""
    return Expense.objects.totals_by_category()


def average_amount(total_amount, expense_count) -> Decimal:
    if not expense_count:
        return Decimal("0.00")
    return (Decimal(total_amount) / expense_count).quantize(CENTS, rounding=ROUND_HALF_UP)


def report_by_period(date_from, date_to):
    totals = Expense.objects.between(date_from, date_to).totals()
    total_amount = Decimal(totals["total_amount"] or 0).quantize(CENTS)
    expense_count = totals["expense_count"] or 0
    return {
        "start_date": date_from,
        "end_date": date_to,
        "total_amount": total_amount,
        "expense_count": expense_count,
        "average_expense": average_amount(total_amount, expense_count),
    }


def month_bounds(day: date):
    last_day = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last_day)


def current_month_report(today=None):
    """Summary of the calendar month containing ``today`` (service-local date by default).

    Totals are derived from the per-category rows of a single query so the
    month total, count and extremes always agree with each other.
    """
    today = today or timezone.localdate()
    date_from, date_to = month_bounds(today)
    rows = Expense.objects.between(date_from, date_to).totals_by_category()

    total_amount = sum((row["total_amount"] for row in rows), Decimal("0.00"))
    expense_count = sum(row["expense_count"] for row in rows)

    most_expensive = None
    least_expensive = None
    if rows:
        most_expensive = min(rows, key=lambda row: (-row["total_amount"], row["category"]))["category"]
        least_expensive = min(rows, key=lambda row: (row["total_amount"], row["category"]))["category"]

    return {
        "month": MONTH_NAMES[today.month - 1],
        "year": today.year,
        "total_amount": total_amount,
        "expense_count": expense_count,
        "most_expensive_category": most_expensive,
        "least_expensive_category": least_expensive,
    }
