from decimal import Decimal

from django.db import models
from django.db.models import Count, DecimalField, Sum
from django.db.models.functions import Coalesce


MONEY_TOTAL_FIELD = DecimalField(max_digits=16, decimal_places=2)
CENTS = Decimal("0.01")


class ExpenseQuerySet(models.QuerySet):
    def newest_first(self):
        return self.order_by("-date", "-id")

    def between(self, date_from, date_to):
        if date_from > date_to:
            return self.none()
        return self.filter(date__gte=date_from, date__lte=date_to)

    def totals(self):
        return self.aggregate(
            total_amount=Coalesce(Sum("amount"), 0, output_field=MONEY_TOTAL_FIELD),
            expense_count=Count("id"),
        )

    def totals_by_category(self):
        """Per-category totals, largest first with ties broken by category name.

        Sorted on the Decimal totals rather than in SQL: SQLite sums decimals
        as floats, so equal totals would not compare equal there.
        """
        rows = (
            self.order_by()
            .values("category")
            .annotate(
                total_amount=Coalesce(Sum("amount"), 0, output_field=MONEY_TOTAL_FIELD),
                expense_count=Count("id"),
            )
        )
        rows = [{**row, "total_amount": Decimal(row["total_amount"]).quantize(CENTS)} for row in rows]
        return sorted(rows, key=lambda row: (-row["total_amount"], row["category"]))
