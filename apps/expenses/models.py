from django.db import models

from apps.expenses.querysets import ExpenseQuerySet


class ExpenseCategory(models.TextChoices):
    FOOD = "FOOD", "Food"
    TRANSPORT = "TRANSPORT", "Transport"
    HOUSING = "HOUSING", "Housing"
    UTILITIES = "UTILITIES", "Utilities"
    ENTERTAINMENT = "ENTERTAINMENT", "Entertainment"
    HEALTH = "HEALTH", "Health"
    EDUCATION = "EDUCATION", "Education"
    SHOPPING = "SHOPPING", "Shopping"
    TRAVEL = "TRAVEL", "Travel"
    OTHER = "OTHER", "Other"


class PaymentMethod(models.TextChoices):
    CASH = "CASH", "Cash"
    DEBIT_CARD = "DEBIT_CARD", "Debit card"
    CREDIT_CARD = "CREDIT_CARD", "Credit card"
    BANK_TRANSFER = "BANK_TRANSFER", "Bank transfer"
    DIGITAL_WALLET = "DIGITAL_WALLET", "Digital wallet"


class Expense(models.Model):
    description = models.CharField(max_length=200)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    category = models.CharField(max_length=32, choices=ExpenseCategory.choices)
    payment_method = models.CharField(max_length=32, choices=PaymentMethod.choices)
    date = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ExpenseQuerySet.as_manager()

    class Meta:
        ordering = ["-date", "-id"]
        indexes = [
            models.Index(fields=["date"], name="expense_date_idx"),
            models.Index(fields=["category", "date"], name="expense_category_date_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(amount__gt=0), name="expense_amount_gt_zero"),
        ]

    def __str__(self):
        return f"{self.date} {self.category} {self.amount}"
