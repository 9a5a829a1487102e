from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Expense",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("description", models.CharField(max_length=200)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("FOOD", "Food"),
                            ("TRANSPORT", "Transport"),
                            ("HOUSING", "Housing"),
                            ("UTILITIES", "Utilities"),
                            ("ENTERTAINMENT", "Entertainment"),
                            ("HEALTH", "Health"),
                            ("EDUCATION", "Education"),
                            ("SHOPPING", "Shopping"),
                            ("TRAVEL", "Travel"),
                            ("OTHER", "Other"),
                        ],
                        max_length=32,
                    ),
                ),
                (
                    "payment_method",
                    models.CharField(
                        choices=[
                            ("CASH", "Cash"),
                            ("DEBIT_CARD", "Debit card"),
                            ("CREDIT_CARD", "Credit card"),
                            ("BANK_TRANSFER", "Bank transfer"),
                            ("DIGITAL_WALLET", "Digital wallet"),
                        ],
                        max_length=32,
                    ),
                ),
                ("date", models.DateField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-date", "-id"],
                "indexes": [
                    models.Index(fields=["date"], name="expense_date_idx"),
                    models.Index(fields=["category", "date"], name="expense_category_date_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("amount__gt", 0)), name="expense_amount_gt_zero"),
                ],
            },
        ),
    ]
