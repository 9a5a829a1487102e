import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("sku", models.CharField(max_length=8, unique=True)),
                ("name", models.CharField(db_index=True, max_length=100)),
                ("description", models.CharField(blank=True, max_length=500, null=True)),
                (
                    "quantity",
                    models.PositiveIntegerField(
                        default=0, validators=[django.core.validators.MaxValueValidator(2147483647)]
                    ),
                ),
                (
                    "min_stock",
                    models.PositiveIntegerField(
                        default=0, validators=[django.core.validators.MaxValueValidator(2147483647)]
                    ),
                ),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-updated_at", "-id"],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("quantity__gte", 0)), name="product_quantity_gte_zero"),
                    models.CheckConstraint(condition=models.Q(("min_stock__gte", 0)), name="product_min_stock_gte_zero"),
                    models.CheckConstraint(condition=models.Q(("price__gt", 0)), name="product_price_gt_zero"),
                ],
            },
        ),
    ]
