from django.core.validators import MaxValueValidator
from django.db import models

from apps.inventory.querysets import ProductQuerySet

# Largest quantity a PostgreSQL ``integer`` column can hold.
MAX_STOCK_QUANTITY = 2_147_483_647


class Product(models.Model):
    sku = models.CharField(max_length=8, unique=True)
    name = models.CharField(max_length=100, db_index=True)
    description = models.CharField(max_length=500, blank=True, null=True)
    quantity = models.PositiveIntegerField(default=0, validators=[MaxValueValidator(MAX_STOCK_QUANTITY)])
    min_stock = models.PositiveIntegerField(default=0, validators=[MaxValueValidator(MAX_STOCK_QUANTITY)])
    price = models.DecimalField(max_digits=10, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProductQuerySet.as_manager()

    class Meta:
        ordering = ["-updated_at", "-id"]
        constraints = [
            models.CheckConstraint(condition=models.Q(quantity__gte=0), name="product_quantity_gte_zero"),
            models.CheckConstraint(condition=models.Q(min_stock__gte=0), name="product_min_stock_gte_zero"),
            models.CheckConstraint(condition=models.Q(price__gt=0), name="product_price_gt_zero"),
        ]

    @property
    def needs_restock(self):
        return self.quantity < self.min_stock

    def __str__(self):
        return f"{self.sku} - {self.name}"
