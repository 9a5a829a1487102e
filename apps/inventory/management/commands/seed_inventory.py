from decimal import Decimal

from django.core.management.base import BaseCommand

from apps.inventory.models import Product


class Command(BaseCommand):
    help = "Seed demo products (idempotent by SKU)."

    def handle(self, *args, **options):
        products = [
            ("PRD-0001", "Wireless mouse", 25, 10, Decimal("19.99")),
            ("PRD-0002", "Mechanical keyboard", 4, 5, Decimal("89.90")),
            ("PRD-0003", "USB-C cable", 0, 20, Decimal("7.50")),
            ("OFF-0001", "Notebook A5", 120, 30, Decimal("3.25")),
        ]

        created_products = 0
        for sku, name, quantity, min_stock, price in products:
            _, created = Product.objects.get_or_create(
                sku=sku,
                defaults={"name": name, "quantity": quantity, "min_stock": min_stock, "price": price},
            )
            if created:
                created_products += 1

        self.stdout.write(self.style.SUCCESS(f"Seed inventory completed. products_created={created_products}"))
