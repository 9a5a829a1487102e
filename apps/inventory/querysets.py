from django.db import models
from django.db.models import F
from django.db.models.functions import Lower


class ProductQuerySet(models.QuerySet):
    def low_stock(self):
        return (
            self.filter(quantity__lt=F("min_stock"))
            .annotate(shortfall=F("min_stock") - F("quantity"))
            .order_by("-shortfall", "id")
        )

    def name_contains(self, query):
        return self.filter(name__icontains=query).order_by(Lower("name"), "id")

    def price_between(self, min_price, max_price):
        if min_price > max_price:
            return self.none()
        return self.filter(price__gte=min_price, price__lte=max_price).order_by("price", "id")
