from django.contrib import admin

from apps.inventory.models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("sku", "name", "quantity", "min_stock", "price", "updated_at")
    search_fields = ("sku", "name")
    readonly_fields = ("quantity", "created_at", "updated_at")

    def get_readonly_fields(self, request, obj=None):
        if obj is None:
            return ("created_at", "updated_at")
        return (*self.readonly_fields, "sku")
