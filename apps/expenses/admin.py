from django.contrib import admin

from apps.expenses.models import Expense


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ("description", "category", "payment_method", "amount", "date", "updated_at")
    list_filter = ("category", "payment_method", "date")
    search_fields = ("description",)
    date_hierarchy = "date"
