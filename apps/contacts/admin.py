from django.contrib import admin

from apps.contacts.models import Contact


@admin.register(Contact)
class ContactAdmin(admin.ModelAdmin):
    list_display = ("last_name", "first_name", "email", "phone", "updated_at")
    search_fields = ("first_name", "last_name", "email", "phone")
