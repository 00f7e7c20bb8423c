"""Admin interface for accounts app."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from accounts.models import VenueUser


@admin.register(VenueUser)
class VenueUserAdmin(UserAdmin):  # type: ignore[type-arg]
    list_display = ["username", "email", "preferred_name", "is_staff", "is_active"]
    search_fields = ["username", "email", "preferred_name", "first_name", "last_name"]
    fieldsets = (
        *UserAdmin.fieldsets,  # type: ignore[misc]
        ("Profile", {"fields": ("preferred_name", "phone_number")}),
    )
