"""Admin classes for companies, their staff and their guest registry."""

from django.contrib import admin

from events import models
from events.admin.base import CompanyLinkMixin


class CompanyStaffInline(admin.TabularInline):  # type: ignore[type-arg]
    model = models.CompanyStaff
    extra = 0
    autocomplete_fields = ["user"]


@admin.register(models.Company)
class CompanyAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["name", "owner", "created_at"]
    search_fields = ["name", "owner__username"]
    autocomplete_fields = ["owner"]
    inlines = [CompanyStaffInline]


@admin.register(models.CompanyGuest)
class CompanyGuestAdmin(CompanyLinkMixin, admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["name", "company_link", "phone_number", "email", "total_spent", "last_spent"]
    list_filter = ["company"]
    search_fields = ["name", "phone_number", "email"]
    readonly_fields = ["visited_genres", "total_spent", "last_spent"]


@admin.register(models.ActivityLog)
class ActivityLogAdmin(CompanyLinkMixin, admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["action", "company_link", "event", "actor_name", "created_at"]
    list_filter = ["action", "company"]
    search_fields = ["action", "actor_name"]
    readonly_fields = ["company", "event", "action", "actor", "actor_name", "details", "created_at"]
    date_hierarchy = "created_at"
