"""Admin classes for layouts, categories, genres and membership cards."""

from django.contrib import admin

from events import models
from events.admin.base import CompanyLinkMixin


@admin.register(models.Layout)
class LayoutAdmin(CompanyLinkMixin, admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["name", "company_link", "tables_count", "objects_count", "archived"]
    list_filter = ["archived", "company"]
    search_fields = ["name", "company__name"]
    readonly_fields = ["archived_at", "archived_by", "created_by"]


@admin.register(models.Category)
class CategoryAdmin(CompanyLinkMixin, admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["name", "company_link"]
    search_fields = ["name"]


@admin.register(models.Genre)
class GenreAdmin(CompanyLinkMixin, admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["name", "company_link"]
    search_fields = ["name"]


@admin.register(models.MembershipCard)
class MembershipCardAdmin(CompanyLinkMixin, admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["title", "company_link", "valid_from", "valid_to"]
    search_fields = ["title"]
