"""Admin classes for events, their table lists and guest lists."""

from django.contrib import admin

from events import models
from events.admin.base import (
    CompanyLinkMixin,
    EventLinkMixin,
    EventReferenceInline,
    GuestListSummaryInline,
    TableSummaryInline,
    TicketSummaryInline,
)


@admin.register(models.Event)
class EventAdmin(CompanyLinkMixin, admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["name", "company_link", "start", "end"]
    list_filter = ["company"]
    search_fields = ["name", "company__name"]
    readonly_fields = ["recurring", "created_by", "updated_by"]
    date_hierarchy = "start"
    inlines = [EventReferenceInline, TableSummaryInline, GuestListSummaryInline, TicketSummaryInline]


@admin.register(models.TableList)
class TableListAdmin(EventLinkMixin, admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["layout_name", "event_link", "created_at"]
    search_fields = ["layout_name", "event__name"]
    readonly_fields = ["event", "layout", "layout_name"]


@admin.register(models.Guest)
class GuestAdmin(EventLinkMixin, admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = [
        "guest_name",
        "event_link",
        "guest_list",
        "normal_guests",
        "free_guests",
        "normal_checked_in",
        "free_checked_in",
    ]
    search_fields = ["guest_name", "event__name"]
    # counts are only changed through the API
    readonly_fields = [
        "event",
        "guest_list",
        "normal_guests",
        "free_guests",
        "normal_checked_in",
        "free_checked_in",
        "logs",
    ]


@admin.register(models.GuestListLogEntry)
class GuestListLogEntryAdmin(EventLinkMixin, admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["guest_name", "status", "added_by", "event_link", "created_at"]
    list_filter = ["status"]
    search_fields = ["guest_name", "added_by"]
    readonly_fields = ["event", "guest_name", "status", "added_by", "user", "created_at"]
