"""Base admin components: link mixins and read-only summary inlines."""

import typing as t

from django.contrib import admin
from django.http import HttpRequest
from django.urls import reverse
from django.utils.html import format_html

from events import models


class CompanyLinkMixin:
    """Mixin to add a link to a company."""

    def company_link(self, obj: t.Any) -> str | None:
        if not getattr(obj, "company", None):
            return None
        url = reverse("admin:events_company_change", args=[obj.company.id])
        return format_html('<a href="{}">{}</a>', url, obj.company.name)

    company_link.short_description = "Company"  # type: ignore[attr-defined]


class EventLinkMixin:
    """Mixin to add a link to an event."""

    def event_link(self, obj: t.Any) -> str | None:
        if not getattr(obj, "event", None):
            return None
        url = reverse("admin:events_event_change", args=[obj.event.id])
        return format_html('<a href="{}">{}</a>', url, obj.event.name)

    event_link.short_description = "Event"  # type: ignore[attr-defined]


class ReadOnlyInline(admin.StackedInline):  # type: ignore[type-arg]
    """Summaries are only written through F-expression deltas and reconciliation."""

    extra = 0
    can_delete = False

    def has_add_permission(self, request: HttpRequest, obj: t.Any = None) -> bool:
        return False

    def has_change_permission(self, request: HttpRequest, obj: t.Any = None) -> bool:
        return False


class TableSummaryInline(ReadOnlyInline):
    model = models.TableSummary


class GuestListSummaryInline(ReadOnlyInline):
    model = models.GuestListSummary


class TicketSummaryInline(ReadOnlyInline):
    model = models.TicketSummary


class EventReferenceInline(admin.TabularInline):  # type: ignore[type-arg]
    model = models.EventReference
    extra = 0
    fields = ["kind", "ref_id", "name", "position"]
    readonly_fields = ["kind", "ref_id", "name", "position"]
    can_delete = False

    def has_add_permission(self, request: HttpRequest, obj: t.Any = None) -> bool:
        return False
