"""Admin classes for ticket types."""

from django.contrib import admin

from events import models
from events.admin.base import EventLinkMixin


@admin.register(models.TicketType)
class TicketTypeAdmin(EventLinkMixin, admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["ticket_name", "event_link", "ticket_price", "total_tickets", "tickets_left", "sold"]
    search_fields = ["ticket_name", "event__name"]
    readonly_fields = ["total_tickets", "tickets_left", "ticket_price", "created_by"]

    @admin.display(description="Sold")
    def sold(self, obj: models.TicketType) -> int:
        return obj.sold
