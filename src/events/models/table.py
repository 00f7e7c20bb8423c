from django.db import models

from common.models import TimeStampedModel

from .catalog import Layout
from .event import Event


class TableList(TimeStampedModel):
    """An event's copy of one layout.

    ``items`` keeps the layout items plus per-table occupancy fields
    (``nrOfGuests``, ``tableCheckedIn``, ``tableLimit``, ``tableSpent``, ``name``,
    ``tableBookedBy``...) and an append-only ``logs`` array on every item.
    """

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="table_lists")
    layout = models.ForeignKey(Layout, on_delete=models.PROTECT, related_name="table_lists")
    layout_name = models.CharField(max_length=100)
    items = models.JSONField(default=list, blank=True)

    class Meta:
        ordering = ["created_at"]
        constraints = [models.UniqueConstraint(fields=["event", "layout"], name="unique_event_layout")]

    def __str__(self) -> str:
        return f"{self.layout_name} for {self.event_id}"


class TableSummary(TimeStampedModel):
    """Sum over the table items of every table list of the event."""

    event = models.OneToOneField(Event, on_delete=models.CASCADE, related_name="table_summary")
    total_tables = models.IntegerField(default=0)
    total_guests = models.IntegerField(default=0)
    total_checked_in = models.IntegerField(default=0)
    total_booked = models.IntegerField(default=0)
    total_table_limit = models.IntegerField(default=0)
    total_table_spent = models.IntegerField(default=0)

    class Meta:
        verbose_name_plural = "table summaries"

    def __str__(self) -> str:
        return f"Table summary for {self.event_id}"
