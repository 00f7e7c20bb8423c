from django.conf import settings
from django.db import models

from common.models import TimeStampedModel

from .company import CompanyGuest
from .event import Event


class GuestList(TimeStampedModel):
    """A named list of guests. Every event has a ``main`` list; additional lists are keyed by name."""

    MAIN = "main"

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="guest_lists")
    key = models.CharField(max_length=100)

    class Meta:
        ordering = ["created_at"]
        constraints = [models.UniqueConstraint(fields=["event", "key"], name="unique_event_guest_list_key")]

    def __str__(self) -> str:
        return f"{self.key} for {self.event_id}"


class Guest(TimeStampedModel):
    """One guest-list entry. ``logs`` is the entry's own append-only change history."""

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="guests")
    guest_list = models.ForeignKey(GuestList, on_delete=models.CASCADE, related_name="guests")
    company_guest = models.ForeignKey(
        CompanyGuest, on_delete=models.SET_NULL, null=True, blank=True, related_name="guest_entries"
    )
    guest_name = models.CharField(max_length=100)
    normal_guests = models.PositiveIntegerField(default=0)
    free_guests = models.PositiveIntegerField(default=0)
    normal_checked_in = models.PositiveIntegerField(default=0)
    free_checked_in = models.PositiveIntegerField(default=0)
    comment = models.CharField(max_length=500, blank=True, default="")
    categories = models.JSONField(default=list, blank=True)
    logs = models.JSONField(default=list, blank=True)

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(normal_checked_in__lte=models.F("normal_guests")),
                name="guest_normal_checked_in_within_count",
            ),
            models.CheckConstraint(
                condition=models.Q(free_checked_in__lte=models.F("free_guests")),
                name="guest_free_checked_in_within_count",
            ),
        ]
        indexes = [models.Index(fields=["event", "guest_list"], name="idx_guest_event_list")]

    def __str__(self) -> str:
        return self.guest_name


class GuestListSummary(TimeStampedModel):
    """Sum over every guest of the event, across all of its guest lists."""

    event = models.OneToOneField(Event, on_delete=models.CASCADE, related_name="guest_list_summary")
    total_guests = models.IntegerField(default=0)
    total_checked_in = models.IntegerField(default=0)
    total_normal_guests = models.IntegerField(default=0)
    total_free_guests = models.IntegerField(default=0)
    normal_guests_checked_in = models.IntegerField(default=0)
    free_guests_checked_in = models.IntegerField(default=0)

    class Meta:
        verbose_name_plural = "guest list summaries"

    def __str__(self) -> str:
        return f"Guest list summary for {self.event_id}"


class GuestListLogEntry(TimeStampedModel):
    """Append-only audit trail of guest-list mutations for an event."""

    class Status(models.TextChoices):
        ADDED = "added", "Added"
        UPDATED = "updated", "Updated"
        CHECKED_IN = "checked_in", "Checked in"
        DELETED = "deleted", "Deleted"

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="guest_list_log")
    guest_name = models.CharField(max_length=100)
    status = models.CharField(max_length=20, choices=Status.choices)
    added_by = models.CharField(max_length=255)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )

    class Meta:
        ordering = ["created_at"]
        verbose_name_plural = "guest list log entries"

    def __str__(self) -> str:
        return f"{self.guest_name} {self.status}"


class GuestDraft(TimeStampedModel):
    """Unsent bulk-add text an operator is still typing."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="guest_drafts")
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="guest_drafts")
    text = models.TextField(blank=True, default="")

    class Meta:
        constraints = [models.UniqueConstraint(fields=["user", "event"], name="unique_user_event_guest_draft")]
