import typing as t

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from common.models import TimeStampedModel

from .company import Company


class EventQuerySet(models.QuerySet["Event"]):
    def with_summaries(self) -> t.Self:
        """Select the three aggregate rows along with the event."""
        return self.select_related("table_summary", "guest_list_summary", "ticket_summary")

    def with_references(self) -> t.Self:
        """Prefetch the resolved references."""
        return self.prefetch_related("references")


class Event(TimeStampedModel):
    """One concrete occurrence. A recurrence rule produces one Event per matching day.

    ``recurring`` holds the rule the event was expanded from, if any:
    ``{"is_recurring", "start_date", "end_date", "days_of_week", "original_event_name"}``.
    """

    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name="events")
    name = models.CharField(max_length=255, db_index=True)
    start = models.DateTimeField(db_index=True)
    end = models.DateTimeField()
    recurring = models.JSONField(null=True, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )

    objects = EventQuerySet.as_manager()

    class Meta:
        ordering = ["start"]
        constraints = [
            models.CheckConstraint(condition=models.Q(start__lt=models.F("end")), name="event_start_before_end"),
        ]
        indexes = [models.Index(fields=["company", "start"], name="idx_event_company_start")]

    def __str__(self) -> str:
        return self.name

    def clean(self) -> None:
        """Start must precede end."""
        super().clean()
        if self.start and self.end and self.start >= self.end:
            raise DjangoValidationError({"end": _("End must be after start.")})

    def references_of(self, kind: "EventReference.Kind") -> list[dict[str, str]]:
        """The ``{id, name}`` pairs of one reference kind, in their original order."""
        return [
            {"id": str(ref.ref_id), "name": ref.name}
            for ref in sorted(self.references.all(), key=lambda r: r.position)
            if ref.kind == kind
        ]


class EventReference(TimeStampedModel):
    """A cross-entity id stored with the display name it had when it was written."""

    class Kind(models.TextChoices):
        LAYOUT = "layout", "Layout"
        CATEGORY = "category", "Category"
        MEMBERSHIP_CARD = "membership_card", "Membership card"
        GENRE = "genre", "Genre"

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="references")
    kind = models.CharField(max_length=20, choices=Kind.choices)
    ref_id = models.UUIDField(db_index=True)
    name = models.CharField(max_length=255)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["kind", "position"]
        constraints = [
            models.UniqueConstraint(fields=["event", "kind", "ref_id"], name="unique_event_reference"),
        ]

    def __str__(self) -> str:
        return f"{self.kind}:{self.name}"
