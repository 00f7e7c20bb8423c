from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from common.models import TimeStampedModel

from .event import Event


class TicketType(TimeStampedModel):
    """A sellable ticket kind of an event. ``sold`` is derived: ``total_tickets - tickets_left``."""

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="ticket_types")
    ticket_name = models.CharField(max_length=100)
    ticket_description = models.TextField(blank=True, default="")
    ticket_image_url = models.CharField(max_length=500, blank=True, default="")
    ticket_price = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0"), validators=[MinValueValidator(Decimal("0"))]
    )
    total_tickets = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    tickets_left = models.PositiveIntegerField()
    sale_start = models.DateTimeField(null=True, blank=True)
    sale_end = models.DateTimeField(null=True, blank=True)
    free_ticket = models.BooleanField(default=False)
    buyer_pays_admin_fee = models.BooleanField(default=True)
    ticket_category = models.CharField(max_length=100, blank=True, default="")
    max_tickets_per_user = models.PositiveIntegerField(null=True, blank=True, validators=[MinValueValidator(1)])
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(tickets_left__lte=models.F("total_tickets")),
                name="ticket_type_left_within_total",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.ticket_name} for {self.event_id}"

    def clean(self) -> None:
        """Sale window must be ordered."""
        super().clean()
        if self.sale_start and self.sale_end and self.sale_start >= self.sale_end:
            raise DjangoValidationError({"sale_end": _("Sale end must be after sale start.")})

    @property
    def sold(self) -> int:
        return self.total_tickets - self.tickets_left


class TicketSummary(TimeStampedModel):
    """Sum over every ticket type of the event."""

    event = models.OneToOneField(Event, on_delete=models.CASCADE, related_name="ticket_summary")
    total_nr_tickets = models.IntegerField(default=0)
    total_nr_sold_tickets = models.IntegerField(default=0)
    total_nr_tickets_left = models.IntegerField(default=0)
    total_tickets_revenue = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0"))

    class Meta:
        verbose_name_plural = "ticket summaries"

    def __str__(self) -> str:
        return f"Ticket summary for {self.event_id}"
