import typing as t
from uuid import UUID

import structlog

from accounts.models import VenueUser
from common.exceptions import InvalidInputError, NotFoundError
from common.transactions import retry_on_conflict
from events import schema
from events.exceptions import HasSoldTicketsError, NoChangesError
from events.models import Event, TicketSummary, TicketType
from events.service.activity_service import log_activity
from events.service.aggregates import TicketTotals

logger = structlog.get_logger(__name__)


class TicketInventory:
    """Ticket types of one event and the event's ticket summary."""

    def __init__(self, *, event: Event, user: VenueUser) -> None:
        """Initialize the inventory."""
        self.event = event
        self.user = user

    def _locked(self, ticket_id: UUID) -> TicketType:
        ticket_type = TicketType.objects.select_for_update().filter(event=self.event, pk=ticket_id).first()
        if ticket_type is None:
            raise NotFoundError("Ticket not found")
        return ticket_type

    def _log(self, action: str, ticket_type: TicketType, **details: t.Any) -> None:
        log_activity(
            self.event.company,
            action,
            user=self.user,
            event=self.event,
            ticket_id=ticket_type.id,
            ticket_name=ticket_type.ticket_name,
            **details,
        )

    @retry_on_conflict
    def create(self, payload: schema.TicketTypeCreateSchema) -> TicketType:
        """Create a ticket type with every ticket still available.

        The event's ticket summary is created on the first ticket type, seeded with its totals.
        """
        ticket_type = TicketType.objects.create(
            event=self.event,
            tickets_left=payload.total_tickets,
            created_by=self.user,
            **payload.model_dump(),
        )
        delta = TicketTotals.from_ticket_type(ticket_type)
        _, created = TicketSummary.objects.get_or_create(event=self.event, defaults=delta.as_column_values())
        if not created:
            delta.apply_to(TicketSummary, self.event.pk)
        self._log("ticket_created", ticket_type, total_tickets=ticket_type.total_tickets)
        logger.info(
            "ticket_type_created",
            event_id=str(self.event.id),
            ticket_id=str(ticket_type.id),
            total_tickets=ticket_type.total_tickets,
        )
        return ticket_type

    @retry_on_conflict
    def update(self, ticket_id: UUID, payload: schema.TicketTypeUpdateSchema) -> TicketType:
        """Apply the supplied fields.

        Changing ``total_tickets`` keeps the sold count and moves ``tickets_left`` with it.

        Raises:
            NotFoundError: if the ticket type does not belong to the event.
            NoChangesError: if nothing would change.
            InvalidInputError: if the new total is lower than the number already sold.
        """
        ticket_type = self._locked(ticket_id)
        supplied = payload.model_dump(exclude_unset=True, exclude_none=True)
        changes = {
            field: {"from": getattr(ticket_type, field), "to": value}
            for field, value in supplied.items()
            if getattr(ticket_type, field) != value
        }
        if not changes:
            raise NoChangesError("No changes detected")

        before = TicketTotals.from_ticket_type(ticket_type)
        sold = ticket_type.sold
        for field, change in changes.items():
            setattr(ticket_type, field, change["to"])
        if "total_tickets" in changes:
            if ticket_type.total_tickets < sold:
                raise InvalidInputError(
                    f"Total tickets cannot be lower than the {sold} tickets already sold for "
                    f'"{ticket_type.ticket_name}"'
                )
            ticket_type.tickets_left = max(0, ticket_type.total_tickets - sold)
        ticket_type.save()

        delta = TicketTotals.from_ticket_type(ticket_type) - before
        delta.apply_to(TicketSummary, self.event.pk)
        self._log("ticket_updated", ticket_type, changes=changes)
        logger.info(
            "ticket_type_updated",
            event_id=str(self.event.id),
            ticket_id=str(ticket_type.id),
            changed_fields=sorted(changes),
        )
        return ticket_type

    @retry_on_conflict
    def remove(self, ticket_id: UUID) -> TicketTotals:
        """Delete a ticket type that has not sold anything. Returns what was subtracted from the summary.

        Raises:
            NotFoundError: if the ticket type does not belong to the event.
            HasSoldTicketsError: if at least one ticket was sold.
        """
        ticket_type = self._locked(ticket_id)
        if ticket_type.sold > 0:
            raise HasSoldTicketsError(
                f'Cannot remove ticket "{ticket_type.ticket_name}" because {ticket_type.sold} tickets have been '
                "sold. Consider closing the sale instead."
            )
        removed = TicketTotals.from_ticket_type(ticket_type)
        self._log("ticket_removed", ticket_type, total_tickets=ticket_type.total_tickets, revenue=removed.revenue)
        ticket_type.delete()
        (-removed).apply_to(TicketSummary, self.event.pk)
        logger.info("ticket_type_removed", event_id=str(self.event.id), ticket_id=str(ticket_id))
        return removed
