"""Tests for the ticket inventory of an event."""

import uuid
from decimal import Decimal

import pytest

from accounts.models import VenueUser
from common.exceptions import InvalidInputError, NotFoundError
from events import schema
from events.exceptions import HasSoldTicketsError, NoChangesError
from events.models import Event, TicketSummary, TicketType
from events.service.ticket_service import TicketInventory

pytestmark = pytest.mark.django_db


@pytest.fixture
def inventory(event: Event, owner: VenueUser) -> TicketInventory:
    return TicketInventory(event=event, user=owner)


@pytest.fixture
def early_bird(inventory: TicketInventory) -> TicketType:
    payload = schema.TicketTypeCreateSchema(ticket_name="Early bird", total_tickets=100, ticket_price=Decimal("10"))
    return inventory.create(payload)


def _sell(ticket_type: TicketType, count: int) -> None:
    TicketType.objects.filter(pk=ticket_type.pk).update(tickets_left=ticket_type.tickets_left - count)


class TestCreate:
    def test_all_tickets_start_available(self, early_bird: TicketType) -> None:
        assert early_bird.tickets_left == 100
        assert early_bird.sold == 0

    def test_first_ticket_type_creates_the_summary(self, event: Event, early_bird: TicketType) -> None:
        summary = TicketSummary.objects.get(event=event)
        assert summary.total_nr_tickets == 100
        assert summary.total_nr_tickets_left == 100
        assert summary.total_nr_sold_tickets == 0

    def test_further_ticket_types_add_to_the_summary(
        self, event: Event, inventory: TicketInventory, early_bird: TicketType
    ) -> None:
        inventory.create(schema.TicketTypeCreateSchema(ticket_name="Door", total_tickets=50))

        summary = TicketSummary.objects.get(event=event)
        assert summary.total_nr_tickets == 150
        assert summary.total_nr_tickets_left == 150

    def test_sale_window_must_be_ordered(self, event: Event) -> None:
        with pytest.raises(ValueError):
            schema.TicketTypeCreateSchema(
                ticket_name="Door", total_tickets=1, sale_start=event.start, sale_end=event.start
            )


class TestUpdate:
    def test_total_change_moves_tickets_left(
        self, event: Event, inventory: TicketInventory, early_bird: TicketType
    ) -> None:
        updated = inventory.update(early_bird.id, schema.TicketTypeUpdateSchema(total_tickets=150))

        assert updated.tickets_left == 150
        summary = TicketSummary.objects.get(event=event)
        assert summary.total_nr_tickets == 150
        assert summary.total_nr_tickets_left == 150

    def test_sold_tickets_are_kept(self, inventory: TicketInventory, early_bird: TicketType) -> None:
        _sell(early_bird, 10)

        updated = inventory.update(early_bird.id, schema.TicketTypeUpdateSchema(total_tickets=50))

        assert updated.tickets_left == 40
        assert updated.sold == 10

    def test_total_below_sold_is_rejected(self, inventory: TicketInventory, early_bird: TicketType) -> None:
        _sell(early_bird, 10)

        with pytest.raises(InvalidInputError, match="cannot be lower than the 10 tickets already sold"):
            inventory.update(early_bird.id, schema.TicketTypeUpdateSchema(total_tickets=5))

    def test_no_changes(self, inventory: TicketInventory, early_bird: TicketType) -> None:
        with pytest.raises(NoChangesError):
            inventory.update(early_bird.id, schema.TicketTypeUpdateSchema(ticket_name="Early bird"))

    def test_unknown_ticket(self, inventory: TicketInventory, early_bird: TicketType) -> None:
        with pytest.raises(NotFoundError, match="Ticket not found"):
            inventory.update(uuid.uuid4(), schema.TicketTypeUpdateSchema(total_tickets=5))


class TestRemove:
    def test_unsold_ticket_type_is_removed(
        self, event: Event, inventory: TicketInventory, early_bird: TicketType
    ) -> None:
        removed = inventory.remove(early_bird.id)

        assert removed.tickets == 100
        assert not TicketType.objects.filter(pk=early_bird.pk).exists()
        summary = TicketSummary.objects.get(event=event)
        assert summary.total_nr_tickets == 0
        assert summary.total_nr_tickets_left == 0

    def test_ticket_type_with_sales_cannot_be_removed(
        self, inventory: TicketInventory, early_bird: TicketType
    ) -> None:
        _sell(early_bird, 10)

        with pytest.raises(HasSoldTicketsError) as exc_info:
            inventory.remove(early_bird.id)

        assert exc_info.value.message == (
            'Cannot remove ticket "Early bird" because 10 tickets have been sold. Consider closing the sale instead.'
        )
        assert TicketType.objects.filter(pk=early_bird.pk).exists()
