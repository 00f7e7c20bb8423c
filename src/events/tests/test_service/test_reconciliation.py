"""Tests for re-summing the per-event summaries."""

import typing as t
from decimal import Decimal

import pytest

from accounts.models import VenueUser
from events import schema
from events.models import Event, GuestList, GuestListSummary, TableSummary, TicketSummary
from events.service import guest_ledger, reconciliation
from events.service.ticket_service import TicketInventory

pytestmark = pytest.mark.django_db


class TestReconcileEventSummaries:
    def test_consistent_summaries_are_left_alone(self, event: Event) -> None:
        assert reconciliation.reconcile_event_summaries(event) == []

    def test_drift_is_corrected(self, event: Event, main_list: GuestList, owner: VenueUser) -> None:
        guest_ledger.add_guest(
            event, main_list, owner, schema.GuestCreateSchema(guest_name="Ana", normal_guests=2, free_guests=1)
        )
        GuestListSummary.objects.filter(event=event).update(total_guests=99, total_normal_guests=0)
        TableSummary.objects.filter(event=event).update(total_tables=0)

        corrected = reconciliation.reconcile_event_summaries(event)

        assert sorted(corrected) == ["guest_list", "table"]
        guest_summary = GuestListSummary.objects.get(event=event)
        assert guest_summary.total_guests == 3
        assert guest_summary.total_normal_guests == 2
        assert TableSummary.objects.get(event=event).total_tables == 3

    def test_missing_ticket_summary_is_recreated(self, event: Event, owner: VenueUser) -> None:
        TicketInventory(event=event, user=owner).create(
            schema.TicketTypeCreateSchema(ticket_name="Door", total_tickets=20, ticket_price=Decimal("15"))
        )
        TicketSummary.objects.filter(event=event).delete()

        assert reconciliation.reconcile_event_summaries(event) == ["ticket"]
        assert TicketSummary.objects.get(event=event).total_nr_tickets == 20

    def test_mutation_after_the_sum_is_not_overwritten(
        self, event: Event, main_list: GuestList, owner: VenueUser, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A guest added once the rows are summed is reflected in both the rows and the summary."""
        expected_totals = reconciliation._expected_totals

        def sum_then_add_guest(event: Event) -> dict[str, t.Any]:
            totals = expected_totals(event)
            payload = schema.GuestCreateSchema(guest_name="Late", normal_guests=3)
            guest_ledger.add_guest(event, main_list, owner, payload)
            return totals

        monkeypatch.setattr(reconciliation, "_expected_totals", sum_then_add_guest)

        assert reconciliation.reconcile_event_summaries(event) == []
        summary = GuestListSummary.objects.get(event=event)
        assert summary.total_normal_guests == 3
        assert summary.total_guests == 3

    def test_no_summary_is_created_when_there_is_nothing_to_sum(self, event: Event) -> None:
        reconciliation.reconcile_event_summaries(event)

        assert not TicketSummary.objects.filter(event=event).exists()


class TestReconcileAll:
    def test_reports_corrected_events(self, event: Event) -> None:
        TableSummary.objects.filter(event=event).update(total_booked=5)

        assert reconciliation.reconcile_all() == {str(event.id): ["table"]}
        assert reconciliation.reconcile_all() == {}
