"""Re-sum the per-event summaries from their source rows and correct drift.

Summaries are maintained incrementally. This is the safety net: a mismatch means an
increment was lost or applied twice somewhere, and is logged loudly before being fixed.
"""

import typing as t

import structlog
from django.db import models, transaction

from events.models import Event, Guest, GuestListSummary, TableList, TableSummary, TicketSummary, TicketType
from events.service.aggregates import GuestTotals, TableTotals, TicketTotals, Totals

logger = structlog.get_logger(__name__)


SUMMARY_MODELS: dict[str, type[models.Model]] = {
    "table": TableSummary,
    "guest_list": GuestListSummary,
    "ticket": TicketSummary,
}


def _expected_totals(event: Event) -> dict[str, Totals]:
    table_totals = TableTotals()
    for items in TableList.objects.filter(event=event).values_list("items", flat=True):
        table_totals += TableTotals.from_items(items)
    return {
        "table": table_totals,
        "guest_list": GuestTotals.from_guests(Guest.objects.filter(event=event)),
        "ticket": TicketTotals.from_ticket_types(TicketType.objects.filter(event=event)),
    }


@transaction.atomic
def reconcile_event_summaries(event: Event) -> list[str]:
    """Recompute the three summaries of one event. Returns the kinds that had to be corrected.

    The summary rows are locked before the source rows are summed, so a mutation
    waiting on one of those locks is counted in neither value.
    Missing summary rows are created unless there is nothing to sum yet.
    """
    summaries = {
        kind: model._default_manager.select_for_update().filter(event=event).first()
        for kind, model in SUMMARY_MODELS.items()
    }
    corrected: list[str] = []
    for kind, expected in _expected_totals(event).items():
        manager = SUMMARY_MODELS[kind]._default_manager
        summary = summaries[kind]
        if summary is None:
            if expected.is_zero():
                continue
            manager.create(event=event, **expected.as_column_values())
            logger.warning("summary_missing", event_id=str(event.id), summary=kind)
            corrected.append(kind)
            continue
        stored = type(expected).from_summary(summary)
        if stored == expected:
            continue
        logger.warning(
            "summary_drift_detected",
            event_id=str(event.id),
            summary=kind,
            stored=stored.as_column_values(),
            recomputed=expected.as_column_values(),
        )
        manager.filter(pk=summary.pk).update(**expected.as_column_values())
        corrected.append(kind)
    return corrected


def reconcile_all(events: t.Iterable[Event] | None = None) -> dict[str, list[str]]:
    """Reconcile every event (or the given ones), one transaction per event."""
    events = Event.objects.all().iterator() if events is None else events
    corrected: dict[str, list[str]] = {}
    for event in events:
        if kinds := reconcile_event_summaries(event):
            corrected[str(event.id)] = kinds
    logger.info("summaries_reconciled", corrected_events=len(corrected))
    return corrected
