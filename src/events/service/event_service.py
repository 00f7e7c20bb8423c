"""Event provisioning, update and deletion.

References and layouts are resolved before the transaction starts, so a bad id
leaves no trace. Inside the transaction an event is created together with all of
its dependent rows, or not at all.
"""

import dataclasses
import typing as t
from datetime import datetime

import structlog

from accounts.models import VenueUser
from common.exceptions import InvalidInputError
from common.transactions import retry_on_conflict
from events import schema
from events.models import (
    Company,
    Event,
    EventReference,
    Guest,
    GuestList,
    GuestListSummary,
    Layout,
    TableSummary,
)
from events.service import layout_diff, recurrence, references
from events.service.activity_service import log_activity
from events.service.aggregates import GuestTotals, TableTotals
from events.service.references import Reference

logger = structlog.get_logger(__name__)

Kind = EventReference.Kind

# payload field -> reference kind
REFERENCE_FIELDS: dict[str, str] = {
    "table_layouts": Kind.LAYOUT,
    "categories": Kind.CATEGORY,
    "membership_cards": Kind.MEMBERSHIP_CARD,
    "genres": Kind.GENRE,
}


@dataclasses.dataclass(frozen=True)
class PlannedEvent:
    name: str
    start: datetime
    end: datetime
    recurring: dict[str, t.Any] | None = None


def plan_instances(payload: schema.EventCreateSchema) -> list[PlannedEvent]:
    """The concrete events a create request expands to."""
    rule = payload.recurring
    if rule is None or not rule.is_recurring:
        return [PlannedEvent(name=payload.name, start=payload.start, end=payload.end)]

    descriptor = {
        "is_recurring": True,
        "start_date": rule.start_date.isoformat(),
        "end_date": rule.end_date.isoformat(),
        "days_of_week": sorted(set(rule.days_of_week)),
        "original_event_name": payload.name,
    }
    return [
        PlannedEvent(
            name=recurrence.instance_name(payload.name, occurrence.day),
            start=occurrence.start,
            end=occurrence.end,
            recurring=descriptor,
        )
        for occurrence in recurrence.expand(
            payload.start,
            payload.end,
            start_date=rule.start_date,
            end_date=rule.end_date,
            days_of_week=rule.days_of_week,
        )
    ]


def _layouts(resolved: dict[str, list[Reference]]) -> list[Layout]:
    return [t.cast(Layout, ref.instance) for ref in resolved.get(Kind.LAYOUT, [])]


def create_events(company: Company, user: VenueUser, payload: schema.EventCreateSchema) -> list[Event]:
    """Create one event, or one per matching day of a recurrence rule.

    Returns an empty list when the recurrence window contains no matching weekday.

    Raises:
        ReferenceNotFoundError: if a supplied layout, category, card or genre id does not resolve.
    """
    resolved = references.resolve_supplied(
        company, {kind: getattr(payload, field) for field, kind in REFERENCE_FIELDS.items()}
    )
    planned = plan_instances(payload)
    if not planned:
        logger.info("event_recurrence_empty", company_id=str(company.id), name=payload.name)
        return []
    return _provision(company, user, planned, resolved, payload.additional_guest_lists)


@retry_on_conflict
def _provision(
    company: Company,
    user: VenueUser,
    planned: list[PlannedEvent],
    resolved: dict[str, list[Reference]],
    additional_guest_lists: list[str],
) -> list[Event]:
    events = []
    for plan in planned:
        event = Event.objects.create(
            company=company,
            name=plan.name,
            start=plan.start,
            end=plan.end,
            recurring=plan.recurring,
            created_by=user,
            updated_by=user,
        )
        references.replace_references(event, resolved)

        table_totals = TableTotals()
        for layout in _layouts(resolved):
            table_list = layout_diff.create_table_list(event, layout, user, action="created", status="Table created")
            table_totals += TableTotals.from_items(table_list.items)
        TableSummary.objects.create(event=event, **table_totals.as_column_values())

        GuestList.objects.create(event=event, key=GuestList.MAIN)
        for key in additional_guest_lists:
            GuestList.objects.create(event=event, key=key)
        GuestListSummary.objects.create(event=event)

        log_activity(company, "event_created", user=user, event=event, event_name=event.name)
        logger.info(
            "event_provisioned",
            event_id=str(event.id),
            company_id=str(company.id),
            table_lists=len(resolved.get(Kind.LAYOUT, [])),
            guest_lists=1 + len(additional_guest_lists),
            **table_totals.as_column_values(),
        )
        events.append(event)
    return events


def update_event(event: Event, user: VenueUser, payload: schema.EventUpdateSchema) -> Event:
    """Change the supplied fields of an event.

    Supplied reference lists replace the stored ones; supplied layouts are diffed
    against the event's table lists; supplied guest list names are diffed against the
    event's additional lists.

    Raises:
        InvalidInputError: if the resulting start is not before the resulting end.
        ReferenceNotFoundError: if a supplied id does not resolve.
    """
    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    start = data.get("start", event.start)
    end = data.get("end", event.end)
    if start >= end:
        raise InvalidInputError("End must be after start.")
    resolved = references.resolve_supplied(
        event.company, {kind: data.get(field) for field, kind in REFERENCE_FIELDS.items()}
    )
    return _apply_update(event, user, data, resolved)


@retry_on_conflict
def _apply_update(
    event: Event, user: VenueUser, data: dict[str, t.Any], resolved: dict[str, list[Reference]]
) -> Event:
    event = Event.objects.select_for_update().get(pk=event.pk)
    changed: list[str] = []
    for field in ("name", "start", "end"):
        if field in data and getattr(event, field) != data[field]:
            setattr(event, field, data[field])
            changed.append(field)

    if changed_references := references.changed_kinds(event, resolved):
        references.replace_references(event, changed_references)
        changed.extend(field for field, kind in REFERENCE_FIELDS.items() if kind in changed_references)
    if Kind.LAYOUT in resolved:
        layout_diff.apply(event, user, _layouts(resolved))
    if "additional_guest_lists" in data and _sync_guest_lists(event, data["additional_guest_lists"]):
        changed.append("additional_guest_lists")

    if changed:
        event.updated_by = user
        event.save()
        log_activity(event.company, "event_updated", user=user, event=event, changed_fields=changed)
        logger.info("event_updated", event_id=str(event.id), changed_fields=changed)
    return event


def _sync_guest_lists(event: Event, names: list[str]) -> bool:
    """Create missing additional lists and drop the ones no longer named. ``main`` is never dropped."""
    existing = {guest_list.key: guest_list for guest_list in event.guest_lists.exclude(key=GuestList.MAIN)}
    removed = [guest_list for key, guest_list in existing.items() if key not in names]
    added = [key for key in names if key not in existing]

    for guest_list in removed:
        totals = GuestTotals.from_guests(Guest.objects.select_for_update().filter(guest_list=guest_list))
        (-totals).apply_to(GuestListSummary, event.pk)
        guest_list.delete()
    for key in added:
        GuestList.objects.create(event=event, key=key)
    if removed or added:
        logger.info(
            "guest_lists_synced",
            event_id=str(event.id),
            removed=[guest_list.key for guest_list in removed],
            added=added,
        )
    return bool(removed or added)


@retry_on_conflict
def delete_event(event: Event, user: VenueUser) -> None:
    """Delete the event with everything hanging off it."""
    event = Event.objects.select_for_update().get(pk=event.pk)
    log_activity(event.company, "event_deleted", user=user, event_id=event.id, event_name=event.name)
    event_id = event.id
    event.delete()
    logger.info("event_deleted", event_id=str(event_id))

