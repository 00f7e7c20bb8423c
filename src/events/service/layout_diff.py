"""Keep an event's table lists in step with the layouts it references."""

import copy
import dataclasses
import typing as t
from uuid import UUID

import structlog
from django.utils import timezone

from accounts.models import VenueUser
from common.utils import to_json_safe
from events.models import Event, Layout, TableList, TableSummary
from events.service.aggregates import TableTotals

logger = structlog.get_logger(__name__)


def stamp_items(
    items: t.Iterable[dict[str, t.Any]], user: VenueUser, action: str, status: str
) -> list[dict[str, t.Any]]:
    """Copy layout items, appending a log entry to each item's ``logs``."""
    entry = to_json_safe(
        {
            "action": action,
            "user_name": user.display_name,
            "timestamp": timezone.now(),
            "changes": {"status": status},
        }
    )
    stamped = []
    for item in items:
        item = copy.deepcopy(item)
        item["logs"] = [*item.get("logs", []), entry]
        stamped.append(item)
    return stamped


def create_table_list(event: Event, layout: Layout, user: VenueUser, *, action: str, status: str) -> TableList:
    return TableList.objects.create(
        event=event,
        layout=layout,
        layout_name=layout.name,
        items=stamp_items(layout.items, user, action, status),
    )


@dataclasses.dataclass(frozen=True)
class LayoutDiff:
    to_remove: list[TableList]
    to_add: list[Layout]

    @property
    def is_empty(self) -> bool:
        return not self.to_remove and not self.to_add


def compute(event: Event, requested: t.Sequence[Layout]) -> LayoutDiff:
    """Split the requested layouts into table lists to drop and layouts to copy in.

    The current table lists are locked.
    """
    current: dict[UUID, TableList] = {
        table_list.layout_id: table_list for table_list in TableList.objects.select_for_update().filter(event=event)
    }
    requested_ids = {layout.pk for layout in requested}
    return LayoutDiff(
        to_remove=[table_list for layout_id, table_list in current.items() if layout_id not in requested_ids],
        to_add=[layout for layout in requested if layout.pk not in current],
    )


def apply(event: Event, user: VenueUser, requested: t.Sequence[Layout]) -> TableTotals:
    """Drop and create table lists and add the net delta to the table summary.

    Must run inside the caller's transaction. Returns the applied delta.
    """
    diff = compute(event, requested)
    if diff.is_empty:
        return TableTotals()

    delta = TableTotals()
    for table_list in diff.to_remove:
        delta -= TableTotals.from_items(table_list.items)
        table_list.delete()
    for layout in diff.to_add:
        table_list = create_table_list(event, layout, user, action="added", status="Table added during update")
        delta += TableTotals.from_items(table_list.items)

    delta.apply_to(TableSummary, event.pk)
    logger.info(
        "table_layouts_changed",
        event_id=str(event.id),
        removed=[str(table_list.layout_id) for table_list in diff.to_remove],
        added=[str(layout.pk) for layout in diff.to_add],
        **delta.as_column_values(),
    )
    return delta
