import typing as t
from uuid import UUID

import structlog
from django.utils import timezone

from accounts.models import VenueUser
from accounts.validators import local_phone_number
from common.exceptions import InvalidInputError, NotFoundError
from common.transactions import retry_on_conflict
from common.utils import to_json_safe
from events import schema
from events.models import Event, Layout, TableList, TableSummary
from events.service import company_guest_service
from events.service.aggregates import TableTotals, is_booked

logger = structlog.get_logger(__name__)


@retry_on_conflict
def book_table(event: Event, layout_id: UUID, user: VenueUser, payload: schema.TableBookingSchema) -> dict[str, t.Any]:
    """Book one table of an event's table list and return the updated item.

    The table list row is locked while its items are rewritten, and the table summary
    is incremented in the same transaction.

    Raises:
        NotFoundError: if the event has no table list for the layout, or the table is not on it.
        InvalidInputError: if the table is already booked.
    """
    table_list = TableList.objects.select_for_update().filter(event=event, layout_id=layout_id).first()
    if table_list is None:
        raise NotFoundError("Layout not found")

    items = list(table_list.items)
    index = next(
        (
            i
            for i, item in enumerate(items)
            if item.get("type") == Layout.ItemType.TABLE and item.get("tableName") == payload.table_name
        ),
        None,
    )
    if index is None:
        raise NotFoundError(f'Table "{payload.table_name}" not found in layout')
    item = items[index]
    if is_booked(item):
        raise InvalidInputError(f'Table "{payload.table_name}" is already booked')

    before = TableTotals.from_items([item])
    email = payload.email or ""
    booking = {
        "name": payload.guest_name,
        "phoneNr": local_phone_number(payload.phone_number),
        "e164Number": payload.phone_number,
        "tableEmail": email,
        "nrOfGuests": payload.nr_of_guests,
        "tableLimit": payload.table_limit,
        "tableSpent": payload.table_spent,
        "tableCheckedIn": 0,
        "tableTimeFrom": payload.table_time_from,
        "tableTimeTo": payload.table_time_to,
        "comment": payload.comment,
        "tableBookedBy": user.display_name,
        "userId": str(user.pk),
    }
    log_entry = to_json_safe(
        {
            "action": "booked",
            "user_name": user.display_name,
            "timestamp": timezone.now(),
            "changes": {"id": payload.table_name, **booking},
        }
    )
    items[index] = {**item, **booking, "logs": [*item.get("logs", []), log_entry]}
    table_list.items = items
    table_list.save()

    delta = TableTotals.from_items([items[index]]) - before
    delta.apply_to(TableSummary, event.pk)
    company_guest_service.record_visit(
        event,
        name=payload.guest_name,
        phone_number=payload.phone_number,
        email=email,
        spent=payload.table_spent,
    )
    logger.info(
        "table_booked",
        event_id=str(event.id),
        layout_id=str(layout_id),
        table_name=payload.table_name,
        **delta.as_column_values(),
    )
    return t.cast(dict[str, t.Any], items[index])
