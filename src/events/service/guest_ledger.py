"""Guest ledger: add, update, check in and delete guest-list entries.

Each guest is its own row. Every mutation locks the rows it touches, applies the
count delta to the event's ``GuestListSummary`` with ``F()`` expressions and appends
to both the guest's own ``logs`` and the event's audit trail, all in one transaction.
"""

import dataclasses
import re
import typing as t
from uuid import UUID

import structlog
from django.utils import timezone

from accounts.models import VenueUser
from common.exceptions import InvalidInputError, NotFoundError
from common.transactions import retry_on_conflict
from common.utils import to_json_safe
from events import schema
from events.exceptions import CheckInLimitExceededError
from events.models import CompanyGuest, Event, Guest, GuestDraft, GuestList, GuestListLogEntry, GuestListSummary
from events.service import company_guest_service
from events.service.aggregates import GuestTotals

logger = structlog.get_logger(__name__)

NO_CHANGES = "No changes detected"

LEADING_INT = re.compile(r"^\d+")


@dataclasses.dataclass(frozen=True)
class ParsedGuest:
    guest_name: str
    free_guests: int
    normal_guests: int


class UpdateResult(t.NamedTuple):
    guest: Guest
    changed: bool


def _log_entry(user: VenueUser, action: str, changes: dict[str, t.Any]) -> dict[str, t.Any]:
    return t.cast(
        dict[str, t.Any],
        to_json_safe(
            {
                "action": action,
                "user_id": user.pk,
                "user_name": user.display_name,
                "timestamp": timezone.now(),
                "changes": changes,
            }
        ),
    )


def _audit(event: Event, user: VenueUser, guest_name: str, status: GuestListLogEntry.Status) -> None:
    GuestListLogEntry.objects.create(
        event=event, guest_name=guest_name, status=status, added_by=user.display_name, user=user
    )


def get_guest_list(event: Event, key: str) -> GuestList:
    """Get a guest list of the event by key.

    Raises:
        NotFoundError: if the event has no such list.
    """
    try:
        return GuestList.objects.get(event=event, key=key)
    except GuestList.DoesNotExist:
        raise NotFoundError(f'Guest list "{key}" not found') from None


def _locked_guest(guest_list: GuestList, guest_id: UUID) -> Guest:
    guest = Guest.objects.select_for_update().filter(guest_list=guest_list, pk=guest_id).first()
    if guest is None:
        raise NotFoundError("Guest not found")
    return guest


def _create_guest(
    event: Event,
    guest_list: GuestList,
    user: VenueUser,
    *,
    guest_name: str,
    normal_guests: int,
    free_guests: int,
    comment: str = "",
    categories: list[str] | None = None,
    company_guest: CompanyGuest | None = None,
) -> Guest:
    categories = categories or []
    registry_entry = company_guest_service.record_visit(event, name=guest_name, company_guest=company_guest)
    guest = Guest.objects.create(
        event=event,
        guest_list=guest_list,
        company_guest=registry_entry,
        guest_name=guest_name,
        normal_guests=normal_guests,
        free_guests=free_guests,
        comment=comment,
        categories=categories,
        logs=[
            _log_entry(
                user,
                "created",
                {
                    "guestName": guest_name,
                    "normalGuests": normal_guests,
                    "freeGuests": free_guests,
                    "comment": comment,
                    "categories": categories,
                },
            )
        ],
    )
    _audit(event, user, guest_name, GuestListLogEntry.Status.ADDED)
    return guest


@retry_on_conflict
def add_guest(event: Event, guest_list: GuestList, user: VenueUser, payload: schema.GuestCreateSchema) -> Guest:
    """Append one guest to the list.

    Raises:
        InvalidInputError: if both counts are zero.
    """
    if not payload.normal_guests and not payload.free_guests:
        raise InvalidInputError("At least one of normal guests or free guests must be greater than zero")
    company_guest = None
    if payload.selected_user_id:
        company_guest = CompanyGuest.objects.filter(company_id=event.company_id, pk=payload.selected_user_id).first()
        if company_guest is None:
            raise NotFoundError("Selected company guest not found")

    guest = _create_guest(
        event,
        guest_list,
        user,
        guest_name=payload.guest_name,
        normal_guests=payload.normal_guests,
        free_guests=payload.free_guests,
        comment=payload.comment,
        categories=payload.categories,
        company_guest=company_guest,
    )
    delta = GuestTotals.from_guest(guest)
    delta.apply_to(GuestListSummary, event.pk)
    logger.info(
        "guest_added",
        event_id=str(event.id),
        guest_list=guest_list.key,
        guest_id=str(guest.id),
        normal_guests=guest.normal_guests,
        free_guests=guest.free_guests,
    )
    return guest


def _parse_count(token: str) -> int:
    match = LEADING_INT.match(token.removeprefix("+"))
    return int(match.group()) if match else 0


def parse_guest_lines(text: str) -> list[ParsedGuest]:
    """Parse free-form guest lines.

    Two formats are understood, per line::

        Jane Doe +2 +3     -> 2 free, 3 paid
        Jane Doe 2 +3      -> 2 free, 3 paid

    Lines with fewer than three tokens, no ``+`` token, no name or no guests are skipped.
    """
    guests: list[ParsedGuest] = []
    for line in text.splitlines():
        parts = line.split()
        if len(parts) < 3:
            continue
        name_end = next((i for i, part in enumerate(parts) if part.startswith("+")), None)
        if name_end is None:
            continue
        counts = [_parse_count(part) for part in parts[name_end:] if part.startswith("+")]
        name_parts = parts[:name_end]
        if name_parts and LEADING_INT.match(name_parts[-1]):
            free, paid = _parse_count(name_parts[-1]), counts[0] if counts else 0
            name_parts = name_parts[:-1]
        else:
            free = counts[0] if counts else 0
            paid = counts[1] if len(counts) > 1 else 0
        name = " ".join(name_parts)[:100]
        if name and (free or paid):
            guests.append(ParsedGuest(guest_name=name, free_guests=free, normal_guests=paid))
    return guests


@retry_on_conflict
def add_guests_from_text(event: Event, guest_list: GuestList, user: VenueUser, text: str) -> list[Guest]:
    """Parse ``text`` and add every valid guest in one transaction.

    Raises:
        InvalidInputError: if no line yields a guest.
    """
    parsed = parse_guest_lines(text)
    if not parsed:
        raise InvalidInputError("No valid guests found in the provided text")

    guests = [
        _create_guest(
            event,
            guest_list,
            user,
            guest_name=entry.guest_name,
            normal_guests=entry.normal_guests,
            free_guests=entry.free_guests,
        )
        for entry in parsed
    ]
    delta = GuestTotals.from_guests(guests)
    delta.apply_to(GuestListSummary, event.pk)
    logger.info(
        "guests_bulk_added",
        event_id=str(event.id),
        guest_list=guest_list.key,
        count=len(guests),
        normal_guests=delta.normal_guests,
        free_guests=delta.free_guests,
    )
    return guests


UPDATABLE_FIELDS = {
    "guest_name": "guestName",
    "normal_guests": "normalGuests",
    "free_guests": "freeGuests",
    "comment": "comment",
    "categories": "categories",
}


@retry_on_conflict
def update_guest(
    event: Event, guest_list: GuestList, guest_id: UUID, user: VenueUser, payload: schema.GuestUpdateSchema
) -> UpdateResult:
    """Change the supplied fields of a guest.

    Supplying only values equal to the stored ones is a successful no-op.

    Raises:
        NotFoundError: if the guest is not on the list.
        CheckInLimitExceededError: if a count would drop below its checked-in count.
    """
    guest = _locked_guest(guest_list, guest_id)
    before = GuestTotals.from_guest(guest)
    supplied = payload.model_dump(exclude_unset=True, exclude_none=True)
    changes = {
        UPDATABLE_FIELDS[field]: {"from": getattr(guest, field), "to": value}
        for field, value in supplied.items()
        if field in UPDATABLE_FIELDS and getattr(guest, field) != value
    }
    if not changes:
        return UpdateResult(guest, False)

    for field, value in supplied.items():
        setattr(guest, field, value)
    if guest.normal_guests < guest.normal_checked_in:
        raise CheckInLimitExceededError(
            f"Cannot set normal guests below the {guest.normal_checked_in} already checked in"
        )
    if guest.free_guests < guest.free_checked_in:
        raise CheckInLimitExceededError(f"Cannot set free guests below the {guest.free_checked_in} already checked in")

    guest.logs = [*guest.logs, _log_entry(user, "updated", changes)]
    guest.save()
    _audit(event, user, guest.guest_name, GuestListLogEntry.Status.UPDATED)
    delta = GuestTotals.from_guest(guest) - before
    delta.apply_to(GuestListSummary, event.pk)
    logger.info("guest_updated", event_id=str(event.id), guest_id=str(guest.id), changed_fields=sorted(changes))
    return UpdateResult(guest, True)


@retry_on_conflict
def check_in_guest(
    event: Event, guest_list: GuestList, guest_id: UUID, user: VenueUser, payload: schema.CheckInSchema
) -> UpdateResult:
    """Check guests in, either incrementally or by setting absolute counts.

    The guest row is locked for the whole read-modify-write, so concurrent check-ins
    of the same guest are serialized.

    Raises:
        NotFoundError: if the guest is not on the list.
        CheckInLimitExceededError: if more people would be checked in than are on the list.
    """
    guest = _locked_guest(guest_list, guest_id)
    if payload.action == "increment":
        normal = guest.normal_checked_in + payload.normal_increment
        free = guest.free_checked_in + payload.free_increment
        action = "checked in"
    else:
        normal = guest.normal_checked_in if payload.normal_checked_in is None else payload.normal_checked_in
        free = guest.free_checked_in if payload.free_checked_in is None else payload.free_checked_in
        action = "edited check-in"

    if normal > guest.normal_guests:
        raise CheckInLimitExceededError(f"Cannot check in more than {guest.normal_guests} normal guests")
    if free > guest.free_guests:
        raise CheckInLimitExceededError(f"Cannot check in more than {guest.free_guests} free guests")
    if normal < 0 or free < 0:
        raise InvalidInputError("Check-in counts cannot be negative")

    changes: dict[str, t.Any] = {}
    if normal != guest.normal_checked_in:
        changes["normalCheckedIn"] = {"from": guest.normal_checked_in, "to": normal}
    if free != guest.free_checked_in:
        changes["freeCheckedIn"] = {"from": guest.free_checked_in, "to": free}
    if not changes:
        return UpdateResult(guest, False)

    delta = GuestTotals.of(
        normal_checked_in=normal - guest.normal_checked_in,
        free_checked_in=free - guest.free_checked_in,
    )
    guest.normal_checked_in = normal
    guest.free_checked_in = free
    guest.logs = [*guest.logs, _log_entry(user, action, changes)]
    guest.save()
    _audit(event, user, guest.guest_name, GuestListLogEntry.Status.CHECKED_IN)
    delta.apply_to(GuestListSummary, event.pk)
    logger.info(
        "guest_checked_in",
        event_id=str(event.id),
        guest_id=str(guest.id),
        mode=payload.action,
        normal_checked_in=normal,
        free_checked_in=free,
    )
    return UpdateResult(guest, True)


@retry_on_conflict
def delete_guests(event: Event, guest_list: GuestList, guest_ids: t.Sequence[UUID], user: VenueUser) -> list[Guest]:
    """Remove the matching guests and subtract their full counts from the summary.

    Ids that do not match are ignored as long as at least one does.

    Raises:
        NotFoundError: if none of the ids match a guest on the list.
    """
    guests = list(Guest.objects.select_for_update().filter(guest_list=guest_list, pk__in=guest_ids))
    if not guests:
        raise NotFoundError("No guests found to delete")

    delta = GuestTotals.from_guests(guests)
    Guest.objects.filter(pk__in=[guest.pk for guest in guests]).delete()
    for guest in guests:
        _audit(event, user, guest.guest_name, GuestListLogEntry.Status.DELETED)
    (-delta).apply_to(GuestListSummary, event.pk)
    logger.info(
        "guests_deleted",
        event_id=str(event.id),
        guest_list=guest_list.key,
        count=len(guests),
        guests=delta.guests,
        checked_in=delta.checked_in,
    )
    return guests


def save_guest_draft(event: Event, user: VenueUser, text: str) -> GuestDraft:
    """Store the caller's unsent bulk-add text for the event."""
    draft, _ = GuestDraft.objects.update_or_create(user=user, event=event, defaults={"text": text})
    return draft


def clear_guest_draft(event: Event, user: VenueUser) -> None:
    GuestDraft.objects.filter(user=user, event=event).delete()


def get_guest_draft(event: Event, user: VenueUser) -> str | None:
    return GuestDraft.objects.filter(user=user, event=event).values_list("text", flat=True).first()
