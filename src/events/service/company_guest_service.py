"""The company's registry of people who visited its events."""

import typing as t

import structlog

from accounts.validators import local_phone_number, normalize_phone_number
from common.exceptions import InvalidInputError
from events.models import Company, CompanyGuest, Event, EventReference

logger = structlog.get_logger(__name__)


def merge_visited_genres(visited: dict[str, t.Any], genre_names: t.Iterable[str]) -> dict[str, t.Any]:
    """Count one more visit for each genre. New genres start at 1."""
    merged = dict(visited)
    for genre in genre_names:
        genre = genre.strip()
        if not genre:
            continue
        current = merged.get(genre) or {}
        merged[genre] = {"nrOfTimes": int(current.get("nrOfTimes", 0)) + 1}
    return merged


def event_genre_names(event: Event) -> list[str]:
    return [ref["name"] for ref in event.references_of(EventReference.Kind.GENRE)]


def find_company_guest(company: Company, *, phone_number: str = "", email: str = "") -> CompanyGuest | None:
    """Look up an existing registry entry before a booking creates a new one.

    The phone number is tried first, with or without its leading ``+``; the email only
    when the phone number matches nobody.

    Raises:
        InvalidInputError: if neither a phone number nor an email is given.
    """
    phone_number = normalize_phone_number(phone_number.strip())
    email = email.strip()
    if not phone_number and not email:
        raise InvalidInputError("Either phone number or email is required")

    guests = CompanyGuest.objects.filter(company=company).order_by("created_at")
    found: CompanyGuest | None = None
    if phone_number:
        found = guests.filter(phone_number__in={phone_number, f"+{local_phone_number(phone_number)}"}).first()
    if found is None and email:
        found = guests.filter(email__iexact=email).first()
    logger.info(
        "company_guest_lookup",
        company_id=str(company.id),
        found=found is not None,
        by_phone=bool(phone_number),
        by_email=bool(email),
    )
    return found


def record_visit(
    event: Event,
    *,
    name: str,
    company_guest: CompanyGuest | None = None,
    phone_number: str = "",
    email: str = "",
    spent: int = 0,
) -> CompanyGuest:
    """Create or update the registry entry of a guest added to (or booking a table at) the event.

    An explicitly selected ``company_guest`` wins; otherwise an entry with the same phone
    number is reused. Must run inside the caller's transaction.
    """
    genres = event_genre_names(event)
    existing: CompanyGuest | None = None
    if company_guest is not None:
        existing = CompanyGuest.objects.select_for_update().get(pk=company_guest.pk)
    elif phone_number:
        existing = (
            CompanyGuest.objects.select_for_update()
            .filter(company_id=event.company_id, phone_number=phone_number)
            .order_by("created_at")
            .first()
        )

    if existing is None:
        created = CompanyGuest.objects.create(
            company_id=event.company_id,
            name=name,
            phone_number=phone_number,
            email=email,
            total_spent=spent,
            last_spent=spent,
            visited_genres=merge_visited_genres({}, genres),
        )
        logger.info("company_guest_created", company_guest_id=str(created.id), event_id=str(event.id))
        return created

    if email:
        existing.email = email
    if phone_number:
        existing.phone_number = phone_number
    if spent:
        existing.total_spent += spent
        existing.last_spent = spent
    existing.visited_genres = merge_visited_genres(existing.visited_genres or {}, genres)
    existing.save()
    logger.info("company_guest_visit_recorded", company_guest_id=str(existing.id), event_id=str(event.id))
    return existing
