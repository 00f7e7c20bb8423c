"""Resolve catalog ids supplied with an event to ``{id, name}`` references."""

import dataclasses
import typing as t
from uuid import UUID

from django.db import models

from events.exceptions import ReferenceNotFoundError
from events.models import Category, Company, Event, EventReference, Genre, Layout, MembershipCard

Kind = EventReference.Kind


@dataclasses.dataclass(frozen=True)
class ReferenceSource:
    model: type[models.Model]
    name_field: str
    label: str


SOURCES: dict[str, ReferenceSource] = {
    Kind.LAYOUT: ReferenceSource(Layout, "name", "Layout"),
    Kind.CATEGORY: ReferenceSource(Category, "name", "Category"),
    Kind.MEMBERSHIP_CARD: ReferenceSource(MembershipCard, "title", "Membership card"),
    Kind.GENRE: ReferenceSource(Genre, "name", "Genre"),
}


@dataclasses.dataclass(frozen=True)
class Reference:
    id: UUID
    name: str
    instance: models.Model


def _queryset(kind: str, company: Company) -> models.QuerySet[t.Any]:
    qs = SOURCES[kind].model.objects.filter(company=company)  # type: ignore[attr-defined]
    if kind == Kind.LAYOUT:
        qs = qs.filter(archived=False)
    return t.cast(models.QuerySet[t.Any], qs)


def resolve(company: Company, kind: str, ids: t.Sequence[UUID]) -> list[Reference]:
    """Look up every id of one kind within the company, preserving input order.

    Duplicate ids are collapsed to their first occurrence.

    Raises:
        ReferenceNotFoundError: for the first id that does not exist (or is an archived layout).
    """
    source = SOURCES[kind]
    found = {obj.pk: obj for obj in _queryset(kind, company).filter(pk__in=ids)}
    references: list[Reference] = []
    seen: set[UUID] = set()
    for ref_id in ids:
        if ref_id in seen:
            continue
        obj = found.get(ref_id)
        if obj is None:
            raise ReferenceNotFoundError(source.label, str(ref_id))
        seen.add(ref_id)
        references.append(Reference(id=obj.pk, name=getattr(obj, source.name_field), instance=obj))
    return references


def resolve_supplied(company: Company, supplied: dict[str, t.Sequence[UUID] | None]) -> dict[str, list[Reference]]:
    """Resolve only the kinds that were supplied. ``None`` means "not supplied", ``[]`` means "clear"."""
    return {kind: resolve(company, kind, ids) for kind, ids in supplied.items() if ids is not None}


def changed_kinds(event: Event, resolved: dict[str, list[Reference]]) -> dict[str, list[Reference]]:
    """The resolved kinds whose ids, names or order differ from what the event stores."""
    stored: dict[str, list[tuple[UUID, str]]] = {}
    for ref in EventReference.objects.filter(event=event, kind__in=list(resolved)).order_by("position"):
        stored.setdefault(ref.kind, []).append((ref.ref_id, ref.name))
    return {
        kind: references
        for kind, references in resolved.items()
        if [(ref.id, ref.name) for ref in references] != stored.get(kind, [])
    }


def replace_references(event: Event, resolved: dict[str, list[Reference]]) -> None:
    """Overwrite the stored references of each resolved kind."""
    for kind, references in resolved.items():
        EventReference.objects.filter(event=event, kind=kind).delete()
        EventReference.objects.bulk_create(
            [
                EventReference(event=event, kind=kind, ref_id=ref.id, name=ref.name, position=position)
                for position, ref in enumerate(references)
            ]
        )


def is_referenced(kind: str, ref_id: UUID) -> bool:
    return EventReference.objects.filter(kind=kind, ref_id=ref_id).exists()
