"""Layouts, categories, genres and membership cards of a company."""

import typing as t

import structlog
from django.db import models, transaction
from django.utils import timezone

from accounts.models import VenueUser
from common.exceptions import InvalidInputError
from events import schema
from events.exceptions import InUseError, NoChangesError
from events.models import Category, Company, EventReference, Genre, Layout, MembershipCard
from events.service.activity_service import log_activity
from events.service.references import is_referenced

logger = structlog.get_logger(__name__)

M = t.TypeVar("M", bound=models.Model)


def _apply_changes(instance: M, data: dict[str, t.Any]) -> dict[str, dict[str, t.Any]]:
    """Set the values that differ and return them as ``{field: {from, to}}``."""
    changes = {
        field: {"from": getattr(instance, field), "to": value}
        for field, value in data.items()
        if getattr(instance, field) != value
    }
    for field, change in changes.items():
        setattr(instance, field, change["to"])
    return changes


# ---- Layouts ----


@transaction.atomic
def create_layout(company: Company, user: VenueUser, payload: schema.LayoutCreateSchema) -> Layout:
    layout = Layout.objects.create(
        company=company,
        created_by=user,
        name=payload.name,
        canvas_width=payload.canvas_width,
        canvas_height=payload.canvas_height,
        items=[item.model_dump(mode="json", exclude_none=True) for item in payload.items],
    )
    log_activity(company, "table_layout_created", user=user, layout_id=layout.id, layout_name=layout.name)
    logger.info("layout_created", company_id=str(company.id), layout_id=str(layout.id), items=len(layout.items))
    return layout


@transaction.atomic
def update_layout(layout: Layout, user: VenueUser, payload: schema.LayoutUpdateSchema) -> Layout:
    """Update a layout. Events keep the copy of the items they were created with.

    Raises:
        NoChangesError: if nothing would change.
    """
    layout = Layout.objects.select_for_update().get(pk=layout.pk)
    data = payload.model_dump(mode="json", exclude_unset=True, exclude_none=True)
    changes = _apply_changes(layout, data)
    if not changes:
        raise NoChangesError("No changes detected")
    layout.save()
    log_activity(
        layout.company,
        "table_layout_updated",
        user=user,
        layout_id=layout.id,
        layout_name=layout.name,
        changed_fields=sorted(changes),
    )
    logger.info("layout_updated", layout_id=str(layout.id), changed_fields=sorted(changes))
    return layout


@transaction.atomic
def archive_layout(layout: Layout, user: VenueUser) -> Layout:
    """Archive a layout no event references any more.

    Raises:
        InvalidInputError: if the layout is already archived.
        InUseError: if an event still references it.
    """
    layout = Layout.objects.select_for_update().get(pk=layout.pk)
    if layout.archived:
        raise InvalidInputError("Layout is already archived")
    if is_referenced(EventReference.Kind.LAYOUT, layout.pk) or layout.table_lists.exists():
        raise InUseError(
            f'Cannot delete layout "{layout.name}" because it is being used in events. '
            "Remove it from those events first."
        )
    layout.archived = True
    layout.archived_at = timezone.now()
    layout.archived_by = user
    layout.save()
    log_activity(layout.company, "table_layout_archived", user=user, layout_id=layout.id, layout_name=layout.name)
    logger.info("layout_archived", layout_id=str(layout.id))
    return layout


# ---- Categories and genres ----


def create_category(company: Company, user: VenueUser, name: str) -> Category:
    category = Category.objects.create(company=company, name=name)
    logger.info("category_created", company_id=str(company.id), category_id=str(category.id))
    return category


@transaction.atomic
def delete_category(category: Category, user: VenueUser) -> None:
    """Raises InUseError while an event references the category."""
    if is_referenced(EventReference.Kind.CATEGORY, category.pk):
        raise InUseError(f'Cannot delete category "{category.name}" because it is being used in events.')
    category_id = category.pk
    category.delete()
    logger.info("category_deleted", category_id=str(category_id), user_id=str(user.pk))


def create_genre(company: Company, user: VenueUser, name: str) -> Genre:
    genre = Genre.objects.create(company=company, name=name)
    logger.info("genre_created", company_id=str(company.id), genre_id=str(genre.id))
    return genre


@transaction.atomic
def delete_genre(genre: Genre, user: VenueUser) -> None:
    """Raises InUseError while an event references the genre."""
    if is_referenced(EventReference.Kind.GENRE, genre.pk):
        raise InUseError(f'Cannot delete genre "{genre.name}" because it is being used in events.')
    genre_id = genre.pk
    genre.delete()
    logger.info("genre_deleted", genre_id=str(genre_id), user_id=str(user.pk))


# ---- Membership cards ----


@transaction.atomic
def create_membership_card(
    company: Company, user: VenueUser, payload: schema.MembershipCardCreateSchema
) -> MembershipCard:
    card = MembershipCard.objects.create(company=company, **payload.model_dump())
    log_activity(company, "club_card_created", user=user, card_id=card.id, title=card.title)
    logger.info("membership_card_created", company_id=str(company.id), card_id=str(card.id))
    return card


@transaction.atomic
def update_membership_card(
    card: MembershipCard, user: VenueUser, payload: schema.MembershipCardUpdateSchema
) -> MembershipCard:
    """Raises NoChangesError if nothing would change."""
    card = MembershipCard.objects.select_for_update().get(pk=card.pk)
    changes = _apply_changes(card, payload.model_dump(exclude_unset=True, exclude_none=True))
    if not changes:
        raise NoChangesError("No changes detected")
    if card.valid_from and card.valid_to and card.valid_from >= card.valid_to:
        raise InvalidInputError("valid_to must be after valid_from.")
    card.save()
    log_activity(card.company, "club_card_updated", user=user, card_id=card.id, changes=changes)
    logger.info("membership_card_updated", card_id=str(card.id), changed_fields=sorted(changes))
    return card


@transaction.atomic
def delete_membership_card(card: MembershipCard, user: VenueUser) -> None:
    """Raises InUseError while an event references the card."""
    if is_referenced(EventReference.Kind.MEMBERSHIP_CARD, card.pk):
        raise InUseError(
            f'Cannot delete club card "{card.title}" because it is being used in events. '
            "Remove it from those events first."
        )
    log_activity(card.company, "club_card_deleted", user=user, card_id=card.id, title=card.title)
    card_id = card.pk
    card.delete()
    logger.info("membership_card_deleted", card_id=str(card_id))
