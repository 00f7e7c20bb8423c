"""Tests for reference resolution."""

import uuid

import pytest

from accounts.models import VenueUser
from events.exceptions import ReferenceNotFoundError
from events.models import Company, Event, EventReference, Genre, Layout
from events.service import references

pytestmark = pytest.mark.django_db

Kind = EventReference.Kind


class TestResolve:
    def test_preserves_order_and_collapses_duplicates(self, company: Company) -> None:
        first = Genre.objects.create(company=company, name="House")
        second = Genre.objects.create(company=company, name="Disco")

        resolved = references.resolve(company, Kind.GENRE, [second.id, first.id, second.id])

        assert [(ref.id, ref.name) for ref in resolved] == [(second.id, "Disco"), (first.id, "House")]

    def test_unknown_id_raises(self, company: Company) -> None:
        missing = uuid.uuid4()

        with pytest.raises(ReferenceNotFoundError) as exc_info:
            references.resolve(company, Kind.GENRE, [missing])

        assert exc_info.value.message == f"Genre with id {missing} not found"
        assert exc_info.value.code == "ReferenceNotFound"

    def test_other_company_ids_do_not_resolve(self, company: Company, outsider: VenueUser) -> None:
        other = Company.objects.create(name="Other", owner=outsider)
        foreign_genre = Genre.objects.create(company=other, name="Jazz")

        with pytest.raises(ReferenceNotFoundError):
            references.resolve(company, Kind.GENRE, [foreign_genre.id])

    def test_archived_layout_does_not_resolve(self, company: Company, layout: Layout) -> None:
        layout.archived = True
        layout.save()

        with pytest.raises(ReferenceNotFoundError, match="Layout with id"):
            references.resolve(company, Kind.LAYOUT, [layout.id])

    def test_membership_cards_use_their_title(self, company: Company) -> None:
        from events.models import MembershipCard

        card = MembershipCard.objects.create(company=company, title="Silver")

        [ref] = references.resolve(company, Kind.MEMBERSHIP_CARD, [card.id])

        assert ref.name == "Silver"


class TestResolveSupplied:
    def test_none_is_not_supplied_and_empty_clears(self, company: Company, genre: Genre) -> None:
        resolved = references.resolve_supplied(company, {Kind.GENRE: [], Kind.CATEGORY: None})

        assert resolved == {Kind.GENRE: []}


class TestReplaceReferences:
    def test_replaces_only_resolved_kinds(self, event: Event, company: Company) -> None:
        disco = Genre.objects.create(company=company, name="Disco")

        references.replace_references(event, {Kind.GENRE: references.resolve(company, Kind.GENRE, [disco.id])})

        assert event.references_of(Kind.GENRE) == [{"id": str(disco.id), "name": "Disco"}]
        assert len(event.references_of(Kind.CATEGORY)) == 1
        assert references.is_referenced(Kind.GENRE, disco.id)
