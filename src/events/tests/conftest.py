import typing as t
from datetime import datetime, timedelta

import pytest
from django.test.client import Client
from ninja_jwt.tokens import RefreshToken

from accounts.models import VenueUser
from conftest import VenueUserFactory
from events import schema
from events.models import Category, Company, CompanyStaff, Event, Genre, GuestList, Layout, MembershipCard
from events.service import event_service


def table_item(table_name: str, **extra: t.Any) -> dict[str, t.Any]:
    """A table as the floor-plan editor stores it."""
    return {
        "id": f"table-{table_name}",
        "type": Layout.ItemType.TABLE.value,
        "shape": Layout.ItemShape.SQUARE.value,
        "width": 80,
        "height": 80,
        "positionX": 10,
        "positionY": 10,
        "tableName": table_name,
        **extra,
    }


def object_item(name: str) -> dict[str, t.Any]:
    return {
        "id": f"object-{name}",
        "type": Layout.ItemType.OBJECT.value,
        "shape": Layout.ItemShape.RECTANGLE.value,
        "width": 200,
        "height": 40,
        "positionX": 0,
        "positionY": 0,
        "objectName": name,
    }


def auth_client(user: VenueUser) -> Client:
    refresh = RefreshToken.for_user(user)
    return Client(HTTP_AUTHORIZATION=f"Bearer {str(refresh.access_token)}")  # type: ignore[attr-defined]


@pytest.fixture
def owner(venue_user_factory: VenueUserFactory) -> VenueUser:
    return venue_user_factory(username="owner@venue.test", preferred_name="Olivia Owner")


@pytest.fixture
def staff_user(venue_user_factory: VenueUserFactory) -> VenueUser:
    return venue_user_factory(username="staff@venue.test", preferred_name="Sam Staff")


@pytest.fixture
def outsider(venue_user_factory: VenueUserFactory) -> VenueUser:
    return venue_user_factory(username="outsider@venue.test")


@pytest.fixture
def company(owner: VenueUser) -> Company:
    return Company.objects.create(name="Club Nord", owner=owner)


@pytest.fixture
def staff_member(company: Company, staff_user: VenueUser) -> CompanyStaff:
    return CompanyStaff.objects.create(company=company, user=staff_user)


@pytest.fixture
def layout(company: Company, owner: VenueUser) -> Layout:
    """Three tables and a bar."""
    return Layout.objects.create(
        company=company,
        created_by=owner,
        name="Main Floor",
        canvas_width=1000,
        canvas_height=800,
        items=[table_item("T1"), table_item("T2"), table_item("T3"), object_item("Bar")],
    )


@pytest.fixture
def terrace_layout(company: Company, owner: VenueUser) -> Layout:
    return Layout.objects.create(
        company=company,
        created_by=owner,
        name="Terrace",
        canvas_width=500,
        canvas_height=500,
        items=[table_item("Terrace 1"), table_item("Terrace 2")],
    )


@pytest.fixture
def category(company: Company) -> Category:
    return Category.objects.create(company=company, name="Club night")


@pytest.fixture
def genre(company: Company) -> Genre:
    return Genre.objects.create(company=company, name="Techno")


@pytest.fixture
def membership_card(company: Company) -> MembershipCard:
    return MembershipCard.objects.create(company=company, title="Gold")


@pytest.fixture
def event_start(next_week: datetime) -> datetime:
    return next_week.replace(hour=22)


@pytest.fixture
def event(
    company: Company, owner: VenueUser, layout: Layout, genre: Genre, category: Category, event_start: datetime
) -> Event:
    """A provisioned event using the main floor layout, with a VIP guest list."""
    payload = schema.EventCreateSchema(
        name="Friday Night",
        start=event_start,
        end=event_start + timedelta(hours=6),
        table_layouts=[layout.id],
        genres=[genre.id],
        categories=[category.id],
        additional_guest_lists=["vip"],
    )
    [created] = event_service.create_events(company, owner, payload)
    return created


@pytest.fixture
def main_list(event: Event) -> GuestList:
    return GuestList.objects.get(event=event, key=GuestList.MAIN)


@pytest.fixture
def vip_list(event: Event) -> GuestList:
    return GuestList.objects.get(event=event, key="vip")


@pytest.fixture
def owner_client(owner: VenueUser) -> Client:
    """API client for the company owner."""
    return auth_client(owner)


@pytest.fixture
def staff_client(staff_user: VenueUser, staff_member: CompanyStaff) -> Client:
    """API client for a staff member of the company."""
    return auth_client(staff_user)


@pytest.fixture
def outsider_client(outsider: VenueUser) -> Client:
    """API client for an authenticated user without any relationship to the company."""
    return auth_client(outsider)
