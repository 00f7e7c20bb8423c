"""Tests for the event endpoints."""

import typing as t
import uuid
from datetime import datetime, timedelta

import pytest
from django.shortcuts import reverse  # type: ignore[attr-defined]
from django.test.client import Client

from accounts.models import VenueUser
from events.models import Company, Event, EventReference, Genre, GuestList, Layout, TableList, TableSummary

pytestmark = pytest.mark.django_db


def _payload(start: datetime, **extra: t.Any) -> dict[str, t.Any]:
    return {"name": "Saturday Session", "start": start, "end": start + timedelta(hours=6), **extra}


class TestCreateEvent:
    def test_single_event_is_provisioned(
        self, owner_client: Client, company: Company, layout: Layout, genre: Genre, event_start: datetime
    ) -> None:
        url = reverse("api:create_event", kwargs={"company_id": company.id})
        payload = _payload(event_start, table_layouts=[layout.id], genres=[genre.id], additional_guest_lists=["vip"])

        response = owner_client.post(url, data=payload, content_type="application/json")

        assert response.status_code == 201, response.content
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Event created successfully"
        [created] = body["data"]
        assert created["name"] == "Saturday Session"
        assert created["guest_lists"] == [GuestList.MAIN, "vip"]
        assert created["genres"] == [{"id": str(genre.id), "name": "Techno"}]
        assert created["table_layouts"] == [{"id": str(layout.id), "name": "Main Floor"}]

        event = Event.objects.get(pk=created["id"])
        assert TableList.objects.filter(event=event).count() == 1
        assert TableSummary.objects.get(event=event).total_tables == 3

    def test_recurring_events(self, owner_client: Client, company: Company, event_start: datetime) -> None:
        weekday = (event_start.weekday() + 1) % 7
        recurring = {
            "start_date": event_start.date().isoformat(),
            "end_date": (event_start.date() + timedelta(days=20)).isoformat(),
            "days_of_week": [weekday],
        }
        url = reverse("api:create_event", kwargs={"company_id": company.id})

        payload = _payload(event_start, recurring=recurring)

        response = owner_client.post(url, data=payload, content_type="application/json")

        assert response.status_code == 201, response.content
        body = response.json()
        assert body["message"] == "3 events created successfully"
        assert len(body["data"]) == 3
        assert all(item["recurring"]["original_event_name"] == "Saturday Session" for item in body["data"])
        assert Event.objects.filter(company=company).count() == 3

    def test_recurrence_without_matching_day(
        self, owner_client: Client, company: Company, event_start: datetime
    ) -> None:
        other_weekday = (event_start.weekday() + 2) % 7
        recurring = {
            "start_date": event_start.date().isoformat(),
            "end_date": event_start.date().isoformat(),
            "days_of_week": [other_weekday],
        }
        url = reverse("api:create_event", kwargs={"company_id": company.id})

        payload = _payload(event_start, recurring=recurring)

        response = owner_client.post(url, data=payload, content_type="application/json")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "No events created", "data": []}
        assert not Event.objects.exists()

    def test_unknown_genre_leaves_nothing_behind(
        self, owner_client: Client, company: Company, event_start: datetime
    ) -> None:
        missing = uuid.uuid4()
        url = reverse("api:create_event", kwargs={"company_id": company.id})

        response = owner_client.post(url, data=_payload(event_start, genres=[missing]), content_type="application/json")

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "ReferenceNotFound",
            "message": f"Genre with id {missing} not found",
        }
        assert not Event.objects.exists()

    def test_end_before_start(self, owner_client: Client, company: Company, event_start: datetime) -> None:
        url = reverse("api:create_event", kwargs={"company_id": company.id})
        payload = {"name": "Backwards", "start": event_start, "end": event_start - timedelta(hours=1)}

        response = owner_client.post(url, data=payload, content_type="application/json")

        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"

    def test_outsider_cannot_create(self, outsider_client: Client, company: Company, event_start: datetime) -> None:
        url = reverse("api:create_event", kwargs={"company_id": company.id})

        response = outsider_client.post(url, data=_payload(event_start), content_type="application/json")

        assert response.status_code == 403
        assert not Event.objects.exists()


class TestReadEvents:
    def test_list_events(self, staff_client: Client, company: Company, event: Event) -> None:
        response = staff_client.get(reverse("api:list_events", kwargs={"company_id": company.id}))

        assert response.status_code == 200
        assert [item["name"] for item in response.json()] == ["Friday Night"]

    def test_event_detail(self, owner_client: Client, company: Company, event: Event) -> None:
        url = reverse("api:get_event", kwargs={"company_id": company.id, "event_id": event.id})

        response = owner_client.get(url)

        assert response.status_code == 200
        body = response.json()
        assert body["table_summary"]["total_tables"] == 3
        assert body["guest_list_summary"]["total_guests"] == 0
        assert body["ticket_summary"] is None
        assert [table_list["layout_name"] for table_list in body["table_lists"]] == ["Main Floor"]
        assert body["guest_draft"] is None

    def test_event_of_another_company(self, owner_client: Client, event: Event, outsider: VenueUser) -> None:
        other = Company.objects.create(name="Elsewhere", owner=outsider)
        url = reverse("api:get_event", kwargs={"company_id": other.id, "event_id": event.id})

        response = owner_client.get(url)

        assert response.status_code == 403


class TestUpdateEvent:
    def test_rename_and_swap_layout(
        self, owner_client: Client, company: Company, event: Event, terrace_layout: Layout
    ) -> None:
        url = reverse("api:update_event", kwargs={"company_id": company.id, "event_id": event.id})

        response = owner_client.put(
            url, data={"name": "Friday Late", "table_layouts": [terrace_layout.id]}, content_type="application/json"
        )

        assert response.status_code == 200, response.content
        body = response.json()
        assert body["message"] == "Event updated successfully"
        assert body["data"]["name"] == "Friday Late"
        assert body["data"]["table_summary"]["total_tables"] == 2
        assert [table_list["layout_name"] for table_list in body["data"]["table_lists"]] == ["Terrace"]

    def test_clear_genres(self, owner_client: Client, company: Company, event: Event) -> None:
        url = reverse("api:update_event", kwargs={"company_id": company.id, "event_id": event.id})

        response = owner_client.put(url, data={"genres": []}, content_type="application/json")

        assert response.status_code == 200
        assert response.json()["data"]["genres"] == []
        assert not EventReference.objects.filter(event=event, kind=EventReference.Kind.GENRE).exists()

    def test_main_guest_list_is_reserved(self, owner_client: Client, company: Company, event: Event) -> None:
        url = reverse("api:update_event", kwargs={"company_id": company.id, "event_id": event.id})

        response = owner_client.put(url, data={"additional_guest_lists": ["main"]}, content_type="application/json")

        assert response.status_code == 400


class TestDeleteEvent:
    def test_delete(self, owner_client: Client, company: Company, event: Event) -> None:
        url = reverse("api:delete_event", kwargs={"company_id": company.id, "event_id": event.id})

        response = owner_client.delete(url)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Event deleted successfully",
            "data": {"id": str(event.id)},
        }
        assert not Event.objects.filter(pk=event.pk).exists()
        assert not TableList.objects.filter(event_id=event.pk).exists()

    def test_unknown_event(self, owner_client: Client, company: Company) -> None:
        url = reverse("api:delete_event", kwargs={"company_id": company.id, "event_id": uuid.uuid4()})

        response = owner_client.delete(url)

        assert response.status_code == 404
        assert response.json()["message"] == "Event not found"
