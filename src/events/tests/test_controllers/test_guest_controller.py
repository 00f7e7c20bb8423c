"""Tests for the guest list endpoints."""

import typing as t

import pytest
from django.shortcuts import reverse  # type: ignore[attr-defined]
from django.test.client import Client

from accounts.models import VenueUser
from events import schema
from events.models import Company, Event, Guest, GuestDraft, GuestList, GuestListLogEntry, GuestListSummary
from events.service import guest_ledger

pytestmark = pytest.mark.django_db


def _url(name: str, event: Event, **kwargs: t.Any) -> str:
    return str(reverse(f"api:{name}", kwargs={"company_id": event.company_id, "event_id": event.id, **kwargs}))


@pytest.fixture
def guest(event: Event, main_list: GuestList, owner: VenueUser) -> Guest:
    payload = schema.GuestCreateSchema(guest_name="Ana", normal_guests=2, free_guests=1)
    return guest_ledger.add_guest(event, main_list, owner, payload)


class TestAddGuests:
    def test_add_guest(self, staff_client: Client, event: Event, main_list: GuestList) -> None:
        url = _url("add_guest", event, list_key="main")

        response = staff_client.post(
            url, data={"guest_name": "Ana", "normal_guests": 2, "free_guests": 1}, content_type="application/json"
        )

        assert response.status_code == 201, response.content
        body = response.json()
        assert body["message"] == "Guest added successfully"
        assert body["data"]["guest_name"] == "Ana"
        assert body["data"]["guest_list"] == "main"
        assert body["data"]["logs"][0]["user_name"] == "Sam Staff"
        summary = GuestListSummary.objects.get(event=event)
        assert summary.total_guests == 3
        assert GuestListLogEntry.objects.get(event=event).added_by == "Sam Staff"

    def test_zero_guests(self, owner_client: Client, event: Event, main_list: GuestList) -> None:
        url = _url("add_guest", event, list_key="main")

        response = owner_client.post(url, data={"guest_name": "Nobody"}, content_type="application/json")

        assert response.status_code == 400
        assert response.json()["message"] == "At least one of normal guests or free guests must be greater than zero"

    def test_unknown_list(self, owner_client: Client, event: Event) -> None:
        url = _url("add_guest", event, list_key="press")

        response = owner_client.post(
            url, data={"guest_name": "Ana", "normal_guests": 1}, content_type="application/json"
        )

        assert response.status_code == 404
        assert response.json()["message"] == 'Guest list "press" not found'

    def test_bulk_add(self, owner_client: Client, event: Event, vip_list: GuestList) -> None:
        url = _url("add_guests_bulk", event, list_key="vip")
        text = "John Doe +1 +2\nJane 0 +3\n\nnot a guest"

        response = owner_client.post(url, data={"text": text}, content_type="application/json")

        assert response.status_code == 201, response.content
        body = response.json()
        assert body["message"] == "2 guests added successfully"
        assert [guest["guest_name"] for guest in body["data"]] == ["John Doe", "Jane"]
        assert GuestListSummary.objects.get(event=event).total_guests == 6

    def test_bulk_add_without_valid_lines(self, owner_client: Client, event: Event, main_list: GuestList) -> None:
        url = _url("add_guests_bulk", event, list_key="main")

        response = owner_client.post(url, data={"text": "nothing useful"}, content_type="application/json")

        assert response.status_code == 400
        assert response.json()["message"] == "No valid guests found in the provided text"


class TestListGuests:
    def test_list_guests(self, owner_client: Client, event: Event, guest: Guest) -> None:
        response = owner_client.get(_url("list_guests", event, list_key="main"))

        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == [str(guest.id)]

    def test_outsider_is_forbidden(self, outsider_client: Client, event: Event, guest: Guest) -> None:
        response = outsider_client.get(_url("list_guests", event, list_key="main"))

        assert response.status_code == 403


class TestUpdateGuest:
    def test_update(self, owner_client: Client, event: Event, guest: Guest) -> None:
        url = _url("update_guest", event, list_key="main", guest_id=guest.id)

        response = owner_client.put(url, data={"normal_guests": 4}, content_type="application/json")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Guest updated successfully"
        assert body["data"]["normal_guests"] == 4
        assert GuestListSummary.objects.get(event=event).total_guests == 5

    def test_no_changes(self, owner_client: Client, event: Event, guest: Guest) -> None:
        url = _url("update_guest", event, list_key="main", guest_id=guest.id)

        response = owner_client.put(url, data={"guest_name": "Ana"}, content_type="application/json")

        assert response.status_code == 200
        assert response.json()["message"] == "No changes detected"


class TestCheckIn:
    def test_increment(self, owner_client: Client, event: Event, guest: Guest) -> None:
        url = _url("check_in_guest", event, list_key="main", guest_id=guest.id)

        response = owner_client.post(
            url, data={"action": "increment", "normal_increment": 2}, content_type="application/json"
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Guest checked in successfully"
        assert body["data"]["normal_checked_in"] == 2
        summary = GuestListSummary.objects.get(event=event)
        assert summary.total_checked_in == 2
        assert summary.normal_guests_checked_in == 2

    def test_limit_exceeded(self, owner_client: Client, event: Event, guest: Guest) -> None:
        url = _url("check_in_guest", event, list_key="main", guest_id=guest.id)

        response = owner_client.post(
            url, data={"action": "increment", "free_increment": 2}, content_type="application/json"
        )

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "CheckInLimitExceeded",
            "message": "Cannot check in more than 1 free guests",
        }
        assert GuestListSummary.objects.get(event=event).total_checked_in == 0


class TestDeleteGuests:
    def test_delete_one(self, owner_client: Client, event: Event, guest: Guest) -> None:
        response = owner_client.delete(_url("delete_guest", event, list_key="main", guest_id=guest.id))

        assert response.status_code == 200
        assert response.json()["message"] == "Guest deleted successfully"
        assert not Guest.objects.filter(pk=guest.pk).exists()
        assert GuestListSummary.objects.get(event=event).total_guests == 0

    def test_delete_many(self, owner_client: Client, event: Event, guest: Guest) -> None:
        url = _url("delete_guests", event, list_key="main")

        response = owner_client.post(url, data={"guest_ids": [guest.id]}, content_type="application/json")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "1 guests deleted successfully"
        assert body["data"] == {"deleted_ids": [str(guest.id)]}


class TestGuestLogAndDraft:
    def test_guest_log(self, owner_client: Client, event: Event, guest: Guest) -> None:
        response = owner_client.get(_url("list_guest_log", event))

        assert response.status_code == 200
        [entry] = response.json()
        assert entry["guest_name"] == "Ana"
        assert entry["status"] == "added"
        assert entry["added_by"] == "Olivia Owner"

    def test_draft_is_per_user(
        self, owner_client: Client, staff_client: Client, company: Company, event: Event, owner: VenueUser
    ) -> None:
        response = owner_client.put(
            _url("save_guest_draft", event), data={"text": "Ana +1 +1"}, content_type="application/json"
        )

        assert response.status_code == 200
        assert response.json()["data"] == {"text": "Ana +1 +1"}
        detail = reverse("api:get_event", kwargs={"company_id": company.id, "event_id": event.id})
        assert owner_client.get(detail).json()["guest_draft"] == "Ana +1 +1"
        assert staff_client.get(detail).json()["guest_draft"] is None

        response = owner_client.delete(_url("clear_guest_draft", event))

        assert response.json()["message"] == "Guest draft cleared"
        assert not GuestDraft.objects.filter(event=event, user=owner).exists()
