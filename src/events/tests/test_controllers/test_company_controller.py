"""Tests for the company endpoints and the company access rules shared by every controller."""

import uuid

import pytest
from django.shortcuts import reverse  # type: ignore[attr-defined]
from django.test.client import Client
from ninja_jwt.tokens import RefreshToken

from accounts.models import VenueUser
from events.models import Company, CompanyGuest

pytestmark = pytest.mark.django_db


class TestListCompanies:
    def test_owner_sees_own_company(self, owner_client: Client, company: Company) -> None:
        response = owner_client.get(reverse("api:list_companies"))

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Club Nord"]

    def test_staff_sees_company(self, staff_client: Client, company: Company) -> None:
        response = staff_client.get(reverse("api:list_companies"))

        assert [c["id"] for c in response.json()] == [str(company.id)]

    def test_outsider_sees_nothing(self, outsider_client: Client, company: Company) -> None:
        response = outsider_client.get(reverse("api:list_companies"))

        assert response.status_code == 200
        assert response.json() == []


class TestCreateCompany:
    def test_caller_becomes_owner(self, outsider_client: Client, outsider: VenueUser) -> None:
        response = outsider_client.post(
            reverse("api:create_company"), data={"name": "  Harbour Club "}, content_type="application/json"
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Company created successfully"
        assert body["data"]["name"] == "Harbour Club"
        assert body["data"]["owner_id"] == str(outsider.id)
        assert Company.objects.get(pk=body["data"]["id"]).owner == outsider

    def test_name_is_required(self, outsider_client: Client) -> None:
        response = outsider_client.post(
            reverse("api:create_company"), data={"name": ""}, content_type="application/json"
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "ValidationError"


class TestCompanyAccess:
    def test_anonymous_is_rejected(self, company: Company) -> None:
        response = Client().get(reverse("api:get_company", kwargs={"company_id": company.id}))

        assert response.status_code == 401

    def test_outsider_is_forbidden(self, outsider_client: Client, company: Company) -> None:
        response = outsider_client.get(reverse("api:get_company", kwargs={"company_id": company.id}))

        assert response.status_code == 403

    def test_staff_member_is_allowed(self, staff_client: Client, company: Company) -> None:
        response = staff_client.get(reverse("api:get_company", kwargs={"company_id": company.id}))

        assert response.status_code == 200
        assert response.json()["name"] == "Club Nord"

    def test_superuser_is_allowed(self, superuser: VenueUser, company: Company) -> None:
        refresh = RefreshToken.for_user(superuser)
        client = Client(HTTP_AUTHORIZATION=f"Bearer {str(refresh.access_token)}")  # type: ignore[attr-defined]

        response = client.get(reverse("api:get_company", kwargs={"company_id": company.id}))

        assert response.status_code == 200

    def test_unknown_company(self, owner_client: Client) -> None:
        response = owner_client.get(reverse("api:get_company", kwargs={"company_id": uuid.uuid4()}))

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "NotFound", "message": "Company not found"}


class TestCompanyGuests:
    def test_lists_registry(self, owner_client: Client, company: Company) -> None:
        CompanyGuest.objects.create(company=company, name="Ana", phone_number="+4512345678", total_spent=10)

        response = owner_client.get(reverse("api:list_company_guests", kwargs={"company_id": company.id}))

        assert response.status_code == 200
        [guest] = response.json()
        assert guest["name"] == "Ana"
        assert guest["phone_number"] == "+4512345678"
        assert guest["total_spent"] == 10

    def test_lookup_finds_existing_guest(self, owner_client: Client, company: Company) -> None:
        ana = CompanyGuest.objects.create(company=company, name="Ana", phone_number="+4512345678")
        url = reverse("api:lookup_company_guest", kwargs={"company_id": company.id})

        response = owner_client.get(url, {"phone_number": "4512345678"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Existing guest found"
        assert body["data"]["id"] == str(ana.id)

    def test_lookup_without_match(self, owner_client: Client, company: Company) -> None:
        url = reverse("api:lookup_company_guest", kwargs={"company_id": company.id})

        response = owner_client.get(url, {"email": "nobody@example.com"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "No existing guest found", "data": None}

    def test_lookup_needs_phone_or_email(self, owner_client: Client, company: Company) -> None:
        response = owner_client.get(reverse("api:lookup_company_guest", kwargs={"company_id": company.id}))

        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"
