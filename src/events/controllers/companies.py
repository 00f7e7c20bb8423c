from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route

from common.authentication import OperatorJWTAuth
from common.schema import OperationResult
from common.throttling import UserDefaultThrottle, WriteThrottle
from events import models, schema
from events.controllers.permissions import CompanyPermission
from events.service import company_guest_service, company_service

from .base import CompanyScopedController


@api_controller(
    "/companies",
    auth=OperatorJWTAuth(),
    permissions=[CompanyPermission()],
    tags=["Companies"],
    throttle=WriteThrottle(),
)
class CompanyController(CompanyScopedController):
    """Companies the caller owns or works for."""

    @route.get("", url_name="list_companies", response=list[schema.CompanySchema], throttle=UserDefaultThrottle())
    def list_companies(self) -> QuerySet[models.Company]:
        return models.Company.objects.for_operator(self.user())

    @route.post("", url_name="create_company", response={201: OperationResult})
    def create_company(self, payload: schema.CompanyCreateSchema) -> tuple[int, OperationResult]:
        """Create a company. The caller becomes its owner."""
        company = company_service.create_company(self.user(), payload.name)
        return 201, OperationResult(
            message="Company created successfully", data=self.serialize(schema.CompanySchema, company)
        )

    @route.get(
        "/{company_id}", url_name="get_company", response=schema.CompanySchema, throttle=UserDefaultThrottle()
    )
    def get_company_detail(self, company_id: UUID) -> models.Company:
        return self.get_company(company_id)

    @route.get(
        "/{company_id}/guests",
        url_name="list_company_guests",
        response=list[schema.CompanyGuestSchema],
        throttle=UserDefaultThrottle(),
    )
    def list_company_guests(self, company_id: UUID) -> QuerySet[models.CompanyGuest]:
        """The company's guest registry, most recent first."""
        company = self.get_company(company_id)
        return models.CompanyGuest.objects.filter(company=company).order_by("-updated_at")

    @route.get(
        "/{company_id}/guests/lookup",
        url_name="lookup_company_guest",
        response=OperationResult,
        throttle=UserDefaultThrottle(),
    )
    def lookup_company_guest(self, company_id: UUID, phone_number: str = "", email: str = "") -> OperationResult:
        """Find the registry entry a booking for this phone number (or email) would reuse."""
        company = self.get_company(company_id)
        guest = company_guest_service.find_company_guest(company, phone_number=phone_number, email=email)
        if guest is None:
            return OperationResult(message="No existing guest found")
        return OperationResult(
            message="Existing guest found", data=self.serialize(schema.CompanyGuestSchema, guest)
        )
