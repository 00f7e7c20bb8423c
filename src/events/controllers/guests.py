from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route

from common.authentication import OperatorJWTAuth
from common.schema import OperationResult
from common.throttling import UserDefaultThrottle, WriteThrottle
from events import models, schema
from events.controllers.permissions import CompanyPermission
from events.service import guest_ledger

from .base import CompanyScopedController


@api_controller(
    "/companies/{company_id}/events/{event_id}",
    auth=OperatorJWTAuth(),
    permissions=[CompanyPermission()],
    tags=["Guest Lists"],
    throttle=WriteThrottle(),
)
class GuestController(CompanyScopedController):
    """Guest-list entries, check-ins and the caller's bulk-add draft."""

    # ---- Guests ----

    @route.get(
        "/guest-lists/{list_key}/guests",
        url_name="list_guests",
        response=list[schema.GuestSchema],
        throttle=UserDefaultThrottle(),
    )
    def list_guests(self, company_id: UUID, event_id: UUID, list_key: str) -> QuerySet[models.Guest]:
        event = self.get_event(company_id, event_id)
        guest_list = guest_ledger.get_guest_list(event, list_key)
        return models.Guest.objects.filter(guest_list=guest_list).select_related("guest_list")

    @route.post("/guest-lists/{list_key}/guests", url_name="add_guest", response={201: OperationResult})
    def add_guest(
        self, company_id: UUID, event_id: UUID, list_key: str, payload: schema.GuestCreateSchema
    ) -> tuple[int, OperationResult]:
        event = self.get_event(company_id, event_id)
        guest_list = guest_ledger.get_guest_list(event, list_key)
        guest = guest_ledger.add_guest(event, guest_list, self.user(), payload)
        return 201, OperationResult(message="Guest added successfully", data=self.serialize(schema.GuestSchema, guest))

    @route.post("/guest-lists/{list_key}/guests/bulk", url_name="add_guests_bulk", response={201: OperationResult})
    def add_guests_bulk(
        self, company_id: UUID, event_id: UUID, list_key: str, payload: schema.GuestBulkCreateSchema
    ) -> tuple[int, OperationResult]:
        """Add every guest parsed from the pasted text, one guest per line."""
        event = self.get_event(company_id, event_id)
        guest_list = guest_ledger.get_guest_list(event, list_key)
        guests = guest_ledger.add_guests_from_text(event, guest_list, self.user(), payload.text)
        return 201, OperationResult(
            message=f"{len(guests)} guests added successfully", data=self.serialize(schema.GuestSchema, guests)
        )

    @route.post("/guest-lists/{list_key}/guests/delete", url_name="delete_guests", response=OperationResult)
    def delete_guests(
        self, company_id: UUID, event_id: UUID, list_key: str, payload: schema.GuestBulkDeleteSchema
    ) -> OperationResult:
        event = self.get_event(company_id, event_id)
        guest_list = guest_ledger.get_guest_list(event, list_key)
        deleted = guest_ledger.delete_guests(event, guest_list, payload.guest_ids, self.user())
        return OperationResult(
            message=f"{len(deleted)} guests deleted successfully",
            data={"deleted_ids": [str(guest.pk) for guest in deleted]},
        )

    @route.put("/guest-lists/{list_key}/guests/{guest_id}", url_name="update_guest", response=OperationResult)
    def update_guest(
        self, company_id: UUID, event_id: UUID, list_key: str, guest_id: UUID, payload: schema.GuestUpdateSchema
    ) -> OperationResult:
        event = self.get_event(company_id, event_id)
        guest_list = guest_ledger.get_guest_list(event, list_key)
        result = guest_ledger.update_guest(event, guest_list, guest_id, self.user(), payload)
        message = "Guest updated successfully" if result.changed else guest_ledger.NO_CHANGES
        return OperationResult(message=message, data=self.serialize(schema.GuestSchema, result.guest))

    @route.delete("/guest-lists/{list_key}/guests/{guest_id}", url_name="delete_guest", response=OperationResult)
    def delete_guest(self, company_id: UUID, event_id: UUID, list_key: str, guest_id: UUID) -> OperationResult:
        event = self.get_event(company_id, event_id)
        guest_list = guest_ledger.get_guest_list(event, list_key)
        guest_ledger.delete_guests(event, guest_list, [guest_id], self.user())
        return OperationResult(message="Guest deleted successfully", data={"deleted_ids": [str(guest_id)]})

    @route.post(
        "/guest-lists/{list_key}/guests/{guest_id}/check-in", url_name="check_in_guest", response=OperationResult
    )
    def check_in_guest(
        self, company_id: UUID, event_id: UUID, list_key: str, guest_id: UUID, payload: schema.CheckInSchema
    ) -> OperationResult:
        """Check guests in by increment, or correct the checked-in counts."""
        event = self.get_event(company_id, event_id)
        guest_list = guest_ledger.get_guest_list(event, list_key)
        result = guest_ledger.check_in_guest(event, guest_list, guest_id, self.user(), payload)
        message = "Guest checked in successfully" if result.changed else guest_ledger.NO_CHANGES
        return OperationResult(message=message, data=self.serialize(schema.GuestSchema, result.guest))

    # ---- Audit and drafts ----

    @route.get(
        "/guest-log",
        url_name="list_guest_log",
        response=list[schema.GuestListLogEntrySchema],
        throttle=UserDefaultThrottle(),
    )
    def list_guest_log(self, company_id: UUID, event_id: UUID) -> QuerySet[models.GuestListLogEntry]:
        """The event's guest-list audit trail, newest first."""
        event = self.get_event(company_id, event_id)
        return models.GuestListLogEntry.objects.filter(event=event).order_by("-created_at")

    @route.put("/guest-draft", url_name="save_guest_draft", response=OperationResult)
    def save_guest_draft(self, company_id: UUID, event_id: UUID, payload: schema.GuestDraftSchema) -> OperationResult:
        event = self.get_event(company_id, event_id)
        draft = guest_ledger.save_guest_draft(event, self.user(), payload.text)
        return OperationResult(message="Guest draft saved", data={"text": draft.text})

    @route.delete("/guest-draft", url_name="clear_guest_draft", response=OperationResult)
    def clear_guest_draft(self, company_id: UUID, event_id: UUID) -> OperationResult:
        event = self.get_event(company_id, event_id)
        guest_ledger.clear_guest_draft(event, self.user())
        return OperationResult(message="Guest draft cleared")
