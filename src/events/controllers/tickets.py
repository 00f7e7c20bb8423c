from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route

from common.authentication import OperatorJWTAuth
from common.schema import OperationResult
from common.throttling import UserDefaultThrottle, WriteThrottle
from events import models, schema
from events.controllers.permissions import CompanyPermission
from events.service.ticket_service import TicketInventory

from .base import CompanyScopedController


@api_controller(
    "/companies/{company_id}/events/{event_id}/tickets",
    auth=OperatorJWTAuth(),
    permissions=[CompanyPermission()],
    tags=["Tickets"],
    throttle=WriteThrottle(),
)
class TicketController(CompanyScopedController):
    """Ticket types of an event."""

    def inventory(self, company_id: UUID, event_id: UUID) -> TicketInventory:
        return TicketInventory(event=self.get_event(company_id, event_id), user=self.user())

    @route.get("", url_name="list_tickets", response=list[schema.TicketTypeSchema], throttle=UserDefaultThrottle())
    def list_tickets(self, company_id: UUID, event_id: UUID) -> QuerySet[models.TicketType]:
        event = self.get_event(company_id, event_id)
        return models.TicketType.objects.filter(event=event)

    @route.post("", url_name="create_ticket", response={201: OperationResult})
    def create_ticket(
        self, company_id: UUID, event_id: UUID, payload: schema.TicketTypeCreateSchema
    ) -> tuple[int, OperationResult]:
        ticket_type = self.inventory(company_id, event_id).create(payload)
        return 201, OperationResult(
            message="Ticket created successfully", data=self.serialize(schema.TicketTypeSchema, ticket_type)
        )

    @route.put("/{ticket_id}", url_name="update_ticket", response=OperationResult)
    def update_ticket(
        self, company_id: UUID, event_id: UUID, ticket_id: UUID, payload: schema.TicketTypeUpdateSchema
    ) -> OperationResult:
        ticket_type = self.inventory(company_id, event_id).update(ticket_id, payload)
        return OperationResult(
            message="Ticket updated successfully", data=self.serialize(schema.TicketTypeSchema, ticket_type)
        )

    @route.delete("/{ticket_id}", url_name="remove_ticket", response=OperationResult)
    def remove_ticket(self, company_id: UUID, event_id: UUID, ticket_id: UUID) -> OperationResult:
        """Remove a ticket type that has not sold anything."""
        removed = self.inventory(company_id, event_id).remove(ticket_id)
        return OperationResult(
            message="Ticket removed successfully",
            data={"id": str(ticket_id), "removed": removed.as_column_values()},
        )
