from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route

from common.authentication import OperatorJWTAuth
from common.schema import OperationResult
from common.throttling import UserDefaultThrottle, WriteThrottle
from events import models, schema
from events.controllers.permissions import CompanyPermission
from events.models.event import EventQuerySet
from events.service import event_service, guest_ledger

from .base import CompanyScopedController


def _with_relations(queryset: EventQuerySet) -> EventQuerySet:
    return queryset.with_summaries().with_references().prefetch_related("guest_lists", "table_lists")


@api_controller(
    "/companies/{company_id}/events",
    auth=OperatorJWTAuth(),
    permissions=[CompanyPermission()],
    tags=["Events"],
    throttle=WriteThrottle(),
)
class EventController(CompanyScopedController):
    """Event provisioning, update and deletion."""

    @route.get("", url_name="list_events", response=list[schema.EventSchema], throttle=UserDefaultThrottle())
    def list_events(self, company_id: UUID) -> QuerySet[models.Event]:
        company = self.get_company(company_id)
        return models.Event.objects.filter(company=company).with_references().prefetch_related("guest_lists")

    @route.post("", url_name="create_event", response={200: OperationResult, 201: OperationResult})
    def create_event(self, company_id: UUID, payload: schema.EventCreateSchema) -> tuple[int, OperationResult]:
        """Create an event, or one event per matching day when a recurrence rule is given.

        Every event is created with its table lists, guest lists and summaries.
        """
        company = self.get_company(company_id)
        events = event_service.create_events(company, self.user(), payload)
        if not events:
            return 200, OperationResult(message="No events created", data=[])
        created = _with_relations(models.Event.objects.filter(pk__in=[event.pk for event in events]))
        message = "Event created successfully" if len(events) == 1 else f"{len(events)} events created successfully"
        return 201, OperationResult(message=message, data=self.serialize(schema.EventSchema, created))

    @route.get(
        "/{event_id}", url_name="get_event", response=schema.EventDetailSchema, throttle=UserDefaultThrottle()
    )
    def get_event_detail(self, company_id: UUID, event_id: UUID) -> models.Event:
        """Event with its summaries, table lists and the caller's guest draft."""
        event = self.get_event(company_id, event_id)
        event = _with_relations(models.Event.objects.filter(pk=event.pk)).get()
        event.guest_draft = guest_ledger.get_guest_draft(event, self.user())  # type: ignore[attr-defined]
        return event

    @route.put("/{event_id}", url_name="update_event", response=OperationResult)
    def update_event(self, company_id: UUID, event_id: UUID, payload: schema.EventUpdateSchema) -> OperationResult:
        event = self.get_event(company_id, event_id)
        event = event_service.update_event(event, self.user(), payload)
        updated = _with_relations(models.Event.objects.filter(pk=event.pk)).get()
        return OperationResult(
            message="Event updated successfully", data=self.serialize(schema.EventDetailSchema, updated)
        )

    @route.delete("/{event_id}", url_name="delete_event", response=OperationResult)
    def delete_event(self, company_id: UUID, event_id: UUID) -> OperationResult:
        event = self.get_event(company_id, event_id)
        event_service.delete_event(event, self.user())
        return OperationResult(message="Event deleted successfully", data={"id": str(event_id)})
