from uuid import UUID

from ninja_extra import api_controller, route

from common.authentication import OperatorJWTAuth
from common.schema import OperationResult
from common.throttling import WriteThrottle
from events import schema
from events.controllers.permissions import CompanyPermission
from events.service import table_booking

from .base import CompanyScopedController


@api_controller(
    "/companies/{company_id}/events/{event_id}/table-lists",
    auth=OperatorJWTAuth(),
    permissions=[CompanyPermission()],
    tags=["Tables"],
    throttle=WriteThrottle(),
)
class TableController(CompanyScopedController):
    @route.post("/{layout_id}/bookings", url_name="book_table", response={201: OperationResult})
    def book_table(
        self, company_id: UUID, event_id: UUID, layout_id: UUID, payload: schema.TableBookingSchema
    ) -> tuple[int, OperationResult]:
        """Book a free table of the event's copy of a layout."""
        event = self.get_event(company_id, event_id)
        item = table_booking.book_table(event, layout_id, self.user(), payload)
        return 201, OperationResult(message=f'Table "{payload.table_name}" booked successfully', data=item)
