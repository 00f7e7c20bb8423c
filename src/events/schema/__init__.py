"""Events schema package.

Schemas are grouped by area and re-exported here.
"""

from .catalog import (
    CatalogNameSchema,
    CategorySchema,
    GenreSchema,
    LayoutCreateSchema,
    LayoutItemSchema,
    LayoutSchema,
    LayoutUpdateSchema,
    MembershipCardCreateSchema,
    MembershipCardSchema,
    MembershipCardUpdateSchema,
)
from .company import CompanyCreateSchema, CompanyGuestSchema, CompanySchema
from .event import (
    EventCreateSchema,
    EventDetailSchema,
    EventSchema,
    EventUpdateSchema,
    GuestListSummarySchema,
    RecurrenceSchema,
    ReferenceSchema,
    TableListSchema,
    TableSummarySchema,
    TicketSummarySchema,
)
from .guest import (
    CheckInSchema,
    GuestBulkCreateSchema,
    GuestBulkDeleteSchema,
    GuestCreateSchema,
    GuestDraftSchema,
    GuestListLogEntrySchema,
    GuestSchema,
    GuestUpdateSchema,
)
from .table import TableBookingSchema
from .ticket import TicketTypeCreateSchema, TicketTypeSchema, TicketTypeUpdateSchema

__all__ = [
    "CatalogNameSchema",
    "CategorySchema",
    "CheckInSchema",
    "CompanyCreateSchema",
    "CompanyGuestSchema",
    "CompanySchema",
    "EventCreateSchema",
    "EventDetailSchema",
    "EventSchema",
    "EventUpdateSchema",
    "GenreSchema",
    "GuestBulkCreateSchema",
    "GuestBulkDeleteSchema",
    "GuestCreateSchema",
    "GuestDraftSchema",
    "GuestListLogEntrySchema",
    "GuestListSummarySchema",
    "GuestSchema",
    "GuestUpdateSchema",
    "LayoutCreateSchema",
    "LayoutItemSchema",
    "LayoutSchema",
    "LayoutUpdateSchema",
    "MembershipCardCreateSchema",
    "MembershipCardSchema",
    "MembershipCardUpdateSchema",
    "RecurrenceSchema",
    "ReferenceSchema",
    "TableBookingSchema",
    "TableListSchema",
    "TableSummarySchema",
    "TicketSummarySchema",
    "TicketTypeCreateSchema",
    "TicketTypeSchema",
    "TicketTypeUpdateSchema",
]
