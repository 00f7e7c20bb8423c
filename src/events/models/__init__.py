from .activity import ActivityLog
from .catalog import Category, Genre, Layout, MembershipCard
from .company import Company, CompanyGuest, CompanyStaff
from .event import Event, EventReference
from .guest_list import Guest, GuestDraft, GuestList, GuestListLogEntry, GuestListSummary
from .table import TableList, TableSummary
from .ticket import TicketSummary, TicketType

__all__ = [
    "ActivityLog",
    "Category",
    "Company",
    "CompanyGuest",
    "CompanyStaff",
    "Event",
    "EventReference",
    "Genre",
    "Guest",
    "GuestDraft",
    "GuestList",
    "GuestListLogEntry",
    "GuestListSummary",
    "Layout",
    "MembershipCard",
    "TableList",
    "TableSummary",
    "TicketSummary",
    "TicketType",
]
