"""Events admin module.

Django autodiscover imports this module, which registers every admin class
through the ``@admin.register`` decorators of the submodules.
"""

from events.admin.catalog import CategoryAdmin, GenreAdmin, LayoutAdmin, MembershipCardAdmin
from events.admin.company import ActivityLogAdmin, CompanyAdmin, CompanyGuestAdmin
from events.admin.event import EventAdmin, GuestAdmin, GuestListLogEntryAdmin, TableListAdmin
from events.admin.ticket import TicketTypeAdmin

__all__ = [
    "ActivityLogAdmin",
    "CategoryAdmin",
    "CompanyAdmin",
    "CompanyGuestAdmin",
    "EventAdmin",
    "GenreAdmin",
    "GuestAdmin",
    "GuestListLogEntryAdmin",
    "LayoutAdmin",
    "MembershipCardAdmin",
    "TableListAdmin",
    "TicketTypeAdmin",
]
