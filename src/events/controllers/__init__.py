from .catalog import CatalogController
from .companies import CompanyController
from .events import EventController
from .guests import GuestController
from .tables import TableController
from .tickets import TicketController

EVENTS_CONTROLLERS = [
    CompanyController,
    CatalogController,
    EventController,
    GuestController,
    TableController,
    TicketController,
]

__all__ = [
    "EVENTS_CONTROLLERS",
    "CatalogController",
    "CompanyController",
    "EventController",
    "GuestController",
    "TableController",
    "TicketController",
]
