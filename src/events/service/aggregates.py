"""Aggregate value objects for the per-event summary rows.

A summary row (``TableSummary``, ``GuestListSummary``, ``TicketSummary``) is a cache of
sums over source rows. Services compute a delta as one of these value objects and
apply it with ``F()`` expressions in the same transaction as the triggering write;
the reconciliation task recomputes them from scratch.
"""

import dataclasses
import typing as t
from decimal import Decimal

from django.db import models
from django.db.models import F

from events.models import Guest, Layout, TicketType

T = t.TypeVar("T", bound="Totals")


def to_int(value: t.Any) -> int:
    """Lenient integer parsing for JSON item fields: missing or garbage counts as 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            return int(float(value))
        except (TypeError, ValueError):
            return 0


@dataclasses.dataclass(frozen=True)
class Totals:
    """Base class: a fixed set of summable fields mapped onto summary model columns."""

    # field name on the value object -> column name on the summary model
    columns: t.ClassVar[dict[str, str]] = {}

    def __add__(self: T, other: T) -> T:
        return self.__class__(**{f: getattr(self, f) + getattr(other, f) for f in self.columns})

    def __neg__(self: T) -> T:
        return self.__class__(**{f: -getattr(self, f) for f in self.columns})

    def __sub__(self: T, other: T) -> T:
        return self + (-other)

    def is_zero(self) -> bool:
        return all(not getattr(self, f) for f in self.columns)

    def as_column_values(self) -> dict[str, t.Any]:
        """Absolute values, keyed by summary column."""
        return {column: getattr(self, field) for field, column in self.columns.items()}

    def as_f_update(self) -> dict[str, t.Any]:
        """``QuerySet.update`` kwargs adding this delta to the stored values. Zero fields are skipped."""
        return {
            column: F(column) + getattr(self, field)
            for field, column in self.columns.items()
            if getattr(self, field)
        }

    @classmethod
    def from_summary(cls: type[T], summary: models.Model) -> T:
        return cls(**{field: getattr(summary, column) for field, column in cls.columns.items()})

    def apply_to(self, summary_model: type[models.Model], event_id: t.Any) -> int:
        """Add the delta to the event's summary row. Returns the number of rows touched."""
        if self.is_zero():
            return 0
        updated = summary_model._default_manager.filter(event_id=event_id).update(**self.as_f_update())
        return t.cast(int, updated)


@dataclasses.dataclass(frozen=True)
class TableTotals(Totals):
    tables: int = 0
    guests: int = 0
    checked_in: int = 0
    booked: int = 0
    table_limit: int = 0
    table_spent: int = 0

    columns: t.ClassVar[dict[str, str]] = {
        "tables": "total_tables",
        "guests": "total_guests",
        "checked_in": "total_checked_in",
        "booked": "total_booked",
        "table_limit": "total_table_limit",
        "table_spent": "total_table_spent",
    }

    @classmethod
    def from_items(cls, items: t.Iterable[dict[str, t.Any]]) -> "TableTotals":
        """Sum the occupancy fields of the table items. Decorative objects are ignored."""
        totals = cls()
        for item in items:
            if item.get("type") != Layout.ItemType.TABLE:
                continue
            totals += cls(
                tables=1,
                guests=to_int(item.get("nrOfGuests")),
                checked_in=to_int(item.get("tableCheckedIn")),
                booked=1 if is_booked(item) else 0,
                table_limit=to_int(item.get("tableLimit")),
                table_spent=to_int(item.get("tableSpent")),
            )
        return totals


def is_booked(item: dict[str, t.Any]) -> bool:
    """A table is booked once it carries a guest name or the name of whoever booked it."""
    return bool(item.get("name")) or bool(item.get("tableBookedBy"))


@dataclasses.dataclass(frozen=True)
class GuestTotals(Totals):
    guests: int = 0
    checked_in: int = 0
    normal_guests: int = 0
    free_guests: int = 0
    normal_checked_in: int = 0
    free_checked_in: int = 0

    columns: t.ClassVar[dict[str, str]] = {
        "guests": "total_guests",
        "checked_in": "total_checked_in",
        "normal_guests": "total_normal_guests",
        "free_guests": "total_free_guests",
        "normal_checked_in": "normal_guests_checked_in",
        "free_checked_in": "free_guests_checked_in",
    }

    @classmethod
    def of(
        cls,
        *,
        normal_guests: int = 0,
        free_guests: int = 0,
        normal_checked_in: int = 0,
        free_checked_in: int = 0,
    ) -> "GuestTotals":
        """Build totals from the four per-guest counters, deriving the combined ones."""
        return cls(
            guests=normal_guests + free_guests,
            checked_in=normal_checked_in + free_checked_in,
            normal_guests=normal_guests,
            free_guests=free_guests,
            normal_checked_in=normal_checked_in,
            free_checked_in=free_checked_in,
        )

    @classmethod
    def from_guest(cls, guest: Guest) -> "GuestTotals":
        return cls.of(
            normal_guests=guest.normal_guests,
            free_guests=guest.free_guests,
            normal_checked_in=guest.normal_checked_in,
            free_checked_in=guest.free_checked_in,
        )

    @classmethod
    def from_guests(cls, guests: t.Iterable[Guest]) -> "GuestTotals":
        totals = cls()
        for guest in guests:
            totals += cls.from_guest(guest)
        return totals


@dataclasses.dataclass(frozen=True)
class TicketTotals(Totals):
    tickets: int = 0
    sold: int = 0
    left: int = 0
    revenue: Decimal = Decimal("0")

    columns: t.ClassVar[dict[str, str]] = {
        "tickets": "total_nr_tickets",
        "sold": "total_nr_sold_tickets",
        "left": "total_nr_tickets_left",
        "revenue": "total_tickets_revenue",
    }

    @classmethod
    def from_ticket_type(cls, ticket_type: TicketType) -> "TicketTotals":
        sold = ticket_type.sold
        return cls(
            tickets=ticket_type.total_tickets,
            sold=sold,
            left=ticket_type.tickets_left,
            revenue=Decimal(sold) * Decimal(ticket_type.ticket_price),
        )

    @classmethod
    def from_ticket_types(cls, ticket_types: t.Iterable[TicketType]) -> "TicketTotals":
        totals = cls()
        for ticket_type in ticket_types:
            totals += cls.from_ticket_type(ticket_type)
        return totals
