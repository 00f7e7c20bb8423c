import datetime
import typing as t
from datetime import date, timedelta


class Occurrence(t.NamedTuple):
    day: date
    start: datetime.datetime
    end: datetime.datetime


def python_weekday_to_sunday_first(weekday: int) -> int:
    """Convert ``date.weekday()`` (0=Monday) to the 0=Sunday numbering used by recurrence rules."""
    return (weekday + 1) % 7


def expand(
    start: datetime.datetime,
    end: datetime.datetime,
    *,
    start_date: date,
    end_date: date,
    days_of_week: t.Iterable[int],
) -> t.Iterator[Occurrence]:
    """Yield one occurrence per day in ``[start_date, end_date]`` whose weekday is in ``days_of_week``.

    Weekdays are numbered 0=Sunday .. 6=Saturday. Every occurrence keeps the UTC
    time-of-day of ``start`` and the ``start`` to ``end`` duration. An empty window
    or a window without a matching weekday yields nothing.
    """
    wanted = set(days_of_week)
    start_utc = start.astimezone(datetime.UTC)
    duration = end - start
    day = start_date
    while day <= end_date:
        if python_weekday_to_sunday_first(day.weekday()) in wanted:
            occurrence_start = datetime.datetime.combine(day, start_utc.timetz())
            yield Occurrence(day=day, start=occurrence_start, end=occurrence_start + duration)
        day += timedelta(days=1)


def instance_name(name: str, day: date) -> str:
    return f"{name} ({day.isoformat()})"
