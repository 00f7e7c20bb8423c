"""Tests for recurrence expansion."""

import datetime
from datetime import date, timedelta

from events.service import recurrence


def _utc(*args: int) -> datetime.datetime:
    return datetime.datetime(*args, tzinfo=datetime.UTC)


class TestExpand:
    def test_one_occurrence_per_matching_weekday(self) -> None:
        """2025-01-03 is a Friday (5) and 2025-01-04 a Saturday (6)."""
        occurrences = list(
            recurrence.expand(
                _utc(2025, 1, 3, 22),
                _utc(2025, 1, 4, 4),
                start_date=date(2025, 1, 1),
                end_date=date(2025, 1, 14),
                days_of_week=[5, 6],
            )
        )

        assert [o.day for o in occurrences] == [
            date(2025, 1, 3),
            date(2025, 1, 4),
            date(2025, 1, 10),
            date(2025, 1, 11),
        ]

    def test_time_of_day_and_duration_are_kept(self) -> None:
        [occurrence] = recurrence.expand(
            _utc(2025, 1, 3, 22),
            _utc(2025, 1, 4, 4),
            start_date=date(2025, 1, 5),
            end_date=date(2025, 1, 5),
            days_of_week=[0],
        )

        assert occurrence.start == _utc(2025, 1, 5, 22)
        assert occurrence.end - occurrence.start == timedelta(hours=6)

    def test_sunday_is_zero(self) -> None:
        assert recurrence.python_weekday_to_sunday_first(date(2025, 1, 5).weekday()) == 0
        assert recurrence.python_weekday_to_sunday_first(date(2025, 1, 6).weekday()) == 1

    def test_window_without_matching_weekday_yields_nothing(self) -> None:
        occurrences = recurrence.expand(
            _utc(2025, 1, 3, 22),
            _utc(2025, 1, 4, 4),
            start_date=date(2025, 1, 6),
            end_date=date(2025, 1, 7),
            days_of_week=[5],
        )

        assert list(occurrences) == []

    def test_instance_name(self) -> None:
        assert recurrence.instance_name("Friday Night", date(2025, 1, 3)) == "Friday Night (2025-01-03)"
