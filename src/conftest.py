"""Project-wide fixtures."""

import secrets
import string
import typing as t
from datetime import datetime, time, timedelta

import faker
import pytest
from django.core.cache import cache
from django.utils import timezone
from pytest import MonkeyPatch

from accounts.models import VenueUser


@pytest.fixture(autouse=True)
def increase_rate_limit(monkeypatch: MonkeyPatch) -> None:
    """Increase the rate limits for AuthThrottle to allow testing."""
    monkeypatch.setattr("common.throttling.AuthThrottle.rate", "1000/min")


@pytest.fixture(autouse=True)
def enable_celery_eager_mode(settings: t.Any) -> None:
    """Enable Celery eager mode for tests so tasks execute synchronously."""
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.CELERY_TASK_EAGER_PROPAGATES = True


@pytest.fixture(autouse=True)
def clear_cache() -> t.Iterator[None]:
    """Throttle counters live in the cache; start every test from a clean one."""
    cache.clear()
    yield
    cache.clear()


class VenueUserFactory:
    """Factory for creating VenueUser instances for testing."""

    fake = faker.Faker()

    def create_user(self, **kwargs: t.Any) -> VenueUser:
        username = kwargs.pop(
            "username", "".join(secrets.choice(string.ascii_lowercase) for _ in range(8)) + "@user.test"
        )
        email = kwargs.pop("email", username + ("@test.com" if "@" not in username else ""))
        password = kwargs.pop("password", "password")
        first_name = kwargs.pop("first_name", self.fake.first_name())
        last_name = kwargs.pop("last_name", self.fake.last_name())
        preferred_name = kwargs.pop("preferred_name", f"{first_name} {last_name}")
        return VenueUser.objects.create_user(
            username=username,
            email=email,
            password=password,
            preferred_name=preferred_name,
            first_name=first_name,
            last_name=last_name,
            **kwargs,
        )

    def __call__(self, **kwargs: t.Any) -> VenueUser:
        return self.create_user(**kwargs)


@pytest.fixture
def venue_user_factory() -> VenueUserFactory:
    return VenueUserFactory()


@pytest.fixture
def superuser(venue_user_factory: VenueUserFactory) -> VenueUser:
    """A superuser."""
    return venue_user_factory(is_superuser=True, is_staff=True)


@pytest.fixture
def next_week() -> datetime:
    """Noon, one week from today, in the current timezone."""
    same_time_next_week = timezone.now() + timedelta(days=7)
    return timezone.make_aware(
        datetime.combine(same_time_next_week.date(), time(hour=12, minute=0)),
        timezone.get_current_timezone(),
    )
