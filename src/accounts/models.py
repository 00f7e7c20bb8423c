import re
import typing as t
import uuid

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models

from accounts.validators import normalize_phone_number, validate_phone_number


class VenueUserQueryset(models.QuerySet["VenueUser"]):
    """Queryset for VenueUser."""


class VenueUserManager(UserManager["VenueUser"]):
    def get_queryset(self) -> VenueUserQueryset:
        """Get queryset for VenueUser."""
        return VenueUserQueryset(self.model)


class VenueUser(AbstractUser):
    """An operator of one or more companies (owner or staff)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    phone_number = models.CharField(
        max_length=20, blank=True, default="", validators=[validate_phone_number], help_text="Phone number"
    )
    preferred_name = models.CharField(db_index=True, max_length=255, blank=True, help_text="Preferred name")

    objects = VenueUserManager()  # type: ignore[misc]

    class Meta:
        ordering = ["username"]

    def save(self, *args: t.Any, **kwargs: t.Any) -> None:
        """Normalize the phone number before saving."""
        if self.phone_number:
            self.phone_number = normalize_phone_number(self.phone_number)
        super().save(*args, **kwargs)

    @property
    def display_name(self) -> str:
        """Display name."""
        return self.get_display_name()

    def get_display_name(self) -> str:
        """Returns the user's preferred name, or their full name as a fallback."""
        return (
            self.preferred_name or self.get_full_name() or re.sub(r"(\W|_)+", " ", self.username.split("@")[0]).title()
        )
