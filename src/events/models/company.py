import typing as t

from django.conf import settings
from django.db import models

from accounts.validators import validate_phone_number
from common.models import TimeStampedModel

if t.TYPE_CHECKING:
    from accounts.models import VenueUser


class CompanyQuerySet(models.QuerySet["Company"]):
    def for_operator(self, user: "VenueUser") -> t.Self:
        """Companies the user owns or works for."""
        if user.is_superuser:
            return self.all()
        return self.filter(models.Q(owner=user) | models.Q(staff_members__user=user)).distinct()


class Company(TimeStampedModel):
    name = models.CharField(max_length=150, db_index=True)
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="owned_companies")

    objects = CompanyQuerySet.as_manager()

    class Meta:
        verbose_name_plural = "companies"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name

    def is_operator(self, user: "VenueUser") -> bool:
        """Owner or staff member."""
        if self.owner_id == user.pk or user.is_superuser:
            return True
        return self.staff_members.filter(user=user).exists()


class CompanyStaff(TimeStampedModel):
    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name="staff_members")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="company_staff_memberships"
    )

    class Meta:
        constraints = [models.UniqueConstraint(fields=["company", "user"], name="unique_company_staff")]

    def __str__(self) -> str:
        return f"{self.user} @ {self.company}"


class CompanyGuest(TimeStampedModel):
    """A person who has been on a guest list or booked a table at one of the company's events.

    ``visited_genres`` counts visits per genre name: ``{"Techno": {"nrOfTimes": 3}}``.
    """

    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name="guests")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="company_guest_profiles",
    )
    name = models.CharField(max_length=255)
    email = models.EmailField(blank=True, default="")
    phone_number = models.CharField(
        max_length=20, blank=True, default="", db_index=True, validators=[validate_phone_number]
    )
    total_spent = models.PositiveIntegerField(default=0)
    last_spent = models.PositiveIntegerField(default=0)
    visited_genres = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ["name"]
        indexes = [models.Index(fields=["company", "phone_number"], name="idx_company_guest_phone")]

    def __str__(self) -> str:
        return self.name
