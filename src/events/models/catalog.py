"""Company-scoped reference entities that events point to.

Events snapshot the display name of each reference at write time
(see :class:`events.models.EventReference`).
"""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from common.models import TimeStampedModel

from .company import Company

CANVAS_VALIDATORS = [MinValueValidator(100), MaxValueValidator(10000)]


class Layout(TimeStampedModel):
    """A reusable floor plan. Its items are copied into a table list for every event using it."""

    class ItemType(models.TextChoices):
        TABLE = "ItemType.table", "Table"
        OBJECT = "ItemType.object", "Object"

    class ItemShape(models.TextChoices):
        SQUARE = "ItemShape.square", "Square"
        CIRCLE = "ItemShape.circle", "Circle"
        RECTANGLE = "ItemShape.rectangle", "Rectangle"
        OVAL = "ItemShape.oval", "Oval"

    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name="layouts")
    name = models.CharField(max_length=100)
    canvas_width = models.PositiveIntegerField(validators=CANVAS_VALIDATORS)
    canvas_height = models.PositiveIntegerField(validators=CANVAS_VALIDATORS)
    items = models.JSONField(default=list, blank=True)
    archived = models.BooleanField(default=False, db_index=True)
    archived_at = models.DateTimeField(null=True, blank=True)
    archived_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name

    @property
    def tables_count(self) -> int:
        return sum(1 for item in self.items if item.get("type") == self.ItemType.TABLE)

    @property
    def objects_count(self) -> int:
        return len(self.items) - self.tables_count


class Category(TimeStampedModel):
    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name="categories")
    name = models.CharField(max_length=100)

    class Meta:
        verbose_name_plural = "categories"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Genre(TimeStampedModel):
    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name="genres")
    name = models.CharField(max_length=100)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class MembershipCard(TimeStampedModel):
    """A club card template (e.g. free entry before midnight)."""

    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name="membership_cards")
    title = models.CharField(max_length=100)
    description = models.TextField(max_length=1000, blank=True, default="")
    image_url = models.CharField(max_length=500, blank=True, default="")
    valid_from = models.DateTimeField(null=True, blank=True)
    valid_to = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["title"]

    def __str__(self) -> str:
        return self.title
