from django.conf import settings
from django.db import models

from common.models import TimeStampedModel

from .company import Company
from .event import Event


class ActivityLog(TimeStampedModel):
    """Company-level audit trail (layouts, cards, events, tickets)."""

    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name="activity_logs")
    event = models.ForeignKey(Event, on_delete=models.CASCADE, null=True, blank=True, related_name="activity_logs")
    action = models.CharField(max_length=64, db_index=True)
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    actor_name = models.CharField(max_length=255, blank=True, default="")
    details = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.action
