"""Celery tasks for event management."""

import structlog
from celery import shared_task

from .models import Event
from .service import reconciliation

logger = structlog.get_logger(__name__)


@shared_task
def reconcile_summaries() -> dict[str, list[str]]:
    """Periodic consistency check of every event's table, guest list and ticket summaries."""
    return reconciliation.reconcile_all()


@shared_task
def reconcile_event(event_id: str) -> list[str]:
    """Consistency check of a single event."""
    event = Event.objects.filter(pk=event_id).first()
    if event is None:
        logger.warning("reconcile_event_missing", event_id=event_id)
        return []
    return reconciliation.reconcile_event_summaries(event)
