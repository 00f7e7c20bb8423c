import typing as t

from accounts.models import VenueUser
from common.utils import to_json_safe
from events.models import ActivityLog, Company, Event


def log_activity(
    company: Company,
    action: str,
    *,
    user: VenueUser | None = None,
    event: Event | None = None,
    **details: t.Any,
) -> ActivityLog:
    """Append an entry to the company's activity log."""
    return ActivityLog.objects.create(
        company=company,
        event=event,
        action=action,
        actor=user,
        actor_name=user.display_name if user else "",
        details=to_json_safe(details),
    )
