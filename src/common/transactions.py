"""Transaction helpers.

Mutations lock the rows they read with ``select_for_update``. Under contention the
database may still abort a transaction (serialization failure, deadlock, lock
timeout); such transactions are safe to replay from scratch.
"""

import functools
import typing as t

import structlog
from django.conf import settings
from django.db import OperationalError, transaction
from tenacity import Retrying, retry_if_exception, stop_after_attempt, wait_random_exponential

from .exceptions import TransactionConflictError

logger = structlog.get_logger(__name__)

P = t.ParamSpec("P")
R = t.TypeVar("R")

# serialization_failure, deadlock_detected, lock_not_available
CONFLICT_SQLSTATES = {"40001", "40P01", "55P03"}
# SQLITE_BUSY and SQLITE_LOCKED (shared-cache table locks)
SQLITE_LOCK_MESSAGES = ("database is locked", "database table is locked")


def is_conflict(exc: BaseException) -> bool:
    """Whether the exception is a retryable concurrency conflict."""
    if not isinstance(exc, OperationalError):
        return False
    cause = exc.__cause__
    sqlstate = getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)
    if sqlstate in CONFLICT_SQLSTATES:
        return True
    message = str(exc)
    return any(marker in message for marker in SQLITE_LOCK_MESSAGES)


def _log_retry(retry_state: t.Any) -> None:
    logger.warning(
        "transaction_conflict_retry",
        attempt=retry_state.attempt_number,
        function=getattr(retry_state.fn, "__qualname__", None),
    )


def retry_on_conflict(func: t.Callable[P, R]) -> t.Callable[P, R]:
    """Run ``func`` in its own transaction, replaying it on concurrency conflicts.

    Nested calls (already inside an atomic block) are not retried: only the
    outermost transaction can be safely replayed.

    Raises:
        TransactionConflictError: when every attempt was aborted by a conflict.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        def attempt() -> R:
            with transaction.atomic():
                return func(*args, **kwargs)

        if transaction.get_connection().in_atomic_block:
            return attempt()

        retrying = Retrying(
            retry=retry_if_exception(is_conflict),
            stop=stop_after_attempt(settings.TRANSACTION_MAX_ATTEMPTS),
            wait=wait_random_exponential(multiplier=0.05, max=1),
            before_sleep=_log_retry,
            reraise=True,
        )
        try:
            return retrying(attempt)
        except OperationalError as e:
            if not is_conflict(e):
                raise
            logger.error("transaction_conflict_exhausted", function=func.__qualname__)
            raise TransactionConflictError("The operation conflicted with concurrent changes, please retry.") from e

    return wrapper
