"""Errors shared by every app.

Each error carries the machine-readable ``code`` and the HTTP status the API
renders it with. Messages are human readable and safe to show to operators.
"""


class VenueOpsError(Exception):
    """Base class for errors surfaced to API callers as a structured result."""

    code = "ServerError"
    status_code = 500

    def __init__(self, message: str) -> None:
        """Store the message."""
        super().__init__(message)
        self.message = message


class InvalidInputError(VenueOpsError):
    """The request is well-formed but its content is not acceptable."""

    code = "ValidationError"
    status_code = 400


class NotFoundError(VenueOpsError):
    """A company, event, layout, guest or ticket does not exist."""

    code = "NotFound"
    status_code = 404


class TransactionConflictError(VenueOpsError):
    """The database kept aborting the transaction because of concurrent writers."""

    code = "TransactionConflict"
    status_code = 409
