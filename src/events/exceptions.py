from common.exceptions import VenueOpsError


class ReferenceNotFoundError(VenueOpsError):
    """Raised when a layout, category, membership card or genre id does not resolve within the company."""

    code = "ReferenceNotFound"
    status_code = 400

    def __init__(self, kind: str, ref_id: str) -> None:
        """Store the kind and id of the missing reference."""
        super().__init__(f"{kind} with id {ref_id} not found")
        self.kind = kind
        self.ref_id = ref_id


class NoChangesError(VenueOpsError):
    """Raised when an update would not change anything."""

    code = "NoChanges"
    status_code = 400


class CheckInLimitExceededError(VenueOpsError):
    """Raised when a guest would have more people checked in than on the list."""

    code = "CheckInLimitExceeded"
    status_code = 400


class HasSoldTicketsError(VenueOpsError):
    """Raised when removing a ticket type that already sold tickets."""

    code = "HasSoldTickets"
    status_code = 409


class InUseError(VenueOpsError):
    """Raised when deleting a catalog entity that events still reference."""

    code = "InUse"
    status_code = 409
