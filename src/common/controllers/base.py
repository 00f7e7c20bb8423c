import typing as t

from ninja_extra import ControllerBase

from accounts.models import VenueUser


class UserAwareController(ControllerBase):
    def user(self) -> VenueUser:
        """Get the user for this request."""
        return t.cast(VenueUser, self.context.request.user)  # type: ignore[union-attr]
