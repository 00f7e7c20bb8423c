import typing as t

import structlog
from django.http import HttpRequest
from ninja_jwt.authentication import JWTAuth


class OperatorJWTAuth(JWTAuth):
    """JWT authentication that binds the operator to the structlog context.

    Every log event emitted while handling the request carries the authenticated
    operator's id, so ledger and inventory mutations can be traced back to a person.

    Usage:
        @api_controller("/companies", auth=OperatorJWTAuth())
        class CompanyController(UserAwareController): ...
    """

    def authenticate(self, request: HttpRequest, token: str) -> t.Any:
        """Authenticate the request and bind the user id to the log context.

        Args:
            request: The HTTP request object
            token: The JWT token string

        Returns:
            The authenticated user object

        Raises:
            AuthenticationFailed: If authentication fails
            InvalidToken: If the token is invalid
        """
        user = super().authenticate(request, token)
        if user is not None:
            structlog.contextvars.bind_contextvars(user_id=str(user.pk))
        return user
