from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja.errors import ValidationError as NinjaValidationError
from ninja_extra import NinjaExtraAPI

from accounts.controllers.auth import AuthController
from common.exceptions import VenueOpsError
from common.schema import ResponseOk, VersionResponse
from common.throttling import AnonDefaultThrottle, UserDefaultThrottle
from events.controllers import EVENTS_CONTROLLERS

from .exception_handlers import (
    handle_django_validation_error,
    handle_general_exception,
    handle_request_validation_error,
    handle_venue_ops_error,
)

api = NinjaExtraAPI(
    title="VenueOps API",
    docs_url="/docs",
    version=settings.VERSION,
    description=f"VenueOps API {settings.VERSION}",
    app_name=f"venueops-api-{settings.VERSION}",
    urls_namespace="api",
    servers=[
        {"url": settings.SERVICE_URL, "description": settings.SERVICE_DESCRIPTION},
    ],
    throttle=[AnonDefaultThrottle(), UserDefaultThrottle()],
)


@api.get("/version", tags=["Version"], response={200: VersionResponse})
def version(request: HttpRequest) -> tuple[int, VersionResponse]:
    """Get the API version.

    Args:
        request: The incoming HTTP request.

    Returns:
        The response status code and message.
    """
    return 200, VersionResponse(version=settings.VERSION)


@api.get("/healthcheck", tags=["Healthcheck"], response={200: ResponseOk})
def healthcheck(request: HttpRequest) -> tuple[int, ResponseOk]:
    """Check the health of the API."""
    return 200, ResponseOk()


api.register_controllers(
    AuthController,
    *EVENTS_CONTROLLERS,
)

EXCEPTION_HANDLERS = {
    Exception: handle_general_exception,
    VenueOpsError: handle_venue_ops_error,
    ValidationError: handle_django_validation_error,
    NinjaValidationError: handle_request_validation_error,
}

for exc, handler in EXCEPTION_HANDLERS.items():
    api.add_exception_handler(exc, handler)
