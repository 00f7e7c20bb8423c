"""Exception handlers for the API.

Every failure reaching a handler is rendered as ``{"success": false, "error": <code>, "message": <text>}``.
"""

import typing as t
from copy import deepcopy

import orjson
import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja.errors import ValidationError as NinjaValidationError
from ninja.responses import Response

from common.exceptions import VenueOpsError

logger = structlog.get_logger(__name__)


def _error(status: int, code: str, message: str, **extra: t.Any) -> Response:
    return Response(status=status, data={"success": False, "error": code, "message": message, **extra})


def handle_general_exception(request: HttpRequest, exc: Exception | t.Type[Exception]) -> Response:
    """Log the failure with the (obfuscated) request and hide its details from the caller."""
    json_payload = None
    if request.method in ("POST", "PUT", "PATCH") and request.headers.get("Content-Type") == "application/json":
        try:
            json_payload = obfuscate(orjson.loads(request.body))
        except orjson.JSONDecodeError:  # pragma: no cover
            json_payload = None
    logger.exception(
        "INTERNAL_SERVER_ERROR",
        path=f"{request.method} {request.path}",
        headers=obfuscate(dict(request.headers)),
        query=obfuscate(request.GET.dict()),
        json_payload=json_payload,
        user=str(request.user) if getattr(request, "user", None) else None,
    )
    extra = {"traceback": repr(exc)} if settings.DEBUG else {}
    return _error(500, "ServerError", "Internal Server Error.", **extra)


def handle_venue_ops_error(request: HttpRequest, exc: VenueOpsError | t.Type[VenueOpsError]) -> Response:
    """Render a domain error with its own code and status."""
    assert isinstance(exc, VenueOpsError)
    logger.info("operation_failed", error=exc.code, message=exc.message, path=request.path)
    return _error(exc.status_code, exc.code, exc.message)


def handle_django_validation_error(request: HttpRequest, exc: ValidationError | t.Type[ValidationError]) -> Response:
    """Handle a model validation error raised by ``full_clean``."""
    assert isinstance(exc, ValidationError)
    logger.warning("VALIDATION_ERROR", path=request.path)
    if hasattr(exc, "error_dict"):
        errors = {k: [ee for e in v for ee in e] for k, v in exc.error_dict.items()}
        message = "; ".join(f"{field}: {' '.join(msgs)}" for field, msgs in errors.items())
    else:
        errors = {"__all__": list(exc.messages)}
        message = " ".join(exc.messages)
    return _error(400, "ValidationError", message, errors=errors)


def handle_request_validation_error(
    request: HttpRequest, exc: NinjaValidationError | t.Type[NinjaValidationError]
) -> Response:
    """Handle a request that does not match its schema, naming the failing fields."""
    assert isinstance(exc, NinjaValidationError)
    errors = []
    for error in exc.errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "payload", "query", "path")]
        errors.append({"field": ".".join(loc) or "request", "message": str(error.get("msg", "invalid"))})
    message = "; ".join(f"{error['field']}: {error['message']}" for error in errors)
    return _error(400, "ValidationError", message, errors=errors)


SENSITIVE_KEYS = {"password", "token", "refresh", "access", "x-api-key", "authorization", "authentication"}


def obfuscate(data: dict[str, t.Any]) -> dict[str, t.Any]:
    """Obfuscate sensitive data in payloads and headers."""
    if not isinstance(data, dict):
        return data
    new_data = deepcopy(data)
    for key in data.keys():
        if key.lower() in SENSITIVE_KEYS:
            new_data[key] = "********"
    return new_data
