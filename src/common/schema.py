"""Common schemas for the API."""

import typing as t

from ninja import Field, Schema
from pydantic import StringConstraints

StrippedString = t.Annotated[str, StringConstraints(strip_whitespace=True)]
OneToOneHundredString = t.Annotated[str, StringConstraints(min_length=1, max_length=100, strip_whitespace=True)]
OneToTwoHundredString = t.Annotated[str, StringConstraints(min_length=1, max_length=200, strip_whitespace=True)]
NonNegativeInt = t.Annotated[int, Field(ge=0)]


class VersionResponse(Schema):
    version: str


class ResponseOk(Schema):
    status: t.Literal["ok"] = "ok"


class OperationResult(Schema):
    """Envelope returned by every mutating operation."""

    success: bool = True
    message: str
    data: t.Any = None


class ErrorResponse(Schema):
    """Envelope returned when an operation fails."""

    success: bool = False
    error: str
    message: str
