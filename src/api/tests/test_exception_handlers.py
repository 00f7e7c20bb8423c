import typing as t

import pytest
from django.core.exceptions import ValidationError
from django.test import RequestFactory

from api.exception_handlers import (
    handle_django_validation_error,
    handle_general_exception,
    handle_venue_ops_error,
    obfuscate,
)
from common.exceptions import NotFoundError
from events.exceptions import InUseError


def test_obfuscate_hides_sensitive_keys() -> None:
    data = {"username": "door", "Password": "hunter2", "Authorization": "Bearer x", "nested": {"token": "y"}}

    assert obfuscate(data) == {
        "username": "door",
        "Password": "********",
        "Authorization": "********",
        "nested": {"token": "y"},
    }
    assert data["Password"] == "hunter2"


class TestHandlers:
    def test_domain_errors_keep_their_code_and_status(self) -> None:
        request = RequestFactory().get("/api/companies")

        response = handle_venue_ops_error(request, InUseError('Cannot delete genre "Techno"'))

        assert response.status_code == 409
        assert response.content.startswith(b"{")
        assert b'"error":"InUse"' in response.content.replace(b" ", b"")

    def test_not_found(self) -> None:
        response = handle_venue_ops_error(RequestFactory().get("/"), NotFoundError("Event not found"))

        assert response.status_code == 404

    def test_model_validation_error(self) -> None:
        error = ValidationError({"name": ["This field cannot be blank."]})

        response = handle_django_validation_error(RequestFactory().post("/"), error)

        assert response.status_code == 400
        assert b"name: This field cannot be blank." in response.content

    @pytest.mark.django_db
    def test_unexpected_errors_are_hidden(self, settings: t.Any) -> None:
        settings.DEBUG = False
        request = RequestFactory().post(
            "/api/auth/token/pair", data={"password": "secret"}, content_type="application/json"
        )

        response = handle_general_exception(request, RuntimeError("database password is secret"))

        assert response.status_code == 500
        assert b"secret" not in response.content
        assert b"Internal Server Error." in response.content
