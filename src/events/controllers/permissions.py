from django.http import HttpRequest
from ninja_extra import ControllerBase
from ninja_extra.permissions import BasePermission

from events import models


class CompanyPermission(BasePermission):
    """Only owners and staff members of a company may operate on it."""

    def has_permission(self, request: HttpRequest, controller: ControllerBase) -> bool:
        """Must implement abstract method. This is due to an error in Ninja Extra.

        This Method will be ignored, only has_object_permission will be called.
        """
        return True

    def has_object_permission(
        self,
        request: HttpRequest,
        controller: ControllerBase,
        obj: models.Company,
    ) -> bool:
        """Owner or staff member of the company."""
        return obj.is_operator(request.user)  # type: ignore[arg-type]
