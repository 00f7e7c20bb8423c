import typing as t
from uuid import UUID

from django.db.models import QuerySet
from ninja import Schema

from common.controllers import UserAwareController
from common.exceptions import NotFoundError
from events import models


class CompanyScopedController(UserAwareController):
    """Base controller for endpoints nested under ``/companies/{company_id}``.

    Lookups raise ``NotFoundError`` for unknown ids and check the company permission
    before anything in the company is touched.
    """

    def get_company(self, company_id: UUID) -> models.Company:
        company = models.Company.objects.filter(pk=company_id).first()
        if company is None:
            raise NotFoundError("Company not found")
        self.check_object_permissions(company)
        return company

    def get_event(self, company_id: UUID, event_id: UUID) -> models.Event:
        company = self.get_company(company_id)
        event = models.Event.objects.filter(company=company, pk=event_id).select_related("company").first()
        if event is None:
            raise NotFoundError("Event not found")
        return t.cast(models.Event, event)

    def get_owned(self, model: type[t.Any], company_id: UUID, pk: UUID, label: str) -> t.Any:
        """Get a catalog entity of the company."""
        company = self.get_company(company_id)
        obj = model.objects.filter(company=company, pk=pk).first()
        if obj is None:
            raise NotFoundError(f"{label} not found")
        return obj

    @staticmethod
    def serialize(schema_cls: type[Schema], obj: t.Any) -> t.Any:
        """Render a model instance, or an iterable of them, as JSON-ready data."""
        if isinstance(obj, (list, tuple, QuerySet)):
            return [schema_cls.from_orm(item).model_dump(mode="json") for item in obj]
        return schema_cls.from_orm(obj).model_dump(mode="json")
