from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route

from common.authentication import OperatorJWTAuth
from common.schema import OperationResult
from common.throttling import UserDefaultThrottle, WriteThrottle
from events import models, schema
from events.controllers.permissions import CompanyPermission
from events.service import catalog_service

from .base import CompanyScopedController


@api_controller(
    "/companies/{company_id}",
    auth=OperatorJWTAuth(),
    permissions=[CompanyPermission()],
    tags=["Catalog"],
    throttle=WriteThrottle(),
)
class CatalogController(CompanyScopedController):
    """Layouts, categories, genres and membership cards events can reference."""

    # ---- Layouts ----

    @route.get(
        "/layouts", url_name="list_layouts", response=list[schema.LayoutSchema], throttle=UserDefaultThrottle()
    )
    def list_layouts(self, company_id: UUID) -> QuerySet[models.Layout]:
        """Layouts that are not archived."""
        company = self.get_company(company_id)
        return models.Layout.objects.filter(company=company, archived=False).order_by("name")

    @route.post("/layouts", url_name="create_layout", response={201: OperationResult})
    def create_layout(self, company_id: UUID, payload: schema.LayoutCreateSchema) -> tuple[int, OperationResult]:
        company = self.get_company(company_id)
        layout = catalog_service.create_layout(company, self.user(), payload)
        return 201, OperationResult(
            message="Table layout created successfully", data=self.serialize(schema.LayoutSchema, layout)
        )

    @route.put("/layouts/{layout_id}", url_name="update_layout", response=OperationResult)
    def update_layout(self, company_id: UUID, layout_id: UUID, payload: schema.LayoutUpdateSchema) -> OperationResult:
        layout = self.get_owned(models.Layout, company_id, layout_id, "Layout")
        layout = catalog_service.update_layout(layout, self.user(), payload)
        return OperationResult(
            message="Table layout updated successfully", data=self.serialize(schema.LayoutSchema, layout)
        )

    @route.delete("/layouts/{layout_id}", url_name="archive_layout", response=OperationResult)
    def archive_layout(self, company_id: UUID, layout_id: UUID) -> OperationResult:
        """Archive a layout. It stays readable for events that copied it."""
        layout = self.get_owned(models.Layout, company_id, layout_id, "Layout")
        catalog_service.archive_layout(layout, self.user())
        return OperationResult(message="Table layout archived successfully", data={"id": str(layout_id)})

    # ---- Categories ----

    @route.post("/categories", url_name="create_category", response={201: OperationResult})
    def create_category(self, company_id: UUID, payload: schema.CatalogNameSchema) -> tuple[int, OperationResult]:
        company = self.get_company(company_id)
        category = catalog_service.create_category(company, self.user(), payload.name)
        return 201, OperationResult(
            message="Category created successfully", data=self.serialize(schema.CategorySchema, category)
        )

    @route.delete("/categories/{category_id}", url_name="delete_category", response=OperationResult)
    def delete_category(self, company_id: UUID, category_id: UUID) -> OperationResult:
        category = self.get_owned(models.Category, company_id, category_id, "Category")
        catalog_service.delete_category(category, self.user())
        return OperationResult(message="Category deleted successfully", data={"id": str(category_id)})

    # ---- Genres ----

    @route.post("/genres", url_name="create_genre", response={201: OperationResult})
    def create_genre(self, company_id: UUID, payload: schema.CatalogNameSchema) -> tuple[int, OperationResult]:
        company = self.get_company(company_id)
        genre = catalog_service.create_genre(company, self.user(), payload.name)
        return 201, OperationResult(
            message="Genre created successfully", data=self.serialize(schema.GenreSchema, genre)
        )

    @route.delete("/genres/{genre_id}", url_name="delete_genre", response=OperationResult)
    def delete_genre(self, company_id: UUID, genre_id: UUID) -> OperationResult:
        genre = self.get_owned(models.Genre, company_id, genre_id, "Genre")
        catalog_service.delete_genre(genre, self.user())
        return OperationResult(message="Genre deleted successfully", data={"id": str(genre_id)})

    # ---- Membership cards ----

    @route.post("/membership-cards", url_name="create_membership_card", response={201: OperationResult})
    def create_membership_card(
        self, company_id: UUID, payload: schema.MembershipCardCreateSchema
    ) -> tuple[int, OperationResult]:
        company = self.get_company(company_id)
        card = catalog_service.create_membership_card(company, self.user(), payload)
        return 201, OperationResult(
            message="Club card created successfully", data=self.serialize(schema.MembershipCardSchema, card)
        )

    @route.put("/membership-cards/{card_id}", url_name="update_membership_card", response=OperationResult)
    def update_membership_card(
        self, company_id: UUID, card_id: UUID, payload: schema.MembershipCardUpdateSchema
    ) -> OperationResult:
        card = self.get_owned(models.MembershipCard, company_id, card_id, "Club card")
        card = catalog_service.update_membership_card(card, self.user(), payload)
        return OperationResult(
            message="Club card updated successfully", data=self.serialize(schema.MembershipCardSchema, card)
        )

    @route.delete("/membership-cards/{card_id}", url_name="delete_membership_card", response=OperationResult)
    def delete_membership_card(self, company_id: UUID, card_id: UUID) -> OperationResult:
        card = self.get_owned(models.MembershipCard, company_id, card_id, "Club card")
        catalog_service.delete_membership_card(card, self.user())
        return OperationResult(message="Club card deleted successfully", data={"id": str(card_id)})
