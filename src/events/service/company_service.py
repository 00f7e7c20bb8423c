import structlog
from django.db import transaction

from accounts.models import VenueUser
from events.models import Company, CompanyStaff
from events.service.activity_service import log_activity

logger = structlog.get_logger(__name__)


@transaction.atomic
def create_company(owner: VenueUser, name: str) -> Company:
    """Create a company owned by the caller."""
    company = Company.objects.create(owner=owner, name=name)
    log_activity(company, "company_created", user=owner, name=name)
    logger.info("company_created", company_id=str(company.id), owner_id=str(owner.id))
    return company


def add_staff(company: Company, user: VenueUser) -> CompanyStaff:
    staff, created = CompanyStaff.objects.get_or_create(company=company, user=user)
    if created:
        logger.info("company_staff_added", company_id=str(company.id), user_id=str(user.id))
    return staff
