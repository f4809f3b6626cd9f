"""Category service — reference data for listing categories."""

from typing import List, Optional

import structlog

from marketplace.core.exceptions import BusinessRuleViolationError
from marketplace.domain.models.category import Category
from marketplace.domain.repositories.admin_role_repository import AdminRoleRepository
from marketplace.domain.repositories.category_repository import CategoryRepository
from marketplace.domain.roles import AdminRoleLevel
from marketplace.domain.schemas.category import CategoryCreate
from marketplace.application.services.authorization_service import require_permission

logger = structlog.get_logger(__name__)

DEFAULT_CATEGORIES = [
    {"name": "Mobile Phones", "slug": "phones", "icon": "📱", "description": "Smartphones and accessories"},
    {"name": "Vehicles", "slug": "vehicles", "icon": "🚗", "description": "Cars, motorcycles, and auto parts"},
    {"name": "Electronics", "slug": "electronics", "icon": "💻", "description": "Computers, TVs, and gadgets"},
    {"name": "Real Estate", "slug": "real-estate", "icon": "🏠", "description": "Houses, apartments, and land"},
    {"name": "Fashion", "slug": "fashion", "icon": "👕", "description": "Clothing, shoes, and accessories"},
    {"name": "Home & Garden", "slug": "home-garden", "icon": "🏡", "description": "Furniture and home decor"},
    {"name": "Services", "slug": "services", "icon": "🔧", "description": "Professional and personal services"},
    {"name": "Jobs", "slug": "jobs", "icon": "💼", "description": "Job opportunities and career"},
]


def get_categories(repo: CategoryRepository) -> List[Category]:
    return repo.list_by_name()


def create_category(
    repo: CategoryRepository,
    role_repo: AdminRoleRepository,
    caller_id: Optional[int],
    data: CategoryCreate,
) -> Category:
    require_permission(role_repo, caller_id, AdminRoleLevel.MODERATOR, "Only admins can create categories")
    if repo.get_by_slug(data.slug):
        raise BusinessRuleViolationError("Category slug already exists", details={"slug": data.slug})

    category = repo.create(data)
    logger.info("Category created", category_id=category.id, slug=category.slug)
    return category


def seed_categories(repo: CategoryRepository) -> int:
    """Insert the default categories when there are none. Returns how many were added."""
    if repo.count() > 0:
        return 0
    repo.create_many(DEFAULT_CATEGORIES)
    logger.info("Default categories seeded", count=len(DEFAULT_CATEGORIES))
    return len(DEFAULT_CATEGORIES)
