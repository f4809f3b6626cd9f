"""Category API routes."""

from fastapi import APIRouter, Depends, status

from marketplace.application.services.category_service import create_category, get_categories
from marketplace.domain.models.user import User
from marketplace.domain.repositories.admin_role_repository import AdminRoleRepository
from marketplace.domain.repositories.category_repository import CategoryRepository
from marketplace.domain.schemas.category import CategoryCreate, CategoryRead
from marketplace.interfaces.api.deps import get_current_user
from marketplace.interfaces.deps import get_admin_role_repository, get_category_repository

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("", response_model=list[CategoryRead])
def list_categories(repo: CategoryRepository = Depends(get_category_repository)):
    return [CategoryRead.model_validate(c) for c in get_categories(repo)]


@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
def add_category(
    body: CategoryCreate,
    repo: CategoryRepository = Depends(get_category_repository),
    role_repo: AdminRoleRepository = Depends(get_admin_role_repository),
    user: User = Depends(get_current_user),
):
    return CategoryRead.model_validate(create_category(repo, role_repo, user.id, body))
