"""Admin API routes — super admin bootstrap, role management and moderation."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from marketplace.application.services.admin_service import (
    approve_listing,
    get_admin_stats,
    get_pending_listings,
    grant_admin_role,
    initialize_super_admin,
    list_admins,
    reject_listing,
    revoke_admin_role,
)
from marketplace.application.services.authorization_service import get_my_admin_status
from marketplace.application.services.listing_service import to_listing_read
from marketplace.domain.models.user import User
from marketplace.domain.repositories.admin_role_repository import AdminRoleRepository
from marketplace.domain.repositories.listing_repository import ListingRepository
from marketplace.domain.repositories.user_repository import UserRepository
from marketplace.domain.schemas.admin import (
    AdminRoleRead,
    AdminStats,
    AdminStatus,
    GrantRoleRequest,
    InitializeSuperAdminRequest,
    OperationResult,
    RevokeRoleRequest,
)
from marketplace.domain.schemas.listing import ListingPage, ListingRead
from marketplace.infrastructure.storage import LocalBlobStore
from marketplace.interfaces.api.deps import get_current_user, get_optional_user, user_id_of
from marketplace.interfaces.deps import (
    get_admin_role_repository,
    get_blob_store,
    get_listing_repository,
    get_user_repository,
)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.post("/initialize", response_model=OperationResult)
def initialize(
    body: InitializeSuperAdminRequest,
    role_repo: AdminRoleRepository = Depends(get_admin_role_repository),
    user_repo: UserRepository = Depends(get_user_repository),
):
    """One-time bootstrap of the first super admin. Disabled once one exists."""
    return initialize_super_admin(role_repo, user_repo, body.email)


@router.get("/me", response_model=AdminStatus)
def my_admin_status(
    role_repo: AdminRoleRepository = Depends(get_admin_role_repository),
    user: Optional[User] = Depends(get_optional_user),
):
    return get_my_admin_status(role_repo, user_id_of(user))


@router.get("/admins", response_model=list[AdminRoleRead])
def admins(
    role_repo: AdminRoleRepository = Depends(get_admin_role_repository),
    user: User = Depends(get_current_user),
):
    return list_admins(role_repo, user.id)


@router.post("/roles", response_model=OperationResult)
def grant_role(
    body: GrantRoleRequest,
    role_repo: AdminRoleRepository = Depends(get_admin_role_repository),
    user_repo: UserRepository = Depends(get_user_repository),
    user: User = Depends(get_current_user),
):
    return grant_admin_role(role_repo, user_repo, user.id, body.email, body.role)


@router.delete("/roles", response_model=OperationResult)
def revoke_role(
    body: RevokeRoleRequest,
    role_repo: AdminRoleRepository = Depends(get_admin_role_repository),
    user_repo: UserRepository = Depends(get_user_repository),
    user: User = Depends(get_current_user),
):
    return revoke_admin_role(role_repo, user_repo, user.id, body.email)


@router.get("/listings/pending", response_model=ListingPage)
def pending_listings(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    repo: ListingRepository = Depends(get_listing_repository),
    role_repo: AdminRoleRepository = Depends(get_admin_role_repository),
    blob_store: LocalBlobStore = Depends(get_blob_store),
    user: User = Depends(get_current_user),
):
    return get_pending_listings(repo, role_repo, blob_store, user.id, page, page_size)


@router.post("/listings/{listing_id}/approve", response_model=ListingRead)
def approve(
    listing_id: int,
    repo: ListingRepository = Depends(get_listing_repository),
    role_repo: AdminRoleRepository = Depends(get_admin_role_repository),
    blob_store: LocalBlobStore = Depends(get_blob_store),
    user: User = Depends(get_current_user),
):
    return to_listing_read(approve_listing(repo, role_repo, user.id, listing_id), blob_store)


@router.post("/listings/{listing_id}/reject", response_model=ListingRead)
def reject(
    listing_id: int,
    repo: ListingRepository = Depends(get_listing_repository),
    role_repo: AdminRoleRepository = Depends(get_admin_role_repository),
    blob_store: LocalBlobStore = Depends(get_blob_store),
    user: User = Depends(get_current_user),
):
    return to_listing_read(reject_listing(repo, role_repo, user.id, listing_id), blob_store)


@router.get("/stats", response_model=AdminStats)
def stats(
    repo: ListingRepository = Depends(get_listing_repository),
    role_repo: AdminRoleRepository = Depends(get_admin_role_repository),
    user_repo: UserRepository = Depends(get_user_repository),
    user: User = Depends(get_current_user),
):
    return get_admin_stats(repo, role_repo, user_repo, user.id)
