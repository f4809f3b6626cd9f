"""Admin service — role grants, the super admin bootstrap and moderation."""

from datetime import datetime, timezone
from typing import List, Optional

import structlog

from marketplace.core.exceptions import (
    AlreadyInitializedError,
    BusinessRuleViolationError,
    EntityNotFoundError,
)
from marketplace.domain.listing_status import ListingStatus
from marketplace.domain.models.admin_role import AdminRole
from marketplace.domain.models.listing import Listing
from marketplace.domain.models.user import User
from marketplace.domain.repositories.admin_role_repository import AdminRoleRepository
from marketplace.domain.repositories.listing_repository import ListingRepository
from marketplace.domain.repositories.user_repository import UserRepository
from marketplace.domain.roles import AdminRoleLevel, AdminRoleName
from marketplace.domain.schemas.admin import AdminRoleRead, AdminStats, OperationResult
from marketplace.domain.schemas.auth import UserSummary
from marketplace.domain.schemas.listing import ListingPage
from marketplace.application.services.authorization_service import require_permission
from marketplace.application.services.listing_service import change_listing_status, to_listing_read
from marketplace.infrastructure.storage import LocalBlobStore

logger = structlog.get_logger(__name__)

SUPER_ADMIN = AdminRoleLevel.SUPER_ADMIN.role_name


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _get_user_by_email_or_404(user_repo: UserRepository, email: str, message: str = "User not found") -> User:
    user = user_repo.get_by_email(email)
    if user is None:
        raise EntityNotFoundError(message, details={"email": email})
    return user


def _ensure_not_last_super_admin(role_repo: AdminRoleRepository, record: Optional[AdminRole]) -> None:
    """Keep at least one super admin so the bootstrap never reopens."""
    if record is None or record.role != SUPER_ADMIN:
        return
    if role_repo.count_with_role(SUPER_ADMIN) <= 1:
        raise BusinessRuleViolationError(
            "Cannot remove the last super admin",
            details={"user_id": record.user_id},
        )


def _summary(user: Optional[User]) -> Optional[UserSummary]:
    return UserSummary.model_validate(user) if user else None


# ─── Role management ─────────────────────────────────────────────


def initialize_super_admin(
    role_repo: AdminRoleRepository,
    user_repo: UserRepository,
    email: str,
) -> OperationResult:
    """Make the user with `email` the first super admin.

    Only works while no super admin exists anywhere. The check queries the
    role table at call time and runs in the same session as the insert.
    """
    if role_repo.exists_with_role(SUPER_ADMIN):
        raise AlreadyInitializedError()

    user = _get_user_by_email_or_404(user_repo, email, "User with this email not found")

    role_repo.create(
        {
            "user_id": user.id,
            "role": SUPER_ADMIN,
            "granted_by": user.id,
            "granted_at": _now(),
        }
    )
    logger.info("Super admin initialized", user_id=user.id)
    return OperationResult(message="Super admin initialized successfully")


def grant_admin_role(
    role_repo: AdminRoleRepository,
    user_repo: UserRepository,
    caller_id: Optional[int],
    email: str,
    role: AdminRoleName,
) -> OperationResult:
    """Give `role` to the user with `email`, replacing any role they had."""
    require_permission(
        role_repo, caller_id, AdminRoleLevel.SUPER_ADMIN, "Only super admins can grant admin roles"
    )
    target = _get_user_by_email_or_404(user_repo, email)

    grant = {"role": role, "granted_by": caller_id, "granted_at": _now()}
    existing = role_repo.get_by_user_id(target.id)
    if role != SUPER_ADMIN:
        _ensure_not_last_super_admin(role_repo, existing)
    if existing:
        role_repo.update(existing, grant)
    else:
        role_repo.create({"user_id": target.id, **grant})

    logger.info(
        "Admin role granted",
        user_id=target.id,
        role=role,
        granted_by=caller_id,
        replaced=existing is not None,
    )
    return OperationResult(message=f"{role} role granted to {email}")


def revoke_admin_role(
    role_repo: AdminRoleRepository,
    user_repo: UserRepository,
    caller_id: Optional[int],
    email: str,
) -> OperationResult:
    """Remove the role of the user with `email`. Succeeds if they had none."""
    require_permission(
        role_repo, caller_id, AdminRoleLevel.SUPER_ADMIN, "Only super admins can revoke admin roles"
    )
    target = _get_user_by_email_or_404(user_repo, email)

    existing = role_repo.get_by_user_id(target.id)
    _ensure_not_last_super_admin(role_repo, existing)
    if existing:
        role_repo.delete(existing.id)
        logger.info("Admin role revoked", user_id=target.id, role=existing.role, revoked_by=caller_id)

    return OperationResult(message=f"Admin role revoked from {email}")


def list_admins(role_repo: AdminRoleRepository, caller_id: Optional[int]) -> List[AdminRoleRead]:
    require_permission(
        role_repo, caller_id, AdminRoleLevel.SUPER_ADMIN, "Only super admins can view all admins"
    )
    return [_to_admin_role_read(record) for record in role_repo.list_all()]


def _to_admin_role_read(record: AdminRole) -> AdminRoleRead:
    return AdminRoleRead(
        id=record.id,
        user_id=record.user_id,
        role=record.role,
        granted_by_id=record.granted_by,
        granted_at=record.granted_at,
        user=_summary(record.user),
        granted_by=_summary(record.granter),
    )


# ─── Moderation ──────────────────────────────────────────────────


def get_pending_listings(
    repo: ListingRepository,
    role_repo: AdminRoleRepository,
    blob_store: LocalBlobStore,
    caller_id: Optional[int],
    page: int = 1,
    page_size: int = 20,
) -> ListingPage:
    require_permission(role_repo, caller_id, AdminRoleLevel.MODERATOR, "Admin access required")
    result = repo.get_by_status_paginated(ListingStatus.PENDING.value, page, page_size)
    result["items"] = [to_listing_read(listing, blob_store) for listing in result["items"]]
    return ListingPage(**result)


def approve_listing(
    repo: ListingRepository,
    role_repo: AdminRoleRepository,
    caller_id: Optional[int],
    listing_id: int,
) -> Listing:
    return change_listing_status(repo, role_repo, caller_id, listing_id, ListingStatus.APPROVED)


def reject_listing(
    repo: ListingRepository,
    role_repo: AdminRoleRepository,
    caller_id: Optional[int],
    listing_id: int,
) -> Listing:
    return change_listing_status(repo, role_repo, caller_id, listing_id, ListingStatus.REJECTED)


def get_admin_stats(
    repo: ListingRepository,
    role_repo: AdminRoleRepository,
    user_repo: UserRepository,
    caller_id: Optional[int],
) -> AdminStats:
    require_permission(role_repo, caller_id, AdminRoleLevel.MODERATOR, "Admin access required")
    return AdminStats(
        total_listings=repo.count(),
        pending_listings=repo.count_by_status(ListingStatus.PENDING.value),
        approved_listings=repo.count_by_status(ListingStatus.APPROVED.value),
        total_users=user_repo.count(),
        total_admins=role_repo.count(),
    )
