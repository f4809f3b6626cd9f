"""Authorization service — resolves a caller's admin tier.

Nothing here caches: every check reads the caller's current role record, so
a grant or revoke is visible to the very next request.
"""

from typing import Optional

import structlog

from marketplace.core.exceptions import PermissionDeniedError
from marketplace.domain.repositories.admin_role_repository import AdminRoleRepository
from marketplace.domain.roles import AdminRoleLevel, has_permission
from marketplace.domain.schemas.admin import AdminStatus

logger = structlog.get_logger(__name__)


def resolve_role(repo: AdminRoleRepository, caller_id: Optional[int]) -> AdminRoleLevel:
    """Caller's admin tier. Anonymous callers and missing records are NONE."""
    if caller_id is None:
        return AdminRoleLevel.NONE
    record = repo.get_by_user_id(caller_id)
    if record is None:
        return AdminRoleLevel.NONE
    return AdminRoleLevel.from_role_name(record.role)


def caller_has_permission(
    repo: AdminRoleRepository,
    caller_id: Optional[int],
    required: AdminRoleLevel,
) -> bool:
    return has_permission(resolve_role(repo, caller_id), required)


def require_permission(
    repo: AdminRoleRepository,
    caller_id: Optional[int],
    required: AdminRoleLevel,
    message: Optional[str] = None,
) -> AdminRoleLevel:
    """Resolve the caller's tier, raising PermissionDeniedError if it is too low."""
    level = resolve_role(repo, caller_id)
    if not has_permission(level, required):
        logger.warning(
            "Permission denied",
            caller_id=caller_id,
            role=level.role_name,
            required=required.role_name,
        )
        raise PermissionDeniedError(message or f"{required.role_name} role required")
    return level


def get_my_admin_status(repo: AdminRoleRepository, caller_id: Optional[int]) -> AdminStatus:
    level = resolve_role(repo, caller_id)
    return AdminStatus(
        is_admin=has_permission(level, AdminRoleLevel.MODERATOR),
        role=level.role_name,
    )
