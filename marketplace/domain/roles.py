"""Admin role hierarchy.

Roles are ranked so that a higher tier includes every permission of the
tiers below it: super_admin ⊇ moderator ⊇ none.
"""

from enum import IntEnum
from typing import Literal, Optional

AdminRoleName = Literal["moderator", "super_admin"]


class AdminRoleLevel(IntEnum):
    NONE = 0
    MODERATOR = 1
    SUPER_ADMIN = 2

    @property
    def role_name(self) -> Optional[str]:
        """Stored role string, None for callers without a grant."""
        if self is AdminRoleLevel.NONE:
            return None
        return self.name.lower()

    @classmethod
    def from_role_name(cls, role: Optional[str]) -> "AdminRoleLevel":
        """Map a stored role string to a level. Unknown strings fail closed."""
        if not role:
            return cls.NONE
        try:
            level = cls[role.upper()]
        except KeyError:
            return cls.NONE
        return level


def has_permission(level: AdminRoleLevel, required: AdminRoleLevel) -> bool:
    """True when a caller at `level` may act at `required` level."""
    return level is not AdminRoleLevel.NONE and level >= required
