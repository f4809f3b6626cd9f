"""
Admin Role Repository Interface.
"""

from typing import List, Optional

from marketplace.domain.repositories.base import BaseRepository
from marketplace.domain.models.admin_role import AdminRole


class AdminRoleRepository(BaseRepository[AdminRole]):
    """Interface for AdminRole-specific operations."""

    def get_by_user_id(self, user_id: int) -> Optional[AdminRole]:
        """Get the single role record of a user, if any."""
        ...

    def exists_with_role(self, role: str) -> bool:
        """Whether any record holds the given role."""
        ...

    def count_with_role(self, role: str) -> int:
        """Number of records holding the given role."""
        ...

    def list_all(self) -> List[AdminRole]:
        """All role records, oldest grant first."""
        ...
