"""
User Repository Interface.
"""

from typing import Optional

from marketplace.domain.repositories.base import BaseRepository
from marketplace.domain.models.user import User


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email address."""
        ...
