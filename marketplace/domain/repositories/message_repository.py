"""
Message Repository Interface.
"""

from typing import List

from marketplace.domain.repositories.base import BaseRepository
from marketplace.domain.models.message import Message


class MessageRepository(BaseRepository[Message]):
    """Interface for Message-specific operations."""

    def get_for_user(self, user_id: int) -> List[Message]:
        """Messages sent or received by a user, newest first."""
        ...

    def get_between(self, listing_id: int, user_id: int, other_user_id: int) -> List[Message]:
        """Messages between two users about one listing, oldest first."""
        ...
