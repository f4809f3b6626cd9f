"""
Category Repository Interface.
"""

from typing import Any, Dict, List, Optional

from marketplace.domain.repositories.base import BaseRepository
from marketplace.domain.models.category import Category


class CategoryRepository(BaseRepository[Category]):
    """Interface for Category-specific operations."""

    def get_by_slug(self, slug: str) -> Optional[Category]:
        """Get a category by slug."""
        ...

    def list_by_name(self) -> List[Category]:
        """All categories ordered by name."""
        ...

    def create_many(self, rows: List[Dict[str, Any]]) -> List[Category]:
        """Insert several categories in one commit."""
        ...
