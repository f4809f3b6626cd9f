"""
Listing Repository Interface.
Defines specific data access operations for Listings.
"""

from typing import Any, Dict, List

from marketplace.domain.repositories.base import BaseRepository
from marketplace.domain.models.listing import Listing
from marketplace.domain.schemas.listing import ListingFilter


class ListingRepository(BaseRepository[Listing]):
    """Interface for Listing-specific operations."""

    def get_approved(self, filters: ListingFilter) -> List[Listing]:
        """Approved listings matching the filters, newest first."""
        ...

    def get_featured(self, limit: int) -> List[Listing]:
        """Approved featured listings, newest first."""
        ...

    def get_by_seller(self, seller_id: int) -> List[Listing]:
        """All listings of a seller in any status, newest first."""
        ...

    def get_by_status_paginated(self, status: str, page: int, page_size: int) -> Dict[str, Any]:
        """One page of listings in a status, newest first."""
        ...

    def count_by_status(self, status: str) -> int:
        """Number of listings in a status."""
        ...

    def increment_views(self, listing_id: int) -> bool:
        """Atomically add one view. False when the listing does not exist."""
        ...
