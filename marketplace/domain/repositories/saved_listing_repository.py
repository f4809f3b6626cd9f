"""
Saved Listing Repository Interface.
"""

from typing import List, Optional

from marketplace.domain.repositories.base import BaseRepository
from marketplace.domain.models.saved_listing import SavedListing


class SavedListingRepository(BaseRepository[SavedListing]):
    """Interface for SavedListing-specific operations."""

    def get_for_user_and_listing(self, user_id: int, listing_id: int) -> Optional[SavedListing]:
        """The saved-listing record of a user for one listing, if any."""
        ...

    def get_for_user(self, user_id: int) -> List[SavedListing]:
        """A user's saved listings, most recently saved first."""
        ...
