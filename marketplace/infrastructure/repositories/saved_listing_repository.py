"""
SQLAlchemy Implementation of Saved Listing Repository.
"""

from typing import List, Optional

from marketplace.domain.models.saved_listing import SavedListing
from marketplace.domain.repositories.saved_listing_repository import SavedListingRepository
from marketplace.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemySavedListingRepository(SQLAlchemyRepository[SavedListing], SavedListingRepository):
    """SavedListing repository implementation using SQLAlchemy."""

    def get_for_user_and_listing(self, user_id: int, listing_id: int) -> Optional[SavedListing]:
        return (
            self.db.query(SavedListing)
            .filter(SavedListing.user_id == user_id, SavedListing.listing_id == listing_id)
            .first()
        )

    def get_for_user(self, user_id: int) -> List[SavedListing]:
        return (
            self.db.query(SavedListing)
            .filter(SavedListing.user_id == user_id)
            .order_by(SavedListing.created_at.desc(), SavedListing.id.desc())
            .all()
        )
