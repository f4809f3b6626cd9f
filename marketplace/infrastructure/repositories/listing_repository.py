"""
SQLAlchemy Implementation of Listing Repository.
"""

from typing import Any, Dict, List

from sqlalchemy import func

from marketplace.domain.listing_status import ListingStatus
from marketplace.domain.models.listing import Listing
from marketplace.domain.repositories.listing_repository import ListingRepository
from marketplace.domain.schemas.listing import ListingFilter
from marketplace.infrastructure.repositories.base_repository import SQLAlchemyRepository

NEWEST_FIRST = (Listing.created_at.desc(), Listing.id.desc())


def _escape_like(term: str) -> str:
    """Make % and _ in user input match literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLAlchemyListingRepository(SQLAlchemyRepository[Listing], ListingRepository):
    """Listing repository implementation using SQLAlchemy."""

    def get_approved(self, filters: ListingFilter) -> List[Listing]:
        """Approved listings matching the filters, newest first."""
        query = self.db.query(Listing).filter(Listing.status == ListingStatus.APPROVED.value)

        if filters.category_id:
            query = query.filter(Listing.category_id == filters.category_id)
        if filters.location:
            query = query.filter(Listing.location == filters.location)
        if filters.search:
            query = query.filter(Listing.title.ilike(f"%{_escape_like(filters.search.strip())}%", escape="\\"))
        if filters.min_price is not None:
            query = query.filter(Listing.price >= filters.min_price)
        if filters.max_price is not None:
            query = query.filter(Listing.price <= filters.max_price)

        return query.order_by(*NEWEST_FIRST).limit(filters.limit).all()

    def get_featured(self, limit: int) -> List[Listing]:
        return (
            self.db.query(Listing)
            .filter(
                Listing.status == ListingStatus.APPROVED.value,
                Listing.featured.is_(True),
            )
            .order_by(*NEWEST_FIRST)
            .limit(limit)
            .all()
        )

    def get_by_seller(self, seller_id: int) -> List[Listing]:
        return (
            self.db.query(Listing)
            .filter(Listing.seller_id == seller_id)
            .order_by(*NEWEST_FIRST)
            .all()
        )

    def get_by_status_paginated(self, status: str, page: int, page_size: int) -> Dict[str, Any]:
        query = self.db.query(Listing).filter(Listing.status == status)

        total = query.count()
        offset = (page - 1) * page_size
        listings = query.order_by(*NEWEST_FIRST).offset(offset).limit(page_size).all()

        return {
            "items": listings,
            "total": total,
            "page": page,
            "page_size": page_size,
            "total_pages": (total + page_size - 1) // page_size,
        }

    def count_by_status(self, status: str) -> int:
        return (
            self.db.query(func.count(Listing.id))
            .filter(Listing.status == status)
            .scalar()
        ) or 0

    def increment_views(self, listing_id: int) -> bool:
        """Single UPDATE so concurrent viewers never lose an increment."""
        updated = (
            self.db.query(Listing)
            .filter(Listing.id == listing_id)
            .update({Listing.views: Listing.views + 1}, synchronize_session="fetch")
        )
        self.db.commit()
        return updated > 0
