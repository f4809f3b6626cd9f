"""Listing service — creation, browsing and the status lifecycle."""

from typing import List, Optional

import structlog

from marketplace.config import get_settings
from marketplace.core.exceptions import (
    BusinessRuleViolationError,
    EntityNotFoundError,
    UnauthenticatedError,
)
from marketplace.domain.listing_status import INITIAL_STATUS, ListingStatus, check_status_change
from marketplace.domain.models.listing import Listing
from marketplace.domain.repositories.admin_role_repository import AdminRoleRepository
from marketplace.domain.repositories.category_repository import CategoryRepository
from marketplace.domain.repositories.listing_repository import ListingRepository
from marketplace.domain.roles import AdminRoleLevel
from marketplace.domain.schemas.listing import ListingCreate, ListingFilter, ListingRead, SellerSummary
from marketplace.application.services.authorization_service import require_permission, resolve_role
from marketplace.infrastructure.storage import LocalBlobStore

settings = get_settings()
logger = structlog.get_logger(__name__)


def to_listing_read(listing: Listing, blob_store: LocalBlobStore) -> ListingRead:
    """Shape a listing with its seller, category name and image URLs."""
    image_urls = [blob_store.get_url(image_id) for image_id in listing.images or []]
    return ListingRead(
        id=listing.id,
        title=listing.title,
        description=listing.description,
        price=listing.price,
        category_id=listing.category_id,
        category=listing.category.name if listing.category else "Unknown",
        condition=listing.condition,
        location=listing.location,
        seller_id=listing.seller_id,
        seller=SellerSummary.model_validate(listing.seller) if listing.seller else None,
        images=list(listing.images or []),
        image_urls=[url for url in image_urls if url],
        status=listing.status,
        featured=bool(listing.featured),
        views=listing.views or 0,
        created_at=listing.created_at,
    )


def get_listing_or_404(repo: ListingRepository, listing_id: int) -> Listing:
    listing = repo.get_by_id(listing_id)
    if listing is None:
        raise EntityNotFoundError("Listing not found", details={"listing_id": listing_id})
    return listing


# ─── Queries ─────────────────────────────────────────────────────


def get_listings(repo: ListingRepository, blob_store: LocalBlobStore, filters: ListingFilter) -> List[ListingRead]:
    """Approved listings matching the filters, newest first."""
    return [to_listing_read(listing, blob_store) for listing in repo.get_approved(filters)]


def get_featured_listings(repo: ListingRepository, blob_store: LocalBlobStore) -> List[ListingRead]:
    listings = repo.get_featured(settings.FEATURED_LISTING_LIMIT)
    return [to_listing_read(listing, blob_store) for listing in listings]


def get_listing_by_id(repo: ListingRepository, blob_store: LocalBlobStore, listing_id: int) -> Optional[ListingRead]:
    listing = repo.get_by_id(listing_id)
    if listing is None:
        return None
    return to_listing_read(listing, blob_store)


def get_user_listings(
    repo: ListingRepository, blob_store: LocalBlobStore, seller_id: Optional[int]
) -> List[ListingRead]:
    """A seller's own listings in every status. Anonymous callers get none."""
    if seller_id is None:
        return []
    return [to_listing_read(listing, blob_store) for listing in repo.get_by_seller(seller_id)]


# ─── Mutations ───────────────────────────────────────────────────


def create_listing(
    repo: ListingRepository,
    category_repo: CategoryRepository,
    blob_store: LocalBlobStore,
    seller_id: Optional[int],
    data: ListingCreate,
) -> Listing:
    """Create a listing owned by the caller. New listings await moderation."""
    if seller_id is None:
        raise UnauthenticatedError("Must be logged in to create a listing")

    if category_repo.get_by_id(data.category_id) is None:
        raise EntityNotFoundError("Category not found", details={"category_id": data.category_id})

    if len(set(data.images)) != len(data.images):
        raise BusinessRuleViolationError("Each image can only be attached once")
    missing = set(data.images) - blob_store.existing_ids(data.images)
    if missing:
        raise BusinessRuleViolationError(
            "Unknown image reference",
            details={"images": sorted(missing)},
        )

    listing = repo.create(
        {
            **data.model_dump(),
            "seller_id": seller_id,
            "status": INITIAL_STATUS.value,
            "featured": False,
            "views": 0,
        }
    )
    logger.info("Listing created", listing_id=listing.id, seller_id=seller_id)
    return listing


def change_listing_status(
    repo: ListingRepository,
    role_repo: AdminRoleRepository,
    caller_id: Optional[int],
    listing_id: int,
    target: ListingStatus,
) -> Listing:
    """Move a listing to `target` if the caller may trigger that transition.

    Only `status` is written. A rejected request leaves the listing as it was.
    """
    if caller_id is None:
        raise UnauthenticatedError("Must be logged in")

    listing = get_listing_or_404(repo, listing_id)
    current = ListingStatus(listing.status)

    check_status_change(
        current,
        target,
        is_seller=listing.seller_id == caller_id,
        caller_level=resolve_role(role_repo, caller_id),
    )

    listing = repo.update(listing, {"status": target.value})
    logger.info(
        "Listing status changed",
        listing_id=listing_id,
        caller_id=caller_id,
        from_status=current.value,
        to_status=target.value,
    )
    return listing


def set_listing_featured(
    repo: ListingRepository,
    role_repo: AdminRoleRepository,
    caller_id: Optional[int],
    listing_id: int,
    featured: bool,
) -> Listing:
    """Feature or unfeature a listing in any status. Moderators and above."""
    require_permission(
        role_repo, caller_id, AdminRoleLevel.MODERATOR, "Only admins can feature listings"
    )
    listing = get_listing_or_404(repo, listing_id)

    listing = repo.update(listing, {"featured": featured})
    logger.info("Listing featured flag set", listing_id=listing_id, featured=featured, caller_id=caller_id)
    return listing


def increment_views(repo: ListingRepository, listing_id: int) -> None:
    """Count one view. Unknown listings are ignored."""
    if not repo.increment_views(listing_id):
        logger.debug("View for unknown listing ignored", listing_id=listing_id)

