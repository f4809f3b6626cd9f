"""Saved listing service — a user's favourites."""

from typing import List

import structlog

from marketplace.core.exceptions import EntityNotFoundError
from marketplace.domain.repositories.listing_repository import ListingRepository
from marketplace.domain.repositories.saved_listing_repository import SavedListingRepository
from marketplace.domain.schemas.listing import ListingRead
from marketplace.application.services.listing_service import to_listing_read
from marketplace.infrastructure.storage import LocalBlobStore

logger = structlog.get_logger(__name__)


def save_listing(
    repo: SavedListingRepository,
    listing_repo: ListingRepository,
    user_id: int,
    listing_id: int,
) -> dict:
    if listing_repo.get_by_id(listing_id) is None:
        raise EntityNotFoundError("Listing not found", details={"listing_id": listing_id})

    existing = repo.get_for_user_and_listing(user_id, listing_id)
    if existing:
        return {"id": existing.id, "status": "already_saved"}

    saved = repo.create({"user_id": user_id, "listing_id": listing_id})
    logger.info("Listing saved", user_id=user_id, listing_id=listing_id)
    return {"id": saved.id, "status": "saved"}


def unsave_listing(repo: SavedListingRepository, user_id: int, listing_id: int) -> dict:
    existing = repo.get_for_user_and_listing(user_id, listing_id)
    if existing:
        repo.delete(existing.id)
    return {"status": "removed"}


def get_saved_listings(
    repo: SavedListingRepository,
    blob_store: LocalBlobStore,
    user_id: int,
) -> List[ListingRead]:
    return [
        to_listing_read(saved.listing, blob_store)
        for saved in repo.get_for_user(user_id)
        if saved.listing is not None
    ]
