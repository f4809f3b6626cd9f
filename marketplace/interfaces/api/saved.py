"""Saved listings API routes."""

from fastapi import APIRouter, Depends, status

from marketplace.application.services.saved_listing_service import (
    get_saved_listings,
    save_listing,
    unsave_listing,
)
from marketplace.domain.models.user import User
from marketplace.domain.repositories.listing_repository import ListingRepository
from marketplace.domain.repositories.saved_listing_repository import SavedListingRepository
from marketplace.domain.schemas.listing import ListingRead
from marketplace.infrastructure.storage import LocalBlobStore
from marketplace.interfaces.api.deps import get_current_user
from marketplace.interfaces.deps import (
    get_blob_store,
    get_listing_repository,
    get_saved_listing_repository,
)

router = APIRouter(prefix="/api/saved", tags=["Saved"])


@router.get("", response_model=list[ListingRead])
def list_saved(
    repo: SavedListingRepository = Depends(get_saved_listing_repository),
    blob_store: LocalBlobStore = Depends(get_blob_store),
    user: User = Depends(get_current_user),
):
    return get_saved_listings(repo, blob_store, user.id)


@router.post("/{listing_id}", status_code=status.HTTP_201_CREATED)
def save(
    listing_id: int,
    repo: SavedListingRepository = Depends(get_saved_listing_repository),
    listing_repo: ListingRepository = Depends(get_listing_repository),
    user: User = Depends(get_current_user),
):
    return save_listing(repo, listing_repo, user.id, listing_id)


@router.delete("/{listing_id}")
def unsave(
    listing_id: int,
    repo: SavedListingRepository = Depends(get_saved_listing_repository),
    user: User = Depends(get_current_user),
):
    return unsave_listing(repo, user.id, listing_id)
