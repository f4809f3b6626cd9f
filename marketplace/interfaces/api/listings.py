"""Listings API routes — browse, create, views, status and featuring."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from marketplace.application.services.listing_service import (
    change_listing_status,
    create_listing,
    get_featured_listings,
    get_listing_by_id,
    get_listings,
    get_user_listings,
    increment_views,
    set_listing_featured,
    to_listing_read,
)
from marketplace.config import get_settings
from marketplace.core.exceptions import EntityNotFoundError
from marketplace.domain.models.user import User
from marketplace.domain.repositories.admin_role_repository import AdminRoleRepository
from marketplace.domain.repositories.category_repository import CategoryRepository
from marketplace.domain.repositories.listing_repository import ListingRepository
from marketplace.domain.schemas.listing import (
    FeaturedUpdate,
    ListingCreate,
    ListingFilter,
    ListingRead,
    StatusUpdate,
)
from marketplace.infrastructure.storage import LocalBlobStore
from marketplace.interfaces.api.deps import get_current_user, get_optional_user, user_id_of
from marketplace.interfaces.deps import (
    get_admin_role_repository,
    get_blob_store,
    get_category_repository,
    get_listing_repository,
)

settings = get_settings()
router = APIRouter(prefix="/api/listings", tags=["Listings"])


@router.get("", response_model=list[ListingRead])
def list_listings(
    category_id: Optional[int] = None,
    location: Optional[str] = None,
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    search: Optional[str] = None,
    limit: int = Query(settings.DEFAULT_LISTING_LIMIT, ge=1, le=100),
    repo: ListingRepository = Depends(get_listing_repository),
    blob_store: LocalBlobStore = Depends(get_blob_store),
):
    filters = ListingFilter(
        category_id=category_id,
        location=location,
        min_price=min_price,
        max_price=max_price,
        search=search,
        limit=limit,
    )
    return get_listings(repo, blob_store, filters)


@router.get("/featured", response_model=list[ListingRead])
def featured_listings(
    repo: ListingRepository = Depends(get_listing_repository),
    blob_store: LocalBlobStore = Depends(get_blob_store),
):
    return get_featured_listings(repo, blob_store)


@router.get("/mine", response_model=list[ListingRead])
def my_listings(
    repo: ListingRepository = Depends(get_listing_repository),
    blob_store: LocalBlobStore = Depends(get_blob_store),
    user: Optional[User] = Depends(get_optional_user),
):
    return get_user_listings(repo, blob_store, user_id_of(user))


@router.get("/{listing_id}", response_model=ListingRead)
def listing_detail(
    listing_id: int,
    repo: ListingRepository = Depends(get_listing_repository),
    blob_store: LocalBlobStore = Depends(get_blob_store),
):
    listing = get_listing_by_id(repo, blob_store, listing_id)
    if listing is None:
        raise EntityNotFoundError("Listing not found", details={"listing_id": listing_id})
    return listing


@router.post("", response_model=ListingRead, status_code=status.HTTP_201_CREATED)
def new_listing(
    body: ListingCreate,
    repo: ListingRepository = Depends(get_listing_repository),
    category_repo: CategoryRepository = Depends(get_category_repository),
    blob_store: LocalBlobStore = Depends(get_blob_store),
    user: User = Depends(get_current_user),
):
    listing = create_listing(repo, category_repo, blob_store, user.id, body)
    return to_listing_read(listing, blob_store)


@router.post("/{listing_id}/views", status_code=status.HTTP_204_NO_CONTENT)
def record_view(listing_id: int, repo: ListingRepository = Depends(get_listing_repository)):
    increment_views(repo, listing_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{listing_id}/status", response_model=ListingRead)
def update_status(
    listing_id: int,
    body: StatusUpdate,
    repo: ListingRepository = Depends(get_listing_repository),
    role_repo: AdminRoleRepository = Depends(get_admin_role_repository),
    blob_store: LocalBlobStore = Depends(get_blob_store),
    user: User = Depends(get_current_user),
):
    listing = change_listing_status(repo, role_repo, user.id, listing_id, body.status)
    return to_listing_read(listing, blob_store)


@router.patch("/{listing_id}/featured", response_model=ListingRead)
def update_featured(
    listing_id: int,
    body: FeaturedUpdate,
    repo: ListingRepository = Depends(get_listing_repository),
    role_repo: AdminRoleRepository = Depends(get_admin_role_repository),
    blob_store: LocalBlobStore = Depends(get_blob_store),
    user: User = Depends(get_current_user),
):
    listing = set_listing_featured(repo, role_repo, user.id, listing_id, body.featured)
    return to_listing_read(listing, blob_store)
