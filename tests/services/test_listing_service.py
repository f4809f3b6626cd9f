"""Listing lifecycle manager — tests for listing_service.

Tests cover:
    - create_listing starts listings pending, validates category and images
    - change_listing_status enforces the state machine against stored state
    - rejected transitions leave the listing untouched
    - set_listing_featured is moderator-only and status independent
    - browsing only shows approved listings, with filters and literal search
    - increment_views counts and ignores unknown listings
"""

import pytest

from marketplace.application.services.listing_service import (
    change_listing_status,
    create_listing,
    get_featured_listings,
    get_listing_by_id,
    get_listings,
    get_user_listings,
    increment_views,
    set_listing_featured,
)
from marketplace.core.exceptions import (
    BusinessRuleViolationError,
    EntityNotFoundError,
    InvalidTransitionError,
    PermissionDeniedError,
    UnauthenticatedError,
)
from marketplace.domain.listing_status import ListingStatus
from marketplace.domain.schemas.listing import ListingCreate, ListingFilter


@pytest.fixture
def seller(make_user):
    return make_user("Seller")


@pytest.fixture
def moderator(make_user, make_role):
    user = make_user("Mod")
    make_role(user, "moderator")
    return user


@pytest.fixture
def boss(make_user, make_role):
    user = make_user("Boss")
    make_role(user, "super_admin")
    return user


def _payload(category, stored_images=(), **overrides):
    data = {
        "title": "Road bike",
        "description": "Aluminium frame, 54cm",
        "price": 420.0,
        "category_id": category.id,
        "condition": "used",
        "location": "Porto",
        "images": [image.id for image in stored_images],
    }
    data.update(overrides)
    return ListingCreate(**data)


def _reload(db, listing):
    db.expire_all()
    return db.get(type(listing), listing.id)


# ─── create_listing ──────────────────────────────────────────────

def test_create_listing_starts_pending(listing_repo, category_repo, blob_store, seller, category, make_image):
    images = [make_image("a.png"), make_image("b.png")]

    listing = create_listing(listing_repo, category_repo, blob_store, seller.id, _payload(category, images))

    assert listing.status == "pending"
    assert listing.seller_id == seller.id
    assert listing.views == 0
    assert listing.featured is False
    assert listing.images == [images[0].id, images[1].id]


def test_create_listing_requires_login(listing_repo, category_repo, blob_store, category, make_image):
    with pytest.raises(UnauthenticatedError):
        create_listing(listing_repo, category_repo, blob_store, None, _payload(category, [make_image()]))


def test_create_listing_unknown_category(listing_repo, category_repo, blob_store, seller, category, make_image):
    data = _payload(category, [make_image()], category_id=category.id + 100)
    with pytest.raises(EntityNotFoundError):
        create_listing(listing_repo, category_repo, blob_store, seller.id, data)


def test_create_listing_unknown_image(listing_repo, category_repo, blob_store, seller, category):
    data = _payload(category, images=[12345])
    with pytest.raises(BusinessRuleViolationError) as exc_info:
        create_listing(listing_repo, category_repo, blob_store, seller.id, data)
    assert exc_info.value.details == {"images": [12345]}
    assert listing_repo.count() == 0


def test_create_listing_duplicate_image(listing_repo, category_repo, blob_store, seller, category, make_image):
    image = make_image()
    data = _payload(category, [image, image])
    with pytest.raises(BusinessRuleViolationError):
        create_listing(listing_repo, category_repo, blob_store, seller.id, data)


@pytest.mark.parametrize(
    "overrides",
    [
        {"images": []},
        {"images": [1, 2, 3, 4, 5, 6]},
        {"price": -1},
        {"condition": "refurbished"},
    ],
)
def test_listing_payload_validation(category, overrides):
    from pydantic import ValidationError

    with pytest.raises(ValidationError):
        _payload(category, **{"images": [1], **overrides})


# ─── change_listing_status ───────────────────────────────────────

def test_moderator_approves_pending(db, listing_repo, role_repo, seller, moderator, make_listing):
    listing = make_listing(seller)

    change_listing_status(listing_repo, role_repo, moderator.id, listing.id, ListingStatus.APPROVED)

    assert _reload(db, listing).status == "approved"


def test_moderator_rejects_pending(db, listing_repo, role_repo, seller, moderator, make_listing):
    listing = make_listing(seller)
    change_listing_status(listing_repo, role_repo, moderator.id, listing.id, ListingStatus.REJECTED)
    assert _reload(db, listing).status == "rejected"


def test_non_admin_cannot_approve(db, listing_repo, role_repo, seller, make_user, make_listing):
    listing = make_listing(seller)
    stranger = make_user("Stranger")

    for caller in (seller, stranger):
        with pytest.raises(PermissionDeniedError):
            change_listing_status(listing_repo, role_repo, caller.id, listing.id, ListingStatus.APPROVED)
    assert _reload(db, listing).status == "pending"


def test_pending_to_sold_is_rejected(db, listing_repo, role_repo, seller, make_listing):
    listing = make_listing(seller)

    with pytest.raises(InvalidTransitionError):
        change_listing_status(listing_repo, role_repo, seller.id, listing.id, ListingStatus.SOLD)
    assert _reload(db, listing).status == "pending"


def test_only_seller_marks_sold(db, listing_repo, role_repo, seller, boss, make_listing):
    listing = make_listing(seller, status="approved")

    with pytest.raises(PermissionDeniedError):
        change_listing_status(listing_repo, role_repo, boss.id, listing.id, ListingStatus.SOLD)
    assert _reload(db, listing).status == "approved"

    change_listing_status(listing_repo, role_repo, seller.id, listing.id, ListingStatus.SOLD)
    assert _reload(db, listing).status == "sold"


def test_seller_resubmits_rejected(db, listing_repo, role_repo, seller, make_listing):
    listing = make_listing(seller, status="rejected")
    change_listing_status(listing_repo, role_repo, seller.id, listing.id, ListingStatus.PENDING)
    assert _reload(db, listing).status == "pending"


def test_admin_forces_sold_listing_back_to_pending(db, listing_repo, role_repo, seller, boss, make_listing):
    listing = make_listing(seller, status="sold")
    change_listing_status(listing_repo, role_repo, boss.id, listing.id, ListingStatus.PENDING)
    assert _reload(db, listing).status == "pending"


def test_status_change_only_touches_status(db, listing_repo, role_repo, seller, moderator, make_listing):
    listing = make_listing(seller, featured=True)
    columns = [c.key for c in listing.__table__.columns if c.key != "status"]
    before = {c: getattr(listing, c) for c in columns}

    change_listing_status(listing_repo, role_repo, moderator.id, listing.id, ListingStatus.APPROVED)

    after = _reload(db, listing)
    assert {c: getattr(after, c) for c in before} == before


def test_status_change_missing_listing(listing_repo, role_repo, moderator):
    with pytest.raises(EntityNotFoundError):
        change_listing_status(listing_repo, role_repo, moderator.id, 999, ListingStatus.APPROVED)


def test_status_change_requires_login(listing_repo, role_repo, seller, make_listing):
    listing = make_listing(seller)
    with pytest.raises(UnauthenticatedError):
        change_listing_status(listing_repo, role_repo, None, listing.id, ListingStatus.APPROVED)


# ─── set_listing_featured ────────────────────────────────────────

@pytest.mark.parametrize("status", ["pending", "approved", "rejected", "sold"])
def test_moderator_features_listing_in_any_status(db, listing_repo, role_repo, seller, moderator, make_listing, status):
    listing = make_listing(seller, status=status)

    set_listing_featured(listing_repo, role_repo, moderator.id, listing.id, True)

    reloaded = _reload(db, listing)
    assert reloaded.featured is True
    assert reloaded.status == status


def test_seller_cannot_feature_own_listing(db, listing_repo, role_repo, seller, make_listing):
    listing = make_listing(seller, status="approved")
    with pytest.raises(PermissionDeniedError):
        set_listing_featured(listing_repo, role_repo, seller.id, listing.id, True)
    assert _reload(db, listing).featured is False


def test_feature_missing_listing(listing_repo, role_repo, moderator):
    with pytest.raises(EntityNotFoundError):
        set_listing_featured(listing_repo, role_repo, moderator.id, 999, True)


# ─── browsing ────────────────────────────────────────────────────

def test_get_listings_only_approved(listing_repo, blob_store, seller, make_listing):
    make_listing(seller, "Pending lamp")
    approved = make_listing(seller, "Approved lamp", status="approved")
    make_listing(seller, "Sold lamp", status="sold")

    results = get_listings(listing_repo, blob_store, ListingFilter())

    assert [r.id for r in results] == [approved.id]
    assert results[0].seller.name == "Seller"
    assert results[0].category == "Electronics"
    assert results[0].image_urls == [f"/api/uploads/{approved.images[0]}"]


def test_get_listings_filters(listing_repo, blob_store, seller, make_listing):
    cheap = make_listing(seller, "Vintage camera", status="approved", price=50, location="Porto")
    make_listing(seller, "Vintage radio", status="approved", price=500, location="Porto")
    make_listing(seller, "Camera lens", status="approved", price=80, location="Lisbon")

    results = get_listings(
        listing_repo,
        blob_store,
        ListingFilter(search="camera", location="Porto", max_price=100),
    )
    assert [r.id for r in results] == [cheap.id]

    results = get_listings(listing_repo, blob_store, ListingFilter(min_price=60))
    assert {r.title for r in results} == {"Vintage radio", "Camera lens"}


def test_search_treats_wildcards_literally(listing_repo, blob_store, seller, make_listing):
    discount = make_listing(seller, "50% off bike", status="approved")
    make_listing(seller, "500 bikes", status="approved")
    underscored = make_listing(seller, "road_bike", status="approved")
    make_listing(seller, "roadXbike", status="approved")

    assert [r.id for r in get_listings(listing_repo, blob_store, ListingFilter(search="50%"))] == [discount.id]
    assert [r.id for r in get_listings(listing_repo, blob_store, ListingFilter(search="road_"))] == [underscored.id]


def test_get_listings_newest_first_with_limit(listing_repo, blob_store, seller, make_listing):
    listings = [make_listing(seller, f"Item {i}", status="approved") for i in range(3)]

    results = get_listings(listing_repo, blob_store, ListingFilter(limit=2))

    assert [r.id for r in results] == [listings[2].id, listings[1].id]


def test_featured_listings_are_approved_and_featured(listing_repo, blob_store, seller, make_listing):
    featured = make_listing(seller, "Featured", status="approved", featured=True)
    make_listing(seller, "Featured but pending", featured=True)
    make_listing(seller, "Plain", status="approved")

    assert [r.id for r in get_featured_listings(listing_repo, blob_store)] == [featured.id]


def test_missing_images_are_dropped_from_urls(db, listing_repo, blob_store, seller, make_listing, upload_dir):
    listing = make_listing(seller)
    for path in upload_dir.iterdir():
        path.unlink()

    result = get_listing_by_id(listing_repo, blob_store, listing.id)

    assert result.images == listing.images
    assert result.image_urls == []


def test_get_listing_by_id_missing(listing_repo, blob_store):
    assert get_listing_by_id(listing_repo, blob_store, 999) is None


def test_user_listings_include_every_status(listing_repo, blob_store, seller, make_user, make_listing):
    mine = [make_listing(seller, "A"), make_listing(seller, "B", status="rejected")]
    make_listing(make_user("Other"), "C", status="approved")

    results = get_user_listings(listing_repo, blob_store, seller.id)

    assert {r.id for r in results} == {listing.id for listing in mine}
    assert get_user_listings(listing_repo, blob_store, None) == []


# ─── increment_views ─────────────────────────────────────────────

def test_increment_views(db, listing_repo, seller, make_listing):
    listing = make_listing(seller)

    increment_views(listing_repo, listing.id)
    increment_views(listing_repo, listing.id)

    assert _reload(db, listing).views == 2


def test_increment_views_unknown_listing_is_ignored(listing_repo):
    increment_views(listing_repo, 999)
