"""Tests for saved_listing_service."""

import pytest

from marketplace.application.services.saved_listing_service import (
    get_saved_listings,
    save_listing,
    unsave_listing,
)
from marketplace.core.exceptions import EntityNotFoundError


@pytest.fixture
def buyer(make_user):
    return make_user("Buyer")


@pytest.fixture
def listing(make_user, make_listing):
    return make_listing(make_user("Seller"), "Bookshelf", status="approved")


def test_save_listing_is_idempotent(saved_repo, listing_repo, buyer, listing):
    first = save_listing(saved_repo, listing_repo, buyer.id, listing.id)
    second = save_listing(saved_repo, listing_repo, buyer.id, listing.id)

    assert first["status"] == "saved"
    assert second == {"id": first["id"], "status": "already_saved"}
    assert saved_repo.count() == 1


def test_save_unknown_listing(saved_repo, listing_repo, buyer):
    with pytest.raises(EntityNotFoundError):
        save_listing(saved_repo, listing_repo, buyer.id, 999)


def test_unsave_listing(saved_repo, listing_repo, buyer, listing):
    save_listing(saved_repo, listing_repo, buyer.id, listing.id)

    assert unsave_listing(saved_repo, buyer.id, listing.id) == {"status": "removed"}
    assert unsave_listing(saved_repo, buyer.id, listing.id) == {"status": "removed"}
    assert saved_repo.count() == 0


def test_get_saved_listings(saved_repo, listing_repo, blob_store, buyer, listing, make_user):
    save_listing(saved_repo, listing_repo, buyer.id, listing.id)

    saved = get_saved_listings(saved_repo, blob_store, buyer.id)

    assert [item.id for item in saved] == [listing.id]
    assert saved[0].title == "Bookshelf"
    assert get_saved_listings(saved_repo, blob_store, make_user("Someone").id) == []
