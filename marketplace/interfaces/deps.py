"""
Repository and blob store dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from marketplace.domain.models.admin_role import AdminRole
from marketplace.domain.models.category import Category
from marketplace.domain.models.listing import Listing
from marketplace.domain.models.message import Message
from marketplace.domain.models.saved_listing import SavedListing
from marketplace.domain.models.user import User
from marketplace.domain.repositories.admin_role_repository import AdminRoleRepository
from marketplace.domain.repositories.category_repository import CategoryRepository
from marketplace.domain.repositories.listing_repository import ListingRepository
from marketplace.domain.repositories.message_repository import MessageRepository
from marketplace.domain.repositories.saved_listing_repository import SavedListingRepository
from marketplace.domain.repositories.user_repository import UserRepository
from marketplace.infrastructure.database import get_db
from marketplace.infrastructure.repositories.admin_role_repository import SQLAlchemyAdminRoleRepository
from marketplace.infrastructure.repositories.category_repository import SQLAlchemyCategoryRepository
from marketplace.infrastructure.repositories.listing_repository import SQLAlchemyListingRepository
from marketplace.infrastructure.repositories.message_repository import SQLAlchemyMessageRepository
from marketplace.infrastructure.repositories.saved_listing_repository import SQLAlchemySavedListingRepository
from marketplace.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from marketplace.infrastructure.storage import LocalBlobStore


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return SQLAlchemyUserRepository(db, User)


def get_admin_role_repository(db: Session = Depends(get_db)) -> AdminRoleRepository:
    return SQLAlchemyAdminRoleRepository(db, AdminRole)


def get_listing_repository(db: Session = Depends(get_db)) -> ListingRepository:
    return SQLAlchemyListingRepository(db, Listing)


def get_message_repository(db: Session = Depends(get_db)) -> MessageRepository:
    return SQLAlchemyMessageRepository(db, Message)


def get_category_repository(db: Session = Depends(get_db)) -> CategoryRepository:
    return SQLAlchemyCategoryRepository(db, Category)


def get_saved_listing_repository(db: Session = Depends(get_db)) -> SavedListingRepository:
    return SQLAlchemySavedListingRepository(db, SavedListing)


def get_blob_store(db: Session = Depends(get_db)) -> LocalBlobStore:
    return LocalBlobStore(db)
