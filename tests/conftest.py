"""Root conftest — shared test configuration and factories."""

import os
import tempfile
from pathlib import Path

_TEST_DIR = Path(tempfile.mkdtemp(prefix="marketplace-tests-"))

# Settings are read on first import, so these must be set before any
# marketplace module is imported.
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TEST_DIR / 'app.db'}")
os.environ.setdefault("UPLOAD_DIR", str(_TEST_DIR / "uploads"))
os.environ.setdefault("SECRET_KEY", "tests-secret-key")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from marketplace.main import app
from marketplace.infrastructure.database import Base, get_db
from marketplace.application.services.auth_service import create_access_token, hash_password
from marketplace.domain.models.admin_role import AdminRole
from marketplace.domain.models.category import Category
from marketplace.domain.models.listing import Listing
from marketplace.domain.models.message import Message
from marketplace.domain.models.saved_listing import SavedListing
from marketplace.domain.models.stored_file import StoredFile
from marketplace.domain.models.user import User
from marketplace.infrastructure.repositories.admin_role_repository import SQLAlchemyAdminRoleRepository
from marketplace.infrastructure.repositories.category_repository import SQLAlchemyCategoryRepository
from marketplace.infrastructure.repositories.listing_repository import SQLAlchemyListingRepository
from marketplace.infrastructure.repositories.message_repository import SQLAlchemyMessageRepository
from marketplace.infrastructure.repositories.saved_listing_repository import SQLAlchemySavedListingRepository
from marketplace.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from marketplace.infrastructure.storage import LocalBlobStore

PASSWORD = "correct-horse-battery"


# ─── Database ────────────────────────────────────────────────────

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


# ─── Repositories ────────────────────────────────────────────────

@pytest.fixture
def user_repo(db):
    return SQLAlchemyUserRepository(db, User)


@pytest.fixture
def role_repo(db):
    return SQLAlchemyAdminRoleRepository(db, AdminRole)


@pytest.fixture
def listing_repo(db):
    return SQLAlchemyListingRepository(db, Listing)


@pytest.fixture
def message_repo(db):
    return SQLAlchemyMessageRepository(db, Message)


@pytest.fixture
def category_repo(db):
    return SQLAlchemyCategoryRepository(db, Category)


@pytest.fixture
def saved_repo(db):
    return SQLAlchemySavedListingRepository(db, SavedListing)


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def blob_store(db, upload_dir):
    return LocalBlobStore(db, root=str(upload_dir))


# ─── Factories ───────────────────────────────────────────────────

@pytest.fixture
def password():
    return PASSWORD


@pytest.fixture(scope="session")
def password_hash():
    """bcrypt is slow, so every test user shares one hash."""
    return hash_password(PASSWORD)


@pytest.fixture
def make_user(db, password_hash):
    def _make_user(name="Alice", email=None, is_active=True):
        user = User(
            name=name,
            email=email or f"{name.lower()}@example.com",
            password_hash=password_hash,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def make_role(db):
    def _make_role(user, role="moderator", granted_by=None):
        from datetime import datetime, timezone

        record = AdminRole(
            user_id=user.id,
            role=role,
            granted_by=(granted_by or user).id,
            granted_at=datetime.now(timezone.utc),
        )
        db.add(record)
        db.commit()
        db.refresh(record)
        return record
    return _make_role


@pytest.fixture
def category(db):
    category = Category(name="Electronics", slug="electronics", icon="💻", description="Gadgets")
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def make_image(db, upload_dir):
    def _make_image(name="photo.png"):
        stored = StoredFile(
            filename=f"stored-{name}",
            original_name=name,
            content_type="image/png",
            size=4,
        )
        (upload_dir / stored.filename).write_bytes(b"\x89PNG")
        db.add(stored)
        db.commit()
        db.refresh(stored)
        return stored
    return _make_image


@pytest.fixture
def make_listing(db, category, make_image):
    def _make_listing(seller, title="Used laptop", status="pending", price=350.0,
                      location="Lisbon", featured=False, category_id=None):
        image = make_image(f"{title.replace(' ', '-')}-{seller.id}.png")
        listing = Listing(
            title=title,
            description=f"{title} in good shape",
            price=price,
            category_id=category_id or category.id,
            condition="used",
            location=location,
            seller_id=seller.id,
            images=[image.id],
            status=status,
            featured=featured,
            views=0,
        )
        db.add(listing)
        db.commit()
        db.refresh(listing)
        return listing
    return _make_listing


@pytest.fixture
def make_message(db):
    def _make_message(listing, sender, receiver, content="Is this still available?", read=False):
        message = Message(
            listing_id=listing.id,
            sender_id=sender.id,
            receiver_id=receiver.id,
            content=content,
            read=read,
        )
        db.add(message)
        db.commit()
        db.refresh(message)
        return message
    return _make_message


# ─── HTTP ────────────────────────────────────────────────────────

@pytest.fixture
def client(session_factory, upload_dir, monkeypatch):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    from marketplace.config import get_settings
    monkeypatch.setattr(get_settings(), "UPLOAD_DIR", str(upload_dir))

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def auth_headers(user) -> dict:
    token = create_access_token({"sub": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers
