"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marketplace.config import get_settings
from marketplace.infrastructure.database import engine, Base, SessionLocal
from marketplace.core.logging import configure_logging
from marketplace.core.middleware import setup_middleware
from marketplace.core.exceptions import AppError, global_exception_handler

# Import all models so SQLAlchemy knows about them
from marketplace.domain.models.user import User
from marketplace.domain.models.admin_role import AdminRole
from marketplace.domain.models.category import Category
from marketplace.domain.models.listing import Listing
from marketplace.domain.models.message import Message
from marketplace.domain.models.saved_listing import SavedListing
from marketplace.domain.models.stored_file import StoredFile

# Import routers
from marketplace.interfaces.api.auth import router as auth_router
from marketplace.interfaces.api.categories import router as categories_router
from marketplace.interfaces.api.listings import router as listings_router
from marketplace.interfaces.api.messages import router as messages_router
from marketplace.interfaces.api.saved import router as saved_router
from marketplace.interfaces.api.uploads import router as uploads_router
from marketplace.interfaces.api.admin import router as admin_router

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting marketplace API", env=settings.ENVIRONMENT)

    # Create DB tables (no migrations yet)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    from marketplace.application.services.category_service import seed_categories
    from marketplace.infrastructure.repositories.category_repository import SQLAlchemyCategoryRepository

    db = SessionLocal()
    try:
        seeded = seed_categories(SQLAlchemyCategoryRepository(db, Category))
        if seeded:
            logger.info("Categories seeded", count=seeded)
    finally:
        db.close()

    yield

    logger.info("Marketplace API stopped")


app = FastAPI(
    title="Marketplace",
    description="Classifieds marketplace API — listings, moderation and messaging",
    version="1.0.0",
    lifespan=lifespan,
)

# Setup Middleware (Correlation ID, Logging)
setup_middleware(app)

# Global Exception Handling
app.add_exception_handler(AppError, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# CORS is added last so it wraps everything else
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router)
app.include_router(categories_router)
app.include_router(listings_router)
app.include_router(messages_router)
app.include_router(saved_router)
app.include_router(uploads_router)
app.include_router(admin_router)


@app.get("/")
def root():
    return {
        "name": "Marketplace",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "healthy"}
