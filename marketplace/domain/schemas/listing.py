"""Pydantic schemas for Listing."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from marketplace.config import get_settings
from marketplace.domain.listing_status import ListingStatus

settings = get_settings()


class ListingCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    price: float = Field(ge=0)
    category_id: int
    condition: Literal["new", "used"]
    location: str = Field(min_length=1, max_length=200)
    images: list[int] = Field(min_length=1, max_length=settings.MAX_LISTING_IMAGES)


class ListingFilter(BaseModel):
    category_id: Optional[int] = None
    location: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    search: Optional[str] = None
    limit: int = settings.DEFAULT_LISTING_LIMIT


class SellerSummary(BaseModel):
    id: int
    name: str
    email: str

    model_config = {"from_attributes": True}


class ListingRead(BaseModel):
    id: int
    title: str
    description: str
    price: float
    category_id: int
    category: str
    condition: str
    location: str
    seller_id: int
    seller: Optional[SellerSummary] = None
    images: list[int]
    image_urls: list[str]
    status: ListingStatus
    featured: bool
    views: int
    created_at: Optional[datetime] = None


class ListingPage(BaseModel):
    items: list[ListingRead]
    total: int
    page: int
    page_size: int
    total_pages: int


class StatusUpdate(BaseModel):
    status: ListingStatus


class FeaturedUpdate(BaseModel):
    featured: bool
