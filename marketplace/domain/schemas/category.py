"""Pydantic schemas for Category."""

from typing import Optional

from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    slug: str = Field(min_length=1, max_length=100, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    icon: str = Field(min_length=1, max_length=20)
    description: Optional[str] = None


class CategoryRead(CategoryCreate):
    id: int

    model_config = {"from_attributes": True}
