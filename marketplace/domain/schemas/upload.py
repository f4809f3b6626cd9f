"""Pydantic schemas for stored image uploads."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class StoredFileRead(BaseModel):
    id: int
    original_name: str
    content_type: str
    size: int
    url: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
