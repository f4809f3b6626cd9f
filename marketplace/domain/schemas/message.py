"""Pydantic schemas for messages and conversations."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from marketplace.domain.schemas.auth import UserSummary


class MessageCreate(BaseModel):
    listing_id: int
    receiver_id: int
    content: str = Field(min_length=1, max_length=5000)


class MessageRead(BaseModel):
    id: int
    listing_id: int
    sender_id: int
    receiver_id: int
    content: str
    read: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ConversationMessage(MessageRead):
    sender: Optional[UserSummary] = None


class ListingRef(BaseModel):
    id: int
    title: str


class ConversationRead(BaseModel):
    listing_id: int
    other_user_id: int
    last_message: MessageRead
    unread_count: int
    listing: Optional[ListingRef] = None
    other_user: Optional[UserSummary] = None
