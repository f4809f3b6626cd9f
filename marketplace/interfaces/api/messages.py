"""Messages API routes — send, conversation thread, conversation list."""

from typing import Optional

from fastapi import APIRouter, Depends, status

from marketplace.application.services.message_service import (
    get_conversation,
    get_user_conversations,
    send_message,
)
from marketplace.domain.models.user import User
from marketplace.domain.repositories.listing_repository import ListingRepository
from marketplace.domain.repositories.message_repository import MessageRepository
from marketplace.domain.repositories.user_repository import UserRepository
from marketplace.domain.schemas.message import (
    ConversationMessage,
    ConversationRead,
    MessageCreate,
    MessageRead,
)
from marketplace.interfaces.api.deps import get_current_user, get_optional_user, user_id_of
from marketplace.interfaces.deps import (
    get_listing_repository,
    get_message_repository,
    get_user_repository,
)

router = APIRouter(prefix="/api/messages", tags=["Messages"])


@router.post("", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
def post_message(
    body: MessageCreate,
    repo: MessageRepository = Depends(get_message_repository),
    listing_repo: ListingRepository = Depends(get_listing_repository),
    user_repo: UserRepository = Depends(get_user_repository),
    user: User = Depends(get_current_user),
):
    return MessageRead.model_validate(send_message(repo, listing_repo, user_repo, user.id, body))


@router.get("/conversations", response_model=list[ConversationRead])
def conversations(
    repo: MessageRepository = Depends(get_message_repository),
    listing_repo: ListingRepository = Depends(get_listing_repository),
    user_repo: UserRepository = Depends(get_user_repository),
    user: Optional[User] = Depends(get_optional_user),
):
    return get_user_conversations(repo, listing_repo, user_repo, user_id_of(user))


@router.get("/conversation", response_model=list[ConversationMessage])
def conversation(
    listing_id: int,
    other_user_id: int,
    repo: MessageRepository = Depends(get_message_repository),
    user: Optional[User] = Depends(get_optional_user),
):
    return get_conversation(repo, user_id_of(user), listing_id, other_user_id)
