"""Message service — buyer/seller messaging and the conversation list."""

from typing import List, Optional

import structlog

from marketplace.core.exceptions import BusinessRuleViolationError, EntityNotFoundError, UnauthenticatedError
from marketplace.domain.conversations import aggregate_conversations
from marketplace.domain.models.message import Message
from marketplace.domain.repositories.listing_repository import ListingRepository
from marketplace.domain.repositories.message_repository import MessageRepository
from marketplace.domain.repositories.user_repository import UserRepository
from marketplace.domain.schemas.auth import UserSummary
from marketplace.domain.schemas.message import (
    ConversationMessage,
    ConversationRead,
    ListingRef,
    MessageCreate,
    MessageRead,
)

logger = structlog.get_logger(__name__)


def send_message(
    repo: MessageRepository,
    listing_repo: ListingRepository,
    user_repo: UserRepository,
    sender_id: Optional[int],
    data: MessageCreate,
) -> Message:
    if sender_id is None:
        raise UnauthenticatedError("Must be logged in to send message")

    content = data.content.strip()
    if not content:
        raise BusinessRuleViolationError("Message cannot be empty")
    if data.receiver_id == sender_id:
        raise BusinessRuleViolationError("Cannot send a message to yourself")
    if listing_repo.get_by_id(data.listing_id) is None:
        raise EntityNotFoundError("Listing not found", details={"listing_id": data.listing_id})
    if user_repo.get_by_id(data.receiver_id) is None:
        raise EntityNotFoundError("Receiver not found", details={"receiver_id": data.receiver_id})

    message = repo.create(
        {
            "listing_id": data.listing_id,
            "sender_id": sender_id,
            "receiver_id": data.receiver_id,
            "content": content,
            "read": False,
        }
    )
    logger.info("Message sent", message_id=message.id, listing_id=data.listing_id, sender_id=sender_id)
    return message


def get_conversation(
    repo: MessageRepository,
    caller_id: Optional[int],
    listing_id: int,
    other_user_id: int,
) -> List[ConversationMessage]:
    """Both directions of one conversation, oldest first."""
    if caller_id is None:
        return []

    messages = repo.get_between(listing_id, caller_id, other_user_id)
    return [ConversationMessage.model_validate(message) for message in messages]


def get_user_conversations(
    repo: MessageRepository,
    listing_repo: ListingRepository,
    user_repo: UserRepository,
    caller_id: Optional[int],
) -> List[ConversationRead]:
    """One row per (listing, other participant), most recent first."""
    if caller_id is None:
        return []

    summaries = aggregate_conversations(repo.get_for_user(caller_id), caller_id)

    conversations = []
    for summary in summaries:
        listing = listing_repo.get_by_id(summary.listing_id)
        other_user = user_repo.get_by_id(summary.other_user_id)
        conversations.append(
            ConversationRead(
                listing_id=summary.listing_id,
                other_user_id=summary.other_user_id,
                last_message=MessageRead.model_validate(summary.last_message),
                unread_count=summary.unread_count,
                listing=ListingRef(id=listing.id, title=listing.title) if listing else None,
                other_user=UserSummary.model_validate(other_user) if other_user else None,
            )
        )
    return conversations
