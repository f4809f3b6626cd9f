"""Conversation aggregation over a flat message log."""

from dataclasses import dataclass
from typing import Iterable, NamedTuple

from marketplace.domain.models.message import Message


class ConversationKey(NamedTuple):
    listing_id: int
    other_user_id: int


@dataclass
class ConversationSummary:
    listing_id: int
    other_user_id: int
    last_message: Message
    unread_count: int = 0

    @property
    def key(self) -> ConversationKey:
        return ConversationKey(self.listing_id, self.other_user_id)


def other_participant(message: Message, user_id: int) -> int:
    if message.sender_id == user_id:
        return message.receiver_id
    return message.sender_id


def aggregate_conversations(messages: Iterable[Message], user_id: int) -> list[ConversationSummary]:
    """Group `user_id`'s messages into one summary per (listing, other user).

    `messages` must be newest first: the first message seen for a key is
    kept as its last message, and summaries come out in that same order.
    """
    conversations: dict[ConversationKey, ConversationSummary] = {}

    for message in messages:
        key = ConversationKey(message.listing_id, other_participant(message, user_id))
        summary = conversations.get(key)
        if summary is None:
            summary = ConversationSummary(
                listing_id=key.listing_id,
                other_user_id=key.other_user_id,
                last_message=message,
            )
            conversations[key] = summary

        if message.receiver_id == user_id and not message.read:
            summary.unread_count += 1

    return list(conversations.values())
