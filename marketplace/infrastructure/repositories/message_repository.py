"""
SQLAlchemy Implementation of Message Repository.
"""

from typing import List

from sqlalchemy import and_, or_

from marketplace.domain.models.message import Message
from marketplace.domain.repositories.message_repository import MessageRepository
from marketplace.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyMessageRepository(SQLAlchemyRepository[Message], MessageRepository):
    """Message repository implementation using SQLAlchemy."""

    def get_for_user(self, user_id: int) -> List[Message]:
        return (
            self.db.query(Message)
            .filter(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
            .order_by(Message.created_at.desc(), Message.id.desc())
            .all()
        )

    def get_between(self, listing_id: int, user_id: int, other_user_id: int) -> List[Message]:
        return (
            self.db.query(Message)
            .filter(
                Message.listing_id == listing_id,
                or_(
                    and_(Message.sender_id == user_id, Message.receiver_id == other_user_id),
                    and_(Message.sender_id == other_user_id, Message.receiver_id == user_id),
                ),
            )
            .order_by(Message.created_at.asc(), Message.id.asc())
            .all()
        )
