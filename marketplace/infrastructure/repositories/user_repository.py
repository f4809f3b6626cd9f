"""
SQLAlchemy Implementation of User Repository.
"""

from typing import Optional

from sqlalchemy import func

from marketplace.domain.models.user import User
from marketplace.domain.repositories.user_repository import UserRepository
from marketplace.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    def get_by_email(self, email: str) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(func.lower(User.email) == email.strip().lower())
            .first()
        )
