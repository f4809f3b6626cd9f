"""
SQLAlchemy Implementation of Admin Role Repository.
"""

from typing import List, Optional

from sqlalchemy import func

from marketplace.domain.models.admin_role import AdminRole
from marketplace.domain.repositories.admin_role_repository import AdminRoleRepository
from marketplace.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyAdminRoleRepository(SQLAlchemyRepository[AdminRole], AdminRoleRepository):
    """AdminRole repository implementation using SQLAlchemy."""

    def get_by_user_id(self, user_id: int) -> Optional[AdminRole]:
        return (
            self.db.query(AdminRole)
            .filter(AdminRole.user_id == user_id)
            .order_by(AdminRole.id)
            .first()
        )

    def exists_with_role(self, role: str) -> bool:
        return (
            self.db.query(AdminRole.id)
            .filter(AdminRole.role == role)
            .first()
        ) is not None

    def count_with_role(self, role: str) -> int:
        return (
            self.db.query(func.count(AdminRole.id))
            .filter(AdminRole.role == role)
            .scalar()
        ) or 0

    def list_all(self) -> List[AdminRole]:
        return self.db.query(AdminRole).order_by(AdminRole.granted_at, AdminRole.id).all()
