"""
SQLAlchemy Implementation of Category Repository.
"""

from typing import Any, Dict, List, Optional

from marketplace.domain.models.category import Category
from marketplace.domain.repositories.category_repository import CategoryRepository
from marketplace.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyCategoryRepository(SQLAlchemyRepository[Category], CategoryRepository):
    """Category repository implementation using SQLAlchemy."""

    def get_by_slug(self, slug: str) -> Optional[Category]:
        return self.db.query(Category).filter(Category.slug == slug).first()

    def list_by_name(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name).all()

    def create_many(self, rows: List[Dict[str, Any]]) -> List[Category]:
        categories = [Category(**row) for row in rows]
        self.db.add_all(categories)
        self.db.commit()
        return categories
