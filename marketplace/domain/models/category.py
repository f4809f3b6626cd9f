"""Category reference data — maps to the 'categories' table."""

from sqlalchemy import Column, Integer, String, Text

from marketplace.infrastructure.database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)
    icon = Column(String(20), nullable=False)
    description = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Category {self.slug}>"
