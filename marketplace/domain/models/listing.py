"""Listing domain model — maps to the 'listings' table."""

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from marketplace.infrastructure.database import Base


class Listing(Base):
    __tablename__ = "listings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    condition = Column(String(10), nullable=False)  # new, used
    location = Column(String(200), nullable=False, index=True)
    seller_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Ordered stored-file ids
    images = Column(JSON, nullable=False, default=list)

    status = Column(String(20), nullable=False, default="pending", index=True)
    featured = Column(Boolean, nullable=False, default=False)
    views = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    seller = relationship("User", lazy="joined")
    category = relationship("Category", lazy="joined")

    def __repr__(self):
        return f"<Listing {self.id} - {self.title} ({self.status})>"
