"""
Store database model.
"""

import enum
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, JSON, Boolean, Text
from sqlalchemy.orm import relationship

from storefront.database import Base


def _now():
    return datetime.now(timezone.utc)


class StoreStatus(str, enum.Enum):
    ACTIVE = "active"


class Store(Base):
    """A provisioned tenant store, addressed by its unique subdomain."""

    __tablename__ = "stores"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    subdomain = Column(String, nullable=False, unique=True, index=True)
    owner_id = Column(String, nullable=False, index=True)
    template = Column(String, nullable=False)
    logo = Column(String, nullable=True)
    cover = Column(String, nullable=True)

    customization = Column(JSON, nullable=False, default=dict)
    settings = Column(JSON, nullable=False, default=dict)

    status = Column(String, nullable=False, default=StoreStatus.ACTIVE.value)
    seeded = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_now, onupdate=_now, nullable=False)

    # Relationships
    categories = relationship("Category", back_populates="store", cascade="all, delete-orphan")
    products = relationship("Product", back_populates="store", cascade="all, delete-orphan")
    customers = relationship("Customer", back_populates="store", cascade="all, delete-orphan")
