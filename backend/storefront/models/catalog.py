"""
Per-store catalog models: Category, Product and Customer.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    Integer,
    String,
    Numeric,
    Float,
    Boolean,
    ForeignKey,
    DateTime,
    JSON,
    Text,
    Index,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from storefront.database import Base


def _now():
    return datetime.now(timezone.utc)


class Category(Base):
    """Category model for grouping a store's products."""

    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("store_id", "name", name="uq_category_store_name"),
    )

    id = Column(Integer, primary_key=True, index=True)
    store_id = Column(String, ForeignKey("stores.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    image = Column(String, nullable=True)
    sort = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationships
    store = relationship("Store", back_populates="categories")


class Product(Base):
    """Product offered by a single store. SKUs are unique within a store."""

    __tablename__ = "products"
    __table_args__ = (
        UniqueConstraint("store_id", "sku", name="uq_product_store_sku"),
        Index("idx_product_store_status", "store_id", "status"),
    )

    id = Column(Integer, primary_key=True, index=True)
    store_id = Column(String, ForeignKey("stores.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    original_price = Column(Numeric(10, 2), nullable=True)
    category = Column(String, nullable=True)
    sku = Column(String, nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    images = Column(JSON, nullable=False, default=list)
    specifications = Column(JSON, nullable=False, default=dict)
    tags = Column(JSON, nullable=False, default=list)
    rating = Column(Float, nullable=False, default=0.0)
    review_count = Column(Integer, nullable=False, default=0)
    status = Column(String, nullable=False, default="active")  # active, inactive, out_of_stock
    featured = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_now, onupdate=_now, nullable=False)

    # Relationships
    store = relationship("Store", back_populates="products")


class Customer(Base):
    """Customer record scoped to a store."""

    __tablename__ = "customers"
    __table_args__ = (
        UniqueConstraint("store_id", "email", name="uq_customer_store_email"),
    )

    id = Column(Integer, primary_key=True, index=True)
    store_id = Column(String, ForeignKey("stores.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    total_orders = Column(Integer, nullable=False, default=0)
    total_spent = Column(Numeric(10, 2), nullable=False, default=0)
    last_order_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)

    # Relationships
    store = relationship("Store", back_populates="customers")
