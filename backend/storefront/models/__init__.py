"""
Database models for the storefront platform.

All SQLAlchemy models are imported here so metadata sees every table.
"""

from storefront.models.application import (
    StoreApplication,
    ApplicationStatus,
    ProvisioningStatus,
)
from storefront.models.store import Store, StoreStatus
from storefront.models.catalog import Category, Product, Customer
from storefront.models.user import User, UserRole

__all__ = [
    "StoreApplication",
    "ApplicationStatus",
    "ProvisioningStatus",
    "Store",
    "StoreStatus",
    "Category",
    "Product",
    "Customer",
    "User",
    "UserRole",
]
