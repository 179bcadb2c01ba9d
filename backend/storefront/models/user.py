"""
User database model.
"""

import enum

from sqlalchemy import Column, Integer, String, Boolean

from storefront.database import Base


class UserRole(str, enum.Enum):
    MERCHANT = "merchant"
    ADMIN = "admin"


class User(Base):
    """Platform account. Merchants submit applications, admins review them."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    full_name = Column(String, nullable=True)
    role = Column(String, nullable=False, default=UserRole.MERCHANT.value)
    is_active = Column(Boolean, default=True)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value
