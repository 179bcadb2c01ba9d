"""
Store application database model.
"""

import enum
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, JSON, Index, Text

from storefront.database import Base


class ApplicationStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ProvisioningStatus(str, enum.Enum):
    PENDING = "pending"  # approval written, store not materialized yet
    DONE = "done"
    FAILED = "failed"  # needs operator retry


class StoreApplication(Base):
    """A merchant's request to open a store.

    ``merchant_data`` and ``store_config`` are snapshots taken at submission
    and never rewritten. Review fields are filled exactly once, by the
    transition out of ``pending``.
    """

    __tablename__ = "store_applications"
    __table_args__ = (
        Index("idx_application_merchant", "merchant_id"),
        Index("idx_application_status", "status"),
    )

    id = Column(String, primary_key=True)
    merchant_id = Column(String, nullable=False)

    # {first_name, last_name, email, phone, city, business_name, business_type}
    merchant_data = Column(JSON, nullable=False)
    # {template, customization: {store_name, store_description, colors: {...}}}
    store_config = Column(JSON, nullable=False)

    status = Column(String, nullable=False, default=ApplicationStatus.PENDING.value)
    submitted_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    reviewed_by = Column(String, nullable=True)
    rejection_reason = Column(Text, nullable=True)

    # Provisioning outcome, only meaningful once approved
    provisioning_status = Column(String, nullable=True)
    provisioning_error = Column(Text, nullable=True)
    store_id = Column(String, nullable=True)

    @property
    def template_id(self) -> str:
        return self.store_config.get("template", "")

    def __repr__(self):
        return f"<StoreApplication {self.id} merchant={self.merchant_id} status={self.status}>"
