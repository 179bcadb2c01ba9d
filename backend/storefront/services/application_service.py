"""
Application Service: lifecycle of merchant store applications.

An application is submitted as ``pending`` and moves exactly once to
``approved`` or ``rejected``. Approval synchronously provisions the store;
the provisioning outcome is recorded on the application and never undoes
the approval.
"""

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.exceptions import (
    ConflictError,
    PersistenceError,
    ValidationError,
)
from storefront.models.application import (
    StoreApplication,
    ApplicationStatus,
    ProvisioningStatus,
)
from storefront.services.provisioning_service import (
    ProvisioningService,
    provisioning_service,
)

logger = logging.getLogger(__name__)

MERCHANT_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "city",
    "business_name",
    "business_type",
)
COLOR_FIELDS = ("primary", "secondary", "background")


def _is_filled(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def validate_submission(merchant_data: Mapping[str, Any], store_config: Mapping[str, Any]):
    """Raise ValidationError listing every missing or blank required field."""
    missing = [
        f"merchant_data.{field}"
        for field in MERCHANT_FIELDS
        if not _is_filled(merchant_data.get(field))
    ]

    if not _is_filled(store_config.get("template")):
        missing.append("store_config.template")

    customization = store_config.get("customization") or {}
    colors = customization.get("colors") or {}
    missing.extend(
        f"store_config.customization.colors.{field}"
        for field in COLOR_FIELDS
        if not _is_filled(colors.get(field))
    )

    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}", missing)


@contextmanager
def _db_errors(db: Session, action: str):
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Database error while {action}: {exc}")
        raise PersistenceError(f"Database error while {action}") from exc


class ApplicationService:
    def __init__(self, provisioner: ProvisioningService = provisioning_service):
        self.provisioner = provisioner

    # --- Transitions ---

    def submit(
        self,
        db: Session,
        merchant_id: str,
        merchant_data: Mapping[str, Any],
        store_config: Mapping[str, Any],
    ) -> str:
        """
        Create a pending application and return its id.

        A merchant may hold at most one application that is not rejected;
        resubmitting after a rejection is allowed.
        """
        validate_submission(merchant_data, store_config)

        with _db_errors(db, "submitting application"):
            active = (
                db.query(StoreApplication)
                .filter(
                    StoreApplication.merchant_id == merchant_id,
                    StoreApplication.status != ApplicationStatus.REJECTED.value,
                )
                .first()
            )
            if active is not None:
                raise ConflictError(
                    f"Merchant {merchant_id} already has application {active.id} ({active.status})"
                )

            application = StoreApplication(
                id=f"app_{uuid.uuid4().hex}",
                merchant_id=merchant_id,
                merchant_data=dict(merchant_data),
                store_config=dict(store_config),
                status=ApplicationStatus.PENDING.value,
                submitted_at=datetime.now(timezone.utc),
            )
            db.add(application)
            db.commit()

        logger.info(f"Store application submitted: {application.id} by merchant {merchant_id}")
        return application.id

    def approve(self, db: Session, application_id: str, reviewer_id: str) -> bool:
        """
        Approve a pending application and provision its store.

        Returns False when the application does not exist or is no longer
        pending; nothing is provisioned in that case. The status write is
        committed before provisioning starts, and a provisioning failure is
        reported through ``provisioning_status`` rather than an exception.
        """
        updated = self._transition(
            db,
            application_id,
            {
                StoreApplication.status: ApplicationStatus.APPROVED.value,
                StoreApplication.reviewed_at: datetime.now(timezone.utc),
                StoreApplication.reviewed_by: reviewer_id,
                StoreApplication.provisioning_status: ProvisioningStatus.PENDING.value,
            },
        )
        if not updated:
            logger.info(f"Approve ignored for {application_id}: not found or not pending")
            return False

        logger.info(f"Store application approved: {application_id} by {reviewer_id}")
        application = self.get_by_id(db, application_id)
        self.provisioner.provision(db, application)
        return True

    def reject(
        self, db: Session, application_id: str, reviewer_id: str, reason: str
    ) -> bool:
        """
        Reject a pending application with a mandatory reason.

        Raises ValidationError for a blank reason; returns False when the
        application does not exist or is no longer pending.
        """
        if not _is_filled(reason):
            raise ValidationError("Rejection reason is required", ["reason"])

        updated = self._transition(
            db,
            application_id,
            {
                StoreApplication.status: ApplicationStatus.REJECTED.value,
                StoreApplication.reviewed_at: datetime.now(timezone.utc),
                StoreApplication.reviewed_by: reviewer_id,
                StoreApplication.rejection_reason: reason.strip(),
            },
        )
        if not updated:
            logger.info(f"Reject ignored for {application_id}: not found or not pending")
            return False

        logger.info(f"Store application rejected: {application_id} by {reviewer_id}")
        return True

    def retry_provisioning(self, db: Session, application_id: str) -> Optional[str]:
        """
        Re-run provisioning for an approved application whose last attempt failed.

        Returns the new provisioning status, or None when there is nothing
        to retry (unknown id, not approved, not in ``failed``, or another
        operator already claimed the retry).
        """
        claimed = self._transition(
            db,
            application_id,
            {
                StoreApplication.provisioning_status: ProvisioningStatus.PENDING.value,
                StoreApplication.provisioning_error: None,
            },
            where=(
                StoreApplication.status == ApplicationStatus.APPROVED.value,
                StoreApplication.provisioning_status == ProvisioningStatus.FAILED.value,
            ),
        )
        if not claimed:
            return None

        logger.info(f"Retrying provisioning for application {application_id}")
        application = self.get_by_id(db, application_id)
        return self.provisioner.provision(db, application)

    def _transition(
        self, db: Session, application_id: str, values: Dict, where: Tuple = ()
    ) -> bool:
        # Compare-and-set: of two racing callers only one UPDATE matches
        # the row. Defaults to the pending review state.
        conditions = where or (StoreApplication.status == ApplicationStatus.PENDING.value,)
        with _db_errors(db, f"updating application {application_id}"):
            rowcount = (
                db.query(StoreApplication)
                .filter(StoreApplication.id == application_id, *conditions)
                .update(values, synchronize_session=False)
            )
            db.commit()
        # Drop any cached copy so later reads see the committed row
        db.expire_all()
        return rowcount == 1

    # --- Lookups ---

    def get_by_id(self, db: Session, application_id: str) -> Optional[StoreApplication]:
        with _db_errors(db, f"loading application {application_id}"):
            return db.get(StoreApplication, application_id)

    def get_by_merchant_id(self, db: Session, merchant_id: str) -> Optional[StoreApplication]:
        """Most recently submitted application of the merchant, if any."""
        with _db_errors(db, f"loading applications of merchant {merchant_id}"):
            return (
                db.query(StoreApplication)
                .filter(StoreApplication.merchant_id == merchant_id)
                .order_by(StoreApplication.submitted_at.desc())
                .first()
            )

    def list_by_status(
        self, db: Session, status: Optional[str] = None
    ) -> List[StoreApplication]:
        with _db_errors(db, "listing applications"):
            query = db.query(StoreApplication)
            if status:
                query = query.filter(StoreApplication.status == status)
            return query.order_by(StoreApplication.submitted_at.desc()).all()

    def list_failed_provisioning(self, db: Session) -> List[StoreApplication]:
        """Approved applications whose store setup needs an operator retry."""
        with _db_errors(db, "listing failed provisioning"):
            return (
                db.query(StoreApplication)
                .filter(
                    StoreApplication.status == ApplicationStatus.APPROVED.value,
                    StoreApplication.provisioning_status == ProvisioningStatus.FAILED.value,
                )
                .order_by(StoreApplication.reviewed_at)
                .all()
            )

    def get_application_stats(self, db: Session) -> Dict[str, int]:
        """Count applications by status."""
        with _db_errors(db, "computing application stats"):
            rows = (
                db.query(StoreApplication.status, func.count(StoreApplication.id))
                .group_by(StoreApplication.status)
                .all()
            )

        stats = {status.value: 0 for status in ApplicationStatus}
        for status, count in rows:
            stats[status] = count
        return {"total": sum(stats.values()), **stats}

    # --- Demo data ---

    def load_sample_applications(self, db: Session) -> int:
        """Insert two pending demo applications into an empty table."""
        with _db_errors(db, "loading sample applications"):
            if db.query(StoreApplication).count() > 0:
                return 0

            now = datetime.now(timezone.utc)
            samples = [
                StoreApplication(
                    id="app_1",
                    merchant_id="merchant_1",
                    merchant_data={
                        "first_name": "أحمد",
                        "last_name": "محمد",
                        "email": "ahmed@example.com",
                        "phone": "+966501234567",
                        "city": "الرياض",
                        "business_name": "متجر الأزياء العصرية",
                        "business_type": "fashion",
                    },
                    store_config={
                        "template": "modern-comprehensive",
                        "customization": {
                            "store_name": "متجر الأزياء العصرية",
                            "store_description": "متجر متخصص في الأزياء النسائية والرجالية العصرية",
                            "colors": {
                                "primary": "#FF6B35",
                                "secondary": "#4A90E2",
                                "background": "#FFFFFF",
                            },
                        },
                    },
                    status=ApplicationStatus.PENDING.value,
                    submitted_at=now - timedelta(hours=2),
                ),
                StoreApplication(
                    id="app_2",
                    merchant_id="merchant_2",
                    merchant_data={
                        "first_name": "فاطمة",
                        "last_name": "عبدالله",
                        "email": "fatima@example.com",
                        "phone": "+966507654321",
                        "city": "جدة",
                        "business_name": "متجر الإلكترونيات الذكية",
                        "business_type": "electronics",
                    },
                    store_config={
                        "template": "tech-modern",
                        "customization": {
                            "store_name": "تقنيات المستقبل",
                            "store_description": "أحدث الأجهزة الإلكترونية والتقنيات الذكية",
                            "colors": {
                                "primary": "#0F172A",
                                "secondary": "#3B82F6",
                                "background": "#FFFFFF",
                            },
                        },
                    },
                    status=ApplicationStatus.PENDING.value,
                    submitted_at=now - timedelta(hours=5),
                ),
            ]
            db.add_all(samples)
            db.commit()

        logger.info("Sample store applications initialized")
        return len(samples)


application_service = ApplicationService()
