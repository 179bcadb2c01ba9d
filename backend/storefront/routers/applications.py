"""
API endpoints for merchant store applications and their review.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.dependencies import get_current_user, get_current_admin
from storefront.exceptions import InvalidTransitionError
from storefront.models.application import ApplicationStatus
from storefront.models.user import User
from storefront.schemas import (
    ApplicationCreate,
    ApplicationReject,
    ApplicationResponse,
    ApplicationStats,
    ApplicationSubmitted,
    ReviewResponse,
)
from storefront.services.application_service import application_service

router = APIRouter()

NO_TRANSITION = "Application not found or already reviewed"
NOTHING_TO_RETRY = "Nothing to retry for this application"


def _review_response(db: Session, application_id: str) -> ReviewResponse:
    application = application_service.get_by_id(db, application_id)
    return ReviewResponse(
        application=ApplicationResponse.model_validate(application),
        provisioning_status=application.provisioning_status,
        store_id=application.store_id,
    )


@router.post("", response_model=ApplicationSubmitted, status_code=201)
async def submit_application(
    application_in: ApplicationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Submit a store application for the current merchant."""
    application_id = application_service.submit(
        db,
        merchant_id=str(current_user.id),
        merchant_data=application_in.merchant_data.model_dump(),
        store_config=application_in.store_config.model_dump(),
    )
    return {"id": application_id, "status": ApplicationStatus.PENDING.value}


@router.get("/me", response_model=ApplicationResponse)
async def get_my_application(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Latest application of the current merchant."""
    application = application_service.get_by_merchant_id(db, str(current_user.id))
    if application is None:
        raise HTTPException(status_code=404, detail="No application submitted")
    return application


@router.get("", response_model=List[ApplicationResponse])
async def list_applications(
    status: Optional[ApplicationStatus] = None,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    return application_service.list_by_status(db, status.value if status else None)


@router.get("/stats", response_model=ApplicationStats)
async def get_stats(
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    return application_service.get_application_stats(db)


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(
    application_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    application = application_service.get_by_id(db, application_id)
    # Merchants only see their own; hide existence of others
    if application is None or (
        not current_user.is_admin and application.merchant_id != str(current_user.id)
    ):
        raise HTTPException(status_code=404, detail="Application not found")
    return application


@router.post("/{application_id}/approve", response_model=ReviewResponse)
async def approve_application(
    application_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """
    Approve a pending application and provision its store.

    A 200 with provisioning_status "failed" means the approval stands but
    the store needs a provisioning retry.
    """
    if not application_service.approve(db, application_id, reviewer_id=str(admin.id)):
        raise InvalidTransitionError(NO_TRANSITION)
    return _review_response(db, application_id)


@router.post("/{application_id}/reject", response_model=ReviewResponse)
async def reject_application(
    application_id: str,
    body: ApplicationReject,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    if not application_service.reject(
        db, application_id, reviewer_id=str(admin.id), reason=body.reason
    ):
        raise InvalidTransitionError(NO_TRANSITION)
    return _review_response(db, application_id)


@router.post("/{application_id}/provisioning/retry", response_model=ReviewResponse)
async def retry_provisioning(
    application_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """Operator action: re-run store provisioning after a failure."""
    if application_service.retry_provisioning(db, application_id) is None:
        raise InvalidTransitionError(NOTHING_TO_RETRY)
    return _review_response(db, application_id)
