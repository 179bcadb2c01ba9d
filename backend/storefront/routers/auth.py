"""
Authentication API endpoints.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status, Request
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.core.rate_limit import limiter
from storefront.database import get_db
from storefront.dependencies import get_current_user
from storefront.models.user import User
from storefront.schemas import UserCreate, UserResponse, Token
from storefront.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/token", response_model=Token)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login_access_token(
    request: Request,
    db: Session = Depends(get_db),
    form_data: OAuth2PasswordRequestForm = Depends(),
) -> Any:
    """
    OAuth2 compatible token login, get an access token for future requests.
    """
    user = auth_service.authenticate_user(
        db, email=form_data.username, password=form_data.password
    )
    if not user:
        logger.warning(f"Failed login for {form_data.username}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Incorrect email or password",
        )
    return auth_service.create_user_token(user)


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(user_in: UserCreate, db: Session = Depends(get_db)) -> Any:
    """
    Register a new merchant account.
    """
    return auth_service.create_user(
        db=db, email=user_in.email, password=user_in.password, full_name=user_in.full_name
    )


@router.get("/users/me", response_model=UserResponse)
async def read_users_me(current_user: User = Depends(get_current_user)) -> Any:
    return current_user
