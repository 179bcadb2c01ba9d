"""
Read-only API endpoints for provisioned stores and their catalog.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.dependencies import get_current_user
from storefront.models.user import User
from storefront.schemas import StoreResponse, ProductResponse, CategoryResponse
from storefront.services.store_service import store_service

router = APIRouter()


def _get_store_or_404(db: Session, store_id: str):
    store = store_service.get_store(db, store_id)
    if store is None:
        raise HTTPException(status_code=404, detail="Store not found")
    return store


@router.get("/by-subdomain/{subdomain}", response_model=StoreResponse)
async def get_store_by_subdomain(subdomain: str, db: Session = Depends(get_db)):
    store = store_service.get_store_by_subdomain(db, subdomain)
    if store is None:
        raise HTTPException(status_code=404, detail="Store not found")
    return store


@router.get("/me", response_model=StoreResponse)
async def get_my_store(
    db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
):
    """Store provisioned for the current merchant."""
    store = store_service.get_store_by_owner(db, str(current_user.id))
    if store is None:
        raise HTTPException(status_code=404, detail="No store provisioned yet")
    return store


@router.get("/{store_id}", response_model=StoreResponse)
async def get_store(store_id: str, db: Session = Depends(get_db)):
    return _get_store_or_404(db, store_id)


@router.get("/{store_id}/products", response_model=List[ProductResponse])
async def list_store_products(
    store_id: str, only_active: bool = True, db: Session = Depends(get_db)
):
    _get_store_or_404(db, store_id)
    return store_service.list_products(db, store_id, only_active=only_active)


@router.get("/{store_id}/categories", response_model=List[CategoryResponse])
async def list_store_categories(store_id: str, db: Session = Depends(get_db)):
    _get_store_or_404(db, store_id)
    return store_service.list_categories(db, store_id)
