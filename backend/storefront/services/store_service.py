"""
Store Service: creation and lookup of provisioned stores.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.exceptions import SlugConflictError
from storefront.models.store import Store
from storefront.models.catalog import Category, Product

logger = logging.getLogger(__name__)


class StoreService:
    def create_store(self, db: Session, payload: Dict[str, Any]) -> Store:
        """
        Persist a new store from a fully-populated payload.

        Raises SlugConflictError if the subdomain is already taken, either
        by an existing row or by a concurrent insert.
        """
        subdomain = payload["subdomain"]
        if self.get_store_by_subdomain(db, subdomain) is not None:
            raise SlugConflictError(subdomain)

        store = Store(id=f"store_{uuid.uuid4().hex}", **payload)
        db.add(store)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            if self.get_store_by_subdomain(db, subdomain) is not None:
                raise SlugConflictError(subdomain)
            raise
        db.refresh(store)

        logger.info(f"Store created: {store.id} ({store.subdomain}) for owner {store.owner_id}")
        return store

    def get_store(self, db: Session, store_id: str) -> Optional[Store]:
        return db.get(Store, store_id)

    def get_store_by_subdomain(self, db: Session, subdomain: str) -> Optional[Store]:
        return db.query(Store).filter(Store.subdomain == subdomain).first()

    def get_store_by_owner(self, db: Session, owner_id: str) -> Optional[Store]:
        return (
            db.query(Store)
            .filter(Store.owner_id == owner_id)
            .order_by(Store.created_at.desc())
            .first()
        )

    def list_products(
        self, db: Session, store_id: str, only_active: bool = True
    ) -> List[Product]:
        query = db.query(Product).filter(Product.store_id == store_id)
        if only_active:
            query = query.filter(Product.status == "active")
        return query.order_by(Product.id).all()

    def list_categories(self, db: Session, store_id: str) -> List[Category]:
        return (
            db.query(Category)
            .filter(Category.store_id == store_id)
            .order_by(Category.sort)
            .all()
        )


store_service = StoreService()
