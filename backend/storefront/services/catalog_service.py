"""
Catalog Service: seeds baseline sample data into newly provisioned stores.
"""

import logging
import random
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from storefront.exceptions import NotFoundError
from storefront.models.store import Store
from storefront.models.catalog import Category, Product, Customer

logger = logging.getLogger(__name__)

SAMPLE_CATEGORIES = [
    {"name": "الإلكترونيات", "description": "أجهزة إلكترونية وتقنية", "sort": 1},
    {"name": "الأزياء", "description": "ملابس وأحذية وإكسسوارات", "sort": 2},
    {"name": "المنزل والحديقة", "description": "أدوات منزلية وديكور", "sort": 3},
    {"name": "الكتب", "description": "كتب ومراجع علمية", "sort": 4},
]

SAMPLE_PRODUCTS = [
    {
        "name": "هاتف ذكي متطور",
        "description": "هاتف ذكي بمواصفات عالية وكاميرا ممتازة",
        "price": 1999,
        "original_price": 2299,
        "category": "الإلكترونيات",
        "sku": "PHONE-001",
        "stock": 15,
        "specifications": {
            "الشاشة": "6.7 بوصة AMOLED",
            "المعالج": "Snapdragon 8 Gen 2",
            "الذاكرة": "256GB",
            "الكاميرا": "108MP",
        },
        "tags": ["هاتف", "ذكي", "كاميرا"],
        "rating": 4.5,
        "review_count": 127,
        "featured": True,
    },
    {
        "name": "قميص قطني راقي",
        "description": "قميص رجالي من القطن الخالص بتصميم عصري",
        "price": 149,
        "category": "الأزياء",
        "sku": "SHIRT-001",
        "stock": 30,
        "specifications": {
            "المادة": "قطن 100%",
            "الألوان المتاحة": "أبيض، أزرق، أسود",
            "المقاسات": "S, M, L, XL, XXL",
        },
        "tags": ["قميص", "رجالي", "قطن"],
        "rating": 4.2,
        "review_count": 89,
        "featured": True,
    },
    {
        "name": "مصباح LED ذكي",
        "description": "مصباح LED قابل للتحكم عبر التطبيق مع إضاءة متغيرة",
        "price": 89,
        "category": "المنزل والحديقة",
        "sku": "LAMP-001",
        "stock": 25,
        "specifications": {
            "الطاقة": "12W",
            "التحكم": "Wi-Fi + Bluetooth",
            "الألوان": "16 مليون لون",
            "العمر الافتراضي": "25,000 ساعة",
        },
        "tags": ["مصباح", "ذكي", "LED"],
        "rating": 4.7,
        "review_count": 45,
        "featured": False,
    },
]

SAMPLE_CUSTOMERS = [
    {"name": "أحمد محمد علي", "email": "ahmed@example.com", "phone": "+966501234567",
     "total_orders": 5, "total_spent": 2850, "is_active": True},
    {"name": "فاطمة سعد الدين", "email": "fatima@example.com", "phone": "+966507654321",
     "total_orders": 3, "total_spent": 1200, "is_active": True},
    {"name": "محمد عبدالعزيز", "email": "mohammed@example.com", "phone": "+966502468135",
     "total_orders": 8, "total_spent": 4500, "is_active": True},
    {"name": "سارة أحمد خالد", "email": "sara@example.com", "phone": "+966509876543",
     "total_orders": 2, "total_spent": 580, "is_active": False},
]

PLACEHOLDER_IMAGE = "/placeholder-product.jpg"


class CatalogService:
    """
    Populates a fresh store with sample categories, products and customers
    so the storefront is browsable on first visit.
    """

    def seed_sample_data(self, db: Session, store_id: str) -> bool:
        """
        Seed sample catalog rows for a store.

        Returns False without touching anything when the store was already
        seeded. Rows are keyed by (store_id, name/sku/email), so a partially
        failed earlier run is completed rather than duplicated.
        """
        store = db.get(Store, store_id)
        if store is None:
            raise NotFoundError(f"Store not found: {store_id}")
        if store.seeded:
            logger.info(f"Store {store_id} already seeded, skipping")
            return False

        logger.info(f"Initializing sample data for store {store_id}")

        existing_categories = {
            name for (name,) in db.query(Category.name).filter(Category.store_id == store_id)
        }
        for cat in SAMPLE_CATEGORIES:
            if cat["name"] not in existing_categories:
                db.add(Category(store_id=store_id, is_active=True, **cat))

        existing_skus = {
            sku for (sku,) in db.query(Product.sku).filter(Product.store_id == store_id)
        }
        for product in SAMPLE_PRODUCTS:
            if product["sku"] not in existing_skus:
                db.add(
                    Product(
                        store_id=store_id,
                        images=[PLACEHOLDER_IMAGE],
                        status="active",
                        **product,
                    )
                )

        existing_emails = {
            email for (email,) in db.query(Customer.email).filter(Customer.store_id == store_id)
        }
        now = datetime.now(timezone.utc)
        for customer in SAMPLE_CUSTOMERS:
            if customer["email"] not in existing_emails:
                db.add(
                    Customer(
                        store_id=store_id,
                        last_order_date=now - timedelta(days=random.uniform(0, 30)),
                        **customer,
                    )
                )

        store.seeded = True
        db.commit()

        logger.info(
            f"Sample data initialized for store {store_id}: "
            f"{len(SAMPLE_CATEGORIES)} categories, {len(SAMPLE_PRODUCTS)} products, "
            f"{len(SAMPLE_CUSTOMERS)} customers"
        )
        return True


catalog_service = CatalogService()
