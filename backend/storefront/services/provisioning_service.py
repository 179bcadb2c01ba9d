"""
Provisioning Service: turns an approved application into a live store.

Builds the full store payload (branding, layout, settings, homepage),
creates the store under a free subdomain and seeds sample data. Failures
never propagate; they are logged and recorded on the application so an
operator can retry.
"""

import logging
from typing import Any, Callable, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront import templates
from storefront.config import settings
from storefront.exceptions import ProvisioningError, SlugConflictError
from storefront.models.application import StoreApplication, ProvisioningStatus
from storefront.models.store import Store, StoreStatus
from storefront.services.slug import generate_slug, with_suffix
from storefront.services.store_service import StoreService, store_service
from storefront.services.catalog_service import CatalogService, catalog_service
from storefront.templates import StoreTemplate

logger = logging.getLogger(__name__)

# Colors the application form does not collect
DEFAULT_COLORS = {
    "text": "#1e293b",
    "accent": "#3b82f6",
    "headerBackground": "#ffffff",
    "footerBackground": "#f8fafc",
    "cardBackground": "#ffffff",
    "borderColor": "#e5e7eb",
}

DEFAULT_FONT = "Cairo"
DEFAULT_GRID_COLUMNS = 4


def build_store_payload(
    application: StoreApplication, template: Optional[StoreTemplate] = None
) -> Dict[str, Any]:
    """
    Map an approved application onto a complete store creation payload.

    Pure function: the subdomain is the base slug of the store name, the
    caller appends collision suffixes.
    """
    merchant = application.merchant_data
    customization = application.store_config.get("customization") or {}
    colors = customization.get("colors") or {}

    name = (customization.get("store_name") or "").strip() or merchant["business_name"]
    description = (
        (customization.get("store_description") or "").strip() or merchant["business_name"]
    )

    heading_font = template.fonts.primary if template else DEFAULT_FONT
    body_font = template.fonts.secondary if template else DEFAULT_FONT
    grid_columns = template.grid_columns if template else DEFAULT_GRID_COLUMNS

    return {
        "name": name,
        "description": description,
        "subdomain": generate_slug(name),
        "owner_id": application.merchant_id,
        "template": application.template_id,
        "customization": {
            "colors": {
                "primary": colors["primary"],
                "secondary": colors["secondary"],
                "background": colors["background"],
                **DEFAULT_COLORS,
            },
            "fonts": {
                "heading": heading_font,
                "body": body_font,
                "size": {"small": "14px", "medium": "16px", "large": "18px", "xlarge": "24px"},
            },
            "layout": {
                "headerStyle": "modern",
                "footerStyle": "detailed",
                "productGridColumns": grid_columns,
                "containerWidth": "normal",
                "borderRadius": "medium",
                "spacing": "normal",
            },
            "homepage": {
                "showHeroSlider": True,
                "showFeaturedProducts": True,
                "showCategories": True,
                "showNewsletter": True,
                "showTestimonials": False,
                "showStats": True,
                "showBrands": False,
                "heroImages": [],
                "heroTexts": [
                    {
                        "title": f"مرحباً بكم في {name}",
                        "subtitle": "أفضل المنتجات بأسعار مميزة",
                        "buttonText": "تسوق الآن",
                    }
                ],
                "sectionsOrder": ["hero", "categories", "featured", "stats"],
            },
            "pages": {
                "enableBlog": False,
                "enableReviews": True,
                "enableWishlist": True,
                "enableCompare": False,
                "enableLiveChat": False,
                "enableFAQ": True,
                "enableAboutUs": True,
                "enableContactUs": True,
            },
            "branding": {"logo": "", "favicon": "", "watermark": "", "showPoweredBy": True},
            "effects": {"animations": True, "transitions": True, "shadows": True, "gradients": True},
        },
        "settings": {
            "currency": settings.STORE_CURRENCY,
            "language": settings.STORE_LANGUAGE,
            "timezone": settings.STORE_TIMEZONE,
            "shipping": {
                "enabled": True,
                "freeShippingThreshold": settings.FREE_SHIPPING_THRESHOLD,
                "defaultCost": settings.DEFAULT_SHIPPING_COST,
                "zones": [],
            },
            "payment": {
                "cashOnDelivery": True,
                "bankTransfer": False,
                "creditCard": False,
                "paypal": False,
                "stripe": False,
            },
            "taxes": {"enabled": False, "rate": 0, "includeInPrice": False},
            "notifications": {
                "emailNotifications": True,
                "smsNotifications": False,
                "pushNotifications": False,
            },
        },
        "status": StoreStatus.ACTIVE.value,
    }


class ProvisioningService:
    def __init__(
        self,
        stores: StoreService = store_service,
        catalog: CatalogService = catalog_service,
        template_lookup: Callable[[str], Optional[StoreTemplate]] = templates.find_by_id,
    ):
        self.stores = stores
        self.catalog = catalog
        self.template_lookup = template_lookup

    def provision(self, db: Session, application: StoreApplication) -> str:
        """
        Create and seed the store for an approved application.

        Never raises. Returns the resulting provisioning status ("done" or
        "failed"), which is also written to the application. If the store
        already exists from an earlier attempt only seeding is retried.
        """
        application_id = application.id
        try:
            store = self._existing_store(db, application)

            if store is None:
                template = self.template_lookup(application.template_id)
                if template is None:
                    logger.warning(
                        f"Template {application.template_id} not found, using defaults"
                    )
                payload = build_store_payload(application, template)
                store = self._create_with_free_subdomain(db, payload)

            if application.store_id != store.id:
                self._record(db, application, strict=True, store_id=store.id)

            if settings.SEED_SAMPLE_DATA:
                self.catalog.seed_sample_data(db, store.id)

        except Exception as exc:
            db.rollback()
            logger.error(
                f"Provisioning failed for application {application_id}: {exc}",
                exc_info=True,
            )
            self._record(
                db, application, status=ProvisioningStatus.FAILED, error=str(exc)
            )
            return ProvisioningStatus.FAILED.value

        self._record(db, application, status=ProvisioningStatus.DONE, error=None)
        logger.info(f"Application {application_id} provisioned as store {store.id}")
        return ProvisioningStatus.DONE.value

    def _existing_store(self, db: Session, application: StoreApplication) -> Optional[Store]:
        if application.store_id:
            store = self.stores.get_store(db, application.store_id)
            if store is not None:
                return store
        # A merchant owns at most one store; an earlier attempt may have
        # created it without managing to record its id.
        store = self.stores.get_store_by_owner(db, application.merchant_id)
        if store is not None:
            logger.info(f"Adopting store {store.id} of merchant {application.merchant_id}")
        return store

    def _create_with_free_subdomain(self, db: Session, payload: Dict[str, Any]) -> Store:
        base = payload["subdomain"]
        for attempt in range(1, settings.SLUG_MAX_ATTEMPTS + 1):
            candidate = with_suffix(base, attempt)
            try:
                return self.stores.create_store(db, {**payload, "subdomain": candidate})
            except SlugConflictError:
                logger.warning(f"Subdomain {candidate} taken, trying next suffix")
        raise ProvisioningError(
            f"No free subdomain for '{base}' after {settings.SLUG_MAX_ATTEMPTS} attempts"
        )

    def _record(self, db: Session, application: StoreApplication, strict: bool = False, **fields):
        """
        Write provisioning fields on the application.

        A failed commit is logged; with ``strict`` it is re-raised so the
        caller does not carry on as if the write had landed.
        """
        application_id = application.id
        if "status" in fields:
            application.provisioning_status = fields.pop("status").value
        if "error" in fields:
            application.provisioning_error = fields.pop("error")
        if "store_id" in fields:
            application.store_id = fields.pop("store_id")
        try:
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error(
                f"Could not record provisioning state for {application_id}: {exc}",
                exc_info=True,
            )
            if strict:
                raise


provisioning_service = ProvisioningService()
