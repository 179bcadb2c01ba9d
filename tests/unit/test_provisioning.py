"""
Tests for store provisioning: payload building, subdomain collisions,
failure recording and retry.
"""
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from storefront import templates
from storefront.exceptions import SlugConflictError
from storefront.models.application import StoreApplication
from storefront.models.catalog import Product
from storefront.models.store import Store
from storefront.services.application_service import ApplicationService, application_service
from storefront.services.catalog_service import catalog_service
from storefront.services.provisioning_service import (
    DEFAULT_COLORS,
    ProvisioningService,
    build_store_payload,
    provisioning_service,
)
from storefront.services.store_service import store_service


def _application(merchant_data, store_config, merchant_id="m1"):
    return StoreApplication(
        id="app_test",
        merchant_id=merchant_id,
        merchant_data=merchant_data,
        store_config=store_config,
        status="approved",
    )


@pytest.mark.unit
class TestBuildStorePayload:

    def test_payload_uses_application_branding(self, merchant_data, store_config):
        payload = build_store_payload(
            _application(merchant_data, store_config), templates.find_by_id("modern-ecommerce")
        )

        assert payload["name"] == "My Fashion Store!!"
        assert payload["description"] == "Dresses and accessories"
        assert payload["subdomain"] == "my-fashion-store"
        assert payload["owner_id"] == "m1"
        assert payload["template"] == "modern-ecommerce"
        assert payload["status"] == "active"

        colors = payload["customization"]["colors"]
        assert colors["primary"] == "#FF6B35"
        assert colors["secondary"] == "#4A90E2"
        assert colors["background"] == "#FFFFFF"
        for key, value in DEFAULT_COLORS.items():
            assert colors[key] == value

    def test_blank_name_and_description_fall_back_to_business_name(self, merchant_data,
                                                                   store_config):
        store_config["customization"]["store_name"] = "  "
        store_config["customization"]["store_description"] = ""

        payload = build_store_payload(_application(merchant_data, store_config))

        assert payload["name"] == "Rose Garden Boutique"
        assert payload["description"] == "Rose Garden Boutique"
        assert payload["subdomain"] == "rose-garden-boutique"

    def test_platform_defaults(self, merchant_data, store_config):
        payload = build_store_payload(_application(merchant_data, store_config))

        settings = payload["settings"]
        assert settings["currency"] == "SAR"
        assert settings["language"] == "ar"
        assert settings["payment"]["cashOnDelivery"] is True
        assert settings["payment"]["creditCard"] is False
        assert settings["shipping"]["freeShippingThreshold"] == 200
        assert settings["taxes"]["enabled"] is False
        homepage = payload["customization"]["homepage"]
        assert homepage["showHeroSlider"] is True
        assert homepage["showTestimonials"] is False
        assert "My Fashion Store!!" in homepage["heroTexts"][0]["title"]

    def test_template_supplies_fonts_and_grid(self, merchant_data, store_config):
        payload = build_store_payload(
            _application(merchant_data, store_config), templates.find_by_id("minimal-clean")
        )

        assert payload["customization"]["fonts"]["heading"] == "Inter"
        assert payload["customization"]["layout"]["productGridColumns"] == 3

    def test_missing_template_uses_fixed_defaults(self, merchant_data, store_config):
        payload = build_store_payload(_application(merchant_data, store_config), None)

        assert payload["customization"]["fonts"]["heading"] == "Cairo"
        assert payload["customization"]["layout"]["productGridColumns"] == 4


@pytest.mark.unit
class TestProvisionOnApproval:

    def test_arabic_store_name_scenario(self, test_db, merchant_data, store_config):
        """Approving an Arabic-named store yields an active store owned by
        the merchant, seeded exactly once."""
        store_config["customization"]["store_name"] = "متجر الورود"
        catalog = MagicMock(wraps=catalog_service)
        service = ApplicationService(provisioner=ProvisioningService(catalog=catalog))
        app_id = service.submit(test_db, "m1", merchant_data, store_config)

        assert service.approve(test_db, app_id, "admin1") is True

        application = service.get_by_id(test_db, app_id)
        store = test_db.get(Store, application.store_id)
        assert store is not None
        assert store.status == "active"
        assert store.owner_id == "m1"
        assert store.name == "متجر الورود"
        assert store.subdomain.startswith("store-")
        assert application.provisioning_status == "done"
        catalog.seed_sample_data.assert_called_once_with(test_db, store.id)
        assert store.seeded is True

    def test_identical_names_get_suffixed_subdomains(self, test_db, merchant_data, store_config):
        first = application_service.submit(test_db, "m1", merchant_data, store_config)
        second = application_service.submit(test_db, "m2", merchant_data, store_config)

        application_service.approve(test_db, first, "admin1")
        application_service.approve(test_db, second, "admin1")

        subdomains = sorted(s.subdomain for s in test_db.query(Store).all())
        assert subdomains == ["my-fashion-store", "my-fashion-store-2"]

    def test_exhausted_subdomains_mark_failure(self, test_db, submitted_application):
        stores = MagicMock()
        stores.get_store.return_value = None
        stores.get_store_by_owner.return_value = None
        stores.create_store.side_effect = SlugConflictError("my-fashion-store")
        service = ApplicationService(provisioner=ProvisioningService(stores=stores))

        assert service.approve(test_db, submitted_application, "admin1") is True

        application = service.get_by_id(test_db, submitted_application)
        assert application.status == "approved"
        assert application.provisioning_status == "failed"
        assert "No free subdomain" in application.provisioning_error
        assert stores.create_store.call_count == 5

    def test_store_creation_failure_is_swallowed(self, test_db, submitted_application):
        with patch.object(store_service, "create_store", side_effect=RuntimeError("store backend down")):
            assert application_service.approve(test_db, submitted_application, "admin1") is True

        application = application_service.get_by_id(test_db, submitted_application)
        assert application.status == "approved"
        assert application.reviewed_by == "admin1"
        assert application.provisioning_status == "failed"
        assert application.provisioning_error == "store backend down"
        assert application.store_id is None
        assert test_db.query(Store).count() == 0

    def test_retry_after_failed_store_creation(self, test_db, submitted_application):
        with patch.object(store_service, "create_store", side_effect=RuntimeError("store backend down")):
            application_service.approve(test_db, submitted_application, "admin1")

        assert [a.id for a in application_service.list_failed_provisioning(test_db)] == [
            submitted_application
        ]
        assert application_service.retry_provisioning(test_db, submitted_application) == "done"

        application = application_service.get_by_id(test_db, submitted_application)
        assert application.provisioning_status == "done"
        assert test_db.query(Store).count() == 1
        assert application_service.list_failed_provisioning(test_db) == []

    def test_seeding_failure_keeps_store_and_retry_only_seeds(self, test_db, submitted_application):
        with patch.object(catalog_service, "seed_sample_data", side_effect=RuntimeError("catalog down")):
            application_service.approve(test_db, submitted_application, "admin1")

        application = application_service.get_by_id(test_db, submitted_application)
        assert application.provisioning_status == "failed"
        store_id = application.store_id
        assert store_id is not None

        assert application_service.retry_provisioning(test_db, submitted_application) == "done"

        assert test_db.query(Store).count() == 1
        assert application_service.get_by_id(test_db, submitted_application).store_id == store_id
        assert test_db.query(Product).filter(Product.store_id == store_id).count() == 3

    def test_retry_is_refused_when_nothing_failed(self, test_db, submitted_application):
        assert application_service.retry_provisioning(test_db, submitted_application) is None

        application_service.approve(test_db, submitted_application, "admin1")
        assert application_service.retry_provisioning(test_db, submitted_application) is None
        assert application_service.retry_provisioning(test_db, "app_missing") is None

    def test_seeding_disabled_by_settings(self, test_db, submitted_application):
        with patch("storefront.services.provisioning_service.settings.SEED_SAMPLE_DATA", False):
            application_service.approve(test_db, submitted_application, "admin1")

        application = application_service.get_by_id(test_db, submitted_application)
        assert application.provisioning_status == "done"
        assert test_db.get(Store, application.store_id).seeded is False
        assert test_db.query(Product).count() == 0


@pytest.mark.unit
class TestStoreIdRecording:

    def _approve_without_provisioning(self, db, app_id):
        service = ApplicationService(provisioner=MagicMock(spec=ProvisioningService))
        assert service.approve(db, app_id, "admin1") is True
        return application_service.get_by_id(db, app_id)

    def test_failed_store_id_write_marks_failure(self, test_db, submitted_application):
        application = self._approve_without_provisioning(test_db, submitted_application)
        real_commit = test_db.commit
        commits = []

        def flaky_commit():
            commits.append(1)
            # The second commit records the new store id on the application
            if len(commits) == 2:
                raise OperationalError("UPDATE store_applications", {}, Exception("disk I/O error"))
            real_commit()

        with patch.object(test_db, "commit", side_effect=flaky_commit):
            assert provisioning_service.provision(test_db, application) == "failed"

        application = application_service.get_by_id(test_db, submitted_application)
        assert application.provisioning_status == "failed"
        assert "disk I/O error" in application.provisioning_error
        assert application.store_id is None
        assert test_db.query(Store).count() == 1

    def test_retry_adopts_store_left_by_earlier_attempt(self, test_db, submitted_application):
        application = self._approve_without_provisioning(test_db, submitted_application)
        orphan = store_service.create_store(test_db, build_store_payload(application))
        application.provisioning_status = "failed"
        test_db.commit()

        assert application_service.retry_provisioning(test_db, submitted_application) == "done"

        application = application_service.get_by_id(test_db, submitted_application)
        assert application.store_id == orphan.id
        assert test_db.query(Store).count() == 1
        assert test_db.get(Store, orphan.id).seeded is True
