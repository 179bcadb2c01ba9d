"""
Two reviewers acting on the same application through separate sessions.
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from storefront.database import Base
from storefront.models.application import StoreApplication
from storefront.models.store import Store
from storefront.services.application_service import application_service


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'race.db'}", connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autoflush=False)
    engine.dispose()


@pytest.mark.unit
class TestConcurrentReview:

    def test_stale_reader_cannot_double_approve(self, session_factory, merchant_data,
                                                store_config):
        setup = session_factory()
        app_id = application_service.submit(setup, "m1", merchant_data, store_config)
        setup.close()

        reviewer_a = session_factory()
        reviewer_b = session_factory()
        try:
            # Both reviewers load the application while it is still pending
            assert reviewer_a.get(StoreApplication, app_id).status == "pending"
            assert reviewer_b.get(StoreApplication, app_id).status == "pending"

            assert application_service.approve(reviewer_a, app_id, "admin_a") is True
            assert application_service.approve(reviewer_b, app_id, "admin_b") is False

            check = session_factory()
            assert check.query(Store).count() == 1
            assert check.get(StoreApplication, app_id).reviewed_by == "admin_a"
            check.close()
        finally:
            reviewer_a.close()
            reviewer_b.close()

    def test_reject_loses_to_earlier_approve(self, session_factory, merchant_data, store_config):
        setup = session_factory()
        app_id = application_service.submit(setup, "m1", merchant_data, store_config)
        setup.close()

        approver = session_factory()
        rejecter = session_factory()
        try:
            rejecter.get(StoreApplication, app_id)
            assert application_service.approve(approver, app_id, "admin_a") is True
            assert application_service.reject(rejecter, app_id, "admin_b", "Too late") is False

            check = session_factory()
            application = check.get(StoreApplication, app_id)
            assert application.status == "approved"
            assert application.rejection_reason is None
            check.close()
        finally:
            approver.close()
            rejecter.close()


@pytest.mark.unit
class TestConcurrentRetry:

    def test_two_operators_retry_once(self, session_factory, merchant_data, store_config):
        setup = session_factory()
        app_id = application_service.submit(setup, "m1", merchant_data, store_config)
        application = setup.get(StoreApplication, app_id)
        application.status = "approved"
        application.provisioning_status = "failed"
        application.provisioning_error = "store backend down"
        setup.commit()
        setup.close()

        operator_a = session_factory()
        operator_b = session_factory()
        try:
            # Both operators see the failed attempt before either retries
            assert operator_a.get(StoreApplication, app_id).provisioning_status == "failed"
            assert operator_b.get(StoreApplication, app_id).provisioning_status == "failed"

            assert application_service.retry_provisioning(operator_a, app_id) == "done"
            assert application_service.retry_provisioning(operator_b, app_id) is None

            check = session_factory()
            assert [s.subdomain for s in check.query(Store).all()] == ["my-fashion-store"]
            assert check.get(StoreApplication, app_id).provisioning_status == "done"
            check.close()
        finally:
            operator_a.close()
            operator_b.close()
