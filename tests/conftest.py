"""
Shared pytest fixtures.
"""
import sys
import os
from typing import Any, Dict, Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Add backend directory to sys.path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../backend"))

from storefront.database import Base
from storefront import models  # noqa: F401  (registers every table)
from storefront.services.application_service import application_service


@pytest.fixture
def test_db() -> Generator[Session, None, None]:
    """In-memory SQLite database shared by every session of the test."""
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, autoflush=False)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture
def db_session(test_db):
    """Alias for test_db for clarity"""
    return test_db


@pytest.fixture
def merchant_data() -> Dict[str, Any]:
    return {
        "first_name": "نورة",
        "last_name": "القحطاني",
        "email": "noura@example.com",
        "phone": "+966501112233",
        "city": "الرياض",
        "business_name": "Rose Garden Boutique",
        "business_type": "fashion",
    }


@pytest.fixture
def store_config() -> Dict[str, Any]:
    return {
        "template": "modern-ecommerce",
        "customization": {
            "store_name": "My Fashion Store!!",
            "store_description": "Dresses and accessories",
            "colors": {
                "primary": "#FF6B35",
                "secondary": "#4A90E2",
                "background": "#FFFFFF",
            },
        },
    }


@pytest.fixture
def submitted_application(test_db, merchant_data, store_config) -> str:
    """Id of a freshly submitted pending application for merchant m1."""
    return application_service.submit(test_db, "m1", merchant_data, store_config)
