"""Pytest fixtures for storefront tests."""

import os

# przed importem storefront: settings czytaja env przy imporcie
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SESSION_BACKEND"] = "memory"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["ADMIN_API_TOKEN"] = "test-admin-token"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from storefront.api.deps import get_session_store, get_storage_client
from storefront.data.database import get_db, make_engine
from storefront.data.migrations import migrate
from storefront.data.models import CategoryModel, ProductModel
from storefront.main import app
from storefront.services.session_store import InMemorySessionStore
from helpers import RecordingStorage


@pytest.fixture
def engine():
    """In-memory database migrated with the real migrations."""
    eng = make_engine("sqlite://")
    migrate(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def store():
    return InMemorySessionStore()


@pytest.fixture
def storage():
    return RecordingStorage()


@pytest.fixture
def client(session_factory, store, storage):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_store] = lambda: store
    app.dependency_overrides[get_storage_client] = lambda: storage

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def cookies(db):
    """Category with two products: Cookie A (50) and Cookie B (30)."""
    category = CategoryModel(name="Cookies", description="Butter cookies")
    db.add(category)
    db.commit()

    cookie_a = ProductModel(name="Cookie A", price=Decimal("50.00"), category_id=category.id)
    cookie_b = ProductModel(name="Cookie B", price=Decimal("30.00"), category_id=category.id)
    db.add_all([cookie_a, cookie_b])
    db.commit()

    return {"category": category, "a": cookie_a, "b": cookie_b}

