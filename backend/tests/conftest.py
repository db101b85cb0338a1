"""
Pytest fixtures for the WMS ledger test suite.

Provides:
- An in-memory SQLite database (tables created and dropped per test)
- A session per test, an authenticated actor and a small catalog
- A FastAPI TestClient bound to the test session

Environment is set before `wms` is imported so settings pick it up.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret-key"

from datetime import date
from types import SimpleNamespace
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from wms.database import Base, SessionLocal, engine, get_db
from wms.main import app
from wms.models import User
from wms.repositories.base import SoftDeleteRepository
from wms.schemas import (
    BrandCreate,
    CategoryCreate,
    LocationCreate,
    ProductBatchCreate,
    ProductCreate,
    ProductStockCreate,
)
from wms.services import (
    BrandService,
    CategoryService,
    LocationService,
    ProductBatchService,
    ProductService,
    ProductStockService,
)
from wms.utils.auth_internal import create_access_token, hash_password

TEST_PASSWORD = "secret123"

# Columns expected to change across delete + restore
AUDIT_ONLY = {"updated_at", "user_updt", "version", "deleted_at"}


def assert_restore_round_trip(service, entity, actor_id: int) -> None:
    """Delete then restore `entity`; only audit columns may differ."""
    before = SoftDeleteRepository.snapshot(entity)
    service.delete(entity.id, actor_id)
    after = SoftDeleteRepository.snapshot(service.restore(entity.id, actor_id))
    for column in set(before) - AUDIT_ONLY:
        assert after[column] == before[column], column
    assert after["deleted_at"] is None
    assert after["user_updt"] == actor_id


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """Fresh schema and session for every test."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


def make_user(db: Session, email: str, name: str = "Test User") -> User:
    user = User(name=name, email=email, password_hash=hash_password(TEST_PASSWORD), is_active=True)
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def actor(session) -> User:
    return make_user(session, "actor@example.com", "Warehouse Admin")


@pytest.fixture
def actor_id(actor) -> int:
    return actor.id


@pytest.fixture
def other_actor_id(session) -> int:
    return make_user(session, "clerk@example.com", "Stock Clerk").id


# =============================================================================
# Catalog fixtures
# =============================================================================


@pytest.fixture
def catalog(session, actor_id):
    """Brand > Category > two Products, plus two warehouse locations."""
    brand = BrandService(session).create(BrandCreate(name="Acme"), actor_id)
    category = CategoryService(session).create(CategoryCreate(brand_id=brand.id, name="Beverages"), actor_id)
    products = ProductService(session)
    product = products.create(ProductCreate(category_id=category.id, name="Mineral Water 600ml"), actor_id)
    other_product = products.create(ProductCreate(category_id=category.id, name="Orange Juice 1L"), actor_id)
    locations = LocationService(session)
    location = locations.create(LocationCreate(name="Main Warehouse"), actor_id)
    other_location = locations.create(LocationCreate(name="Reseller North", type="reseller"), actor_id)
    return SimpleNamespace(
        brand=brand,
        category=category,
        product=product,
        other_product=other_product,
        location=location,
        other_location=other_location,
    )


@pytest.fixture
def batch(session, catalog, actor_id):
    return ProductBatchService(session).create(
        ProductBatchCreate(
            product_id=catalog.product.id,
            code_batch="B-001",
            unit_price=100.0,
            exp_date=date(2025, 12, 31),
        ),
        actor_id,
    )


@pytest.fixture
def stock(session, catalog, batch, actor_id):
    return ProductStockService(session).create(
        ProductStockCreate(
            product_batch_id=batch.id,
            product_id=catalog.product.id,
            location_id=catalog.location.id,
            quantity=10,
        ),
        actor_id,
    )


# =============================================================================
# HTTP fixtures
# =============================================================================


@pytest.fixture
def client(session) -> Generator[TestClient, None, None]:
    """TestClient whose requests share the test session."""

    def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    app.state.cache.clear()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        app.state.cache.clear()


@pytest.fixture
def auth_headers(actor) -> dict:
    return {"Authorization": "Bearer %s" % create_access_token(actor.id, actor.email)}
