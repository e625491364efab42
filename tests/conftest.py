"""
Pytest fixtures for the SellerSync test suite.

Provides:
- An in-memory SQLite database, tables created and dropped per test
- A session for service-level tests
- A TestClient plus bearer tokens for an admin, a manager and a viewer
- Small builders for sellers, stock items and payments

The environment is configured before any ``sellersync`` import so the
engine binds to SQLite instead of PostgreSQL.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from sellersync.database.database import Base, SessionLocal, engine
from sellersync.main import app
from sellersync.modules.auth.schemas import UserCreate, UserRole
from sellersync.modules.auth.service import AuthService
from sellersync.modules.payments.schemas import PaymentCreate
from sellersync.modules.payments.service import PaymentService
from sellersync.modules.sales.schemas import SaleCreate
from sellersync.modules.sales.service import SaleService
from sellersync.modules.sellers.schemas import SellerCreate
from sellersync.modules.sellers.service import SellerService
from sellersync.modules.stock.schemas import StockItemCreate
from sellersync.modules.stock.service import StockService


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def _token_for(role: UserRole) -> str:
    session = SessionLocal()
    try:
        service = AuthService(session)
        username = f"{role.value}_user"
        service.create_user(UserCreate(username=username, password="secret123", role=role))
        return service.login(username, "secret123").access_token
    finally:
        session.close()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {_token_for(UserRole.ADMIN)}"}


@pytest.fixture
def manager_headers():
    return {"Authorization": f"Bearer {_token_for(UserRole.MANAGER)}"}


@pytest.fixture
def viewer_headers():
    return {"Authorization": f"Bearer {_token_for(UserRole.VIEWER)}"}


# ----- builders -----

@pytest.fixture
def make_seller(db):
    def _make(name="Asha Crafts", initial_balance="0", **fields):
        return SellerService(db).create_seller(
            SellerCreate(name=name, initial_balance=Decimal(initial_balance), **fields)
        )
    return _make


@pytest.fixture
def make_item(db):
    def _make(seller, item_name="Brass lamp", cost_price="100"):
        return StockService(db).create_stock_item(
            StockItemCreate(seller_id=seller.id, item_name=item_name, cost_price=Decimal(cost_price))
        )
    return _make


@pytest.fixture
def make_sale(db):
    def _make(item, selling_price="150", sale_date=date(2024, 3, 10), **fields):
        return SaleService(db).record_sale(
            SaleCreate(
                stock_item_id=item.id,
                selling_price=Decimal(selling_price),
                sale_date=sale_date,
                **fields
            )
        )
    return _make


@pytest.fixture
def make_payment(db):
    def _make(seller, amount, payment_date=date(2024, 3, 15), **fields):
        return PaymentService(db).create_payment(
            PaymentCreate(
                seller_id=seller.id,
                amount=Decimal(amount),
                payment_date=payment_date,
                **fields
            )
        )
    return _make
