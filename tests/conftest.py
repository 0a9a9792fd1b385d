"""Pytest fixtures for the checkout demo (in-memory store + fixed clock)."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from checkout_demo.checkout import CheckoutEngine
from checkout_demo.models import Product
from checkout_demo.store import Store

NOW = datetime(2026, 3, 1, 12, 0, 0)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def store() -> Store:
    store = Store()

    store.add_product(Product.shippable("TV", price=Decimal("300"), quantity=2, weight_kg=8.0))
    store.add_product(
        Product.expirable("Expired Cheese", price=Decimal("15"), quantity=5, expires_at=NOW - timedelta(days=2))
    )
    store.add_product(
        Product.expirable("Fresh Cheese", price=Decimal("15"), quantity=5, expires_at=NOW + timedelta(days=5))
    )
    store.add_product(Product.non_expirable("Mobile Card", price=Decimal("10"), quantity=0))  # Out of stock
    store.add_product(Product.non_expirable("Scratch Card", price=Decimal("10"), quantity=10))
    store.add_product(
        Product.shippable_expirable(
            "Biscuits", price=Decimal("2.50"), quantity=20, weight_kg=0.7, expires_at=NOW + timedelta(days=30)
        )
    )

    store.add_customer("Zyad", Decimal("500"))
    store.add_customer("Mona", Decimal("50"))

    return store


@pytest.fixture
def engine(store) -> CheckoutEngine:
    return CheckoutEngine(store, clock=lambda: NOW)
