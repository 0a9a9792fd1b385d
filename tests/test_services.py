"""Tests for the inventory, billing and shipping services."""
from decimal import Decimal

import pytest

from checkout_demo.models import CartItem, Product
from checkout_demo.services import BillingService, InventoryService, ShippingService


def test_shipping_skips_non_shippable_items(store):
    items = [
        CartItem(store.products["Fresh Cheese"], 2),
        CartItem(store.products["TV"], 2),
        CartItem(store.products["Scratch Card"], 1),
    ]

    shipments = ShippingService(store).ship_items(items)

    assert len(shipments) == 1
    assert shipments[0].name == "TV"
    assert shipments[0].quantity == 2
    assert shipments[0].weight_per_unit_kg == 8.0
    assert shipments[0].total_weight_kg == 16.0
    assert store.logs[0] == "Shipping the following items:"
    assert "Total weight: 16.0 kg" in store.logs[1]
    assert store.logs[-1] == "Total package weight: 16.0 kg"


def test_shipping_does_not_touch_inputs(store):
    tv = store.products["TV"]
    items = [CartItem(tv, 1)]

    ShippingService(store).ship_items(items)

    assert tv.quantity == 2
    assert items[0].quantity == 1


def test_shipping_with_nothing_shippable_reports_zero_weight(store):
    shipments = ShippingService(store).ship_items([CartItem(store.products["Scratch Card"], 3)])

    assert shipments == []
    assert store.logs[-1] == "Total package weight: 0.0 kg"


def test_inventory_commit_decrements_stock(store):
    customer = store.customers["Zyad"]
    cheese = store.products["Fresh Cheese"]

    InventoryService(store).commit(customer, [CartItem(cheese, 2)])

    assert cheese.quantity == 3
    assert any("stock taken: Fresh Cheese qty=2 (left=3)" in l for l in store.logs)


def test_inventory_commit_refuses_negative_stock(store):
    customer = store.customers["Zyad"]
    card = Product.non_expirable("Gift Card", Decimal("5"), 1)

    with pytest.raises(ValueError, match="Insufficient inventory for Gift Card"):
        InventoryService(store).commit(customer, [CartItem(card, 2)])

    assert card.quantity == 1


def test_billing_charge(store):
    customer = store.customers["Mona"]

    BillingService(store).charge(customer, Decimal("12.50"))

    assert customer.balance == Decimal("37.50")
    with pytest.raises(ValueError, match="Insufficient balance for Mona"):
        BillingService(store).charge(customer, Decimal("40"))
    assert customer.balance == Decimal("37.50")


def test_inventory_commit_checks_every_line_before_taking_stock(store):
    customer = store.customers["Zyad"]
    cheese = store.products["Fresh Cheese"]
    tv = store.products["TV"]

    with pytest.raises(ValueError, match="Insufficient inventory for TV"):
        InventoryService(store).commit(customer, [CartItem(cheese, 2), CartItem(tv, 1), CartItem(tv, 2)])

    assert cheese.quantity == 5  # Unchanged
    assert tv.quantity == 2  # Unchanged
    assert any("stock taken" in l for l in store.logs) is False
