from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, List

from checkout_demo.models import CartItem, Customer, ShipmentLine
from checkout_demo.store import Store


class InventoryService:
    def __init__(self, store: Store):
        self.store = store

    def commit(self, customer: Customer, items: Iterable[CartItem]) -> None:
        items = list(items)
        # all lines are checked before the first decrement
        need: Dict[int, int] = {}
        for item in items:
            product = item.product
            need[id(product)] = need.get(id(product), 0) + item.quantity
            if product.quantity < need[id(product)]:
                raise ValueError(
                    f"Insufficient inventory for {product.name}: have={product.quantity}, need={need[id(product)]}"
                )

        for item in items:
            product = item.product
            product.quantity -= item.quantity
            self.store.log(
                f"[customer={customer.name}] stock taken: {product.name} qty={item.quantity} (left={product.quantity})"
            )


class BillingService:
    def __init__(self, store: Store):
        self.store = store

    def charge(self, customer: Customer, amount: Decimal) -> None:
        if customer.balance < amount:
            raise ValueError(f"Insufficient balance for {customer.name}: have={customer.balance}, need={amount}")
        customer.balance -= amount
        self.store.log(f"[customer={customer.name}] charged amount={amount} (balance={customer.balance})")


class ShippingService:
    def __init__(self, store: Store):
        self.store = store

    def ship_items(self, items: Iterable[CartItem]) -> List[ShipmentLine]:
        self.store.log("Shipping the following items:")
        shipments: List[ShipmentLine] = []
        for item in items:
            info = item.product.shipping_info()
            if info is None:
                continue
            name, weight = info
            line = ShipmentLine(
                name=name,
                quantity=item.quantity,
                weight_per_unit_kg=weight,
                total_weight_kg=weight * item.quantity,
            )
            shipments.append(line)
            self.store.log(
                f"- {line.name} | Quantity: {line.quantity} | Weight per item: {line.weight_per_unit_kg} kg"
                f" | Total weight: {line.total_weight_kg} kg"
            )
        self.store.log(f"Total package weight: {sum((s.total_weight_kg for s in shipments), 0.0)} kg")
        return shipments
