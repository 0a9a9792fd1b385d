from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable, Dict, List, Optional

from checkout_demo.errors import RejectionReason
from checkout_demo.models import Cart, CartItem, CheckoutResult, Customer
from checkout_demo.services import BillingService, InventoryService, ShippingService
from checkout_demo.store import Store


@dataclass(slots=True)
class Rejection:
    reason: RejectionReason
    message: str
    product_name: Optional[str] = None


class Check(ABC):
    def __init__(self, store: Store, customer: Customer):
        self.store = store
        self.customer = customer

    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def evaluate(self) -> Optional[Rejection]: ...

    def run(self) -> Optional[Rejection]:
        rejection = self.evaluate()
        if rejection is None:
            self.store.log(f"[customer={self.customer.name}] CHECK {self.name()} OK")
        else:
            self.store.log(f"[customer={self.customer.name}] CHECK {self.name()} REJECTED: {rejection.message}")
        return rejection


class CartNotEmpty(Check):
    def name(self) -> str:
        return "CartNotEmpty"

    def evaluate(self) -> Optional[Rejection]:
        if self.customer.cart.is_empty:
            return Rejection(RejectionReason.EMPTY_CART, "Cart is empty. Cannot proceed to checkout.")
        return None


class ProductNotExpired(Check):
    def __init__(self, store: Store, customer: Customer, item: CartItem, now: Optional[datetime]):
        super().__init__(store, customer)
        self.item = item
        self.now = now

    def name(self) -> str:
        return f"ProductNotExpired({self.item.product.name})"

    def evaluate(self) -> Optional[Rejection]:
        product = self.item.product
        if product.is_expired(self.now):
            return Rejection(
                RejectionReason.EXPIRED,
                f"{product.name} is expired. Cannot proceed to checkout.",
                product.name,
            )
        return None


class StockAvailable(Check):
    """
    Re-checks stock at checkout time.

    demand is shared by all StockAvailable checks of one checkout and keyed by
    product identity, so several lines of the same product are checked against
    their combined quantity.
    """

    def __init__(self, store: Store, customer: Customer, item: CartItem, demand: Dict[int, int]):
        super().__init__(store, customer)
        self.item = item
        self.demand = demand

    def name(self) -> str:
        return f"StockAvailable({self.item.product.name})"

    def evaluate(self) -> Optional[Rejection]:
        product = self.item.product
        wanted = self.demand.get(id(product), 0) + self.item.quantity
        if wanted > product.quantity:
            return Rejection(
                RejectionReason.INSUFFICIENT_STOCK,
                f"{product.name} has insufficient stock (requested={wanted}, available={product.quantity}). "
                "Cannot proceed to checkout.",
                product.name,
            )
        self.demand[id(product)] = wanted
        return None


class BalanceCovers(Check):
    def __init__(self, store: Store, customer: Customer, total: Decimal):
        super().__init__(store, customer)
        self.total = total

    def name(self) -> str:
        return "BalanceCovers"

    def evaluate(self) -> Optional[Rejection]:
        if self.total > self.customer.balance:
            return Rejection(
                RejectionReason.INSUFFICIENT_BALANCE,
                f"Insufficient balance (total={self.total}, balance={self.customer.balance}). "
                "Cannot proceed to checkout.",
            )
        return None


class CheckoutEngine:
    """
    Validates a customer's whole cart, then commits stock and balance.

    Every check runs before anything is touched, so a rejected checkout leaves
    products and customer exactly as they were. Business rejections come back as
    a CheckoutResult; only malformed arguments raise.
    """

    def __init__(self, store: Store, clock: Optional[Callable[[], datetime]] = None):
        self.store = store
        self.clock = clock
        self.inventory = InventoryService(store)
        self.billing = BillingService(store)
        self.shipping = ShippingService(store)

    def _now(self) -> Optional[datetime]:
        # None lets each product read the wall clock in its own timezone
        return self.clock() if self.clock is not None else None

    def _validate(self, customer: Customer) -> tuple[Optional[Rejection], Decimal]:
        rejection = CartNotEmpty(self.store, customer).run()
        if rejection:
            return rejection, Decimal("0")

        now = self._now()
        demand: Dict[int, int] = {}
        total = Decimal("0")
        for item in customer.cart.items:
            line_checks: List[Check] = [
                ProductNotExpired(self.store, customer, item, now),
                StockAvailable(self.store, customer, item, demand),
            ]
            for check in line_checks:
                rejection = check.run()
                if rejection:
                    return rejection, total
            total += item.line_total()

        return BalanceCovers(self.store, customer, total).run(), total

    def checkout(self, customer: Customer) -> CheckoutResult:
        if not isinstance(customer, Customer) or not isinstance(customer.cart, Cart):
            raise TypeError(f"checkout expects a Customer with a Cart, got {customer!r}")

        self.store.log(f"[customer={customer.name}] CHECKOUT START lines={len(customer.cart)} balance={customer.balance}")

        rejection, total = self._validate(customer)
        if rejection:
            self.store.log(f"[customer={customer.name}] CHECKOUT REJECTED: {rejection.message}")
            return CheckoutResult(
                success=False,
                message=rejection.message,
                total=total,
                remaining_balance=customer.balance,
                reason=rejection.reason,
                product_name=rejection.product_name,
            )

        self.inventory.commit(customer, customer.cart.items)
        self.billing.charge(customer, total)

        message = f"Checkout successful! Total price: {total}. Remaining balance: {customer.balance}."
        self.store.log(f"[customer={customer.name}] {message}")

        shipments = self.shipping.ship_items(customer.cart.items)
        self.store.log(f"[customer={customer.name}] CHECKOUT OK")
        return CheckoutResult(
            success=True,
            message=message,
            total=total,
            remaining_balance=customer.balance,
            shipments=shipments,
        )
