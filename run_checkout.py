from __future__ import annotations

import argparse
import logging
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Optional

from checkout_demo.checkout import CheckoutEngine
from checkout_demo.errors import InsufficientStockError
from checkout_demo.models import CheckoutResult, Customer, Product
from checkout_demo.store import Store

SCENARIOS = ("success", "expired", "out-of-stock", "insufficient-balance", "empty")


def amount(value: str) -> Decimal:
    try:
        result = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}") from None
    if not result.is_finite():
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}")
    return result


def seed(store: Store, balance: Decimal) -> Customer:
    now = datetime.now()
    store.add_product(Product.shippable("TV", price=Decimal("300"), quantity=2, weight_kg=8.0))
    store.add_product(
        Product.expirable("Expired Cheese", price=Decimal("15"), quantity=5, expires_at=now - timedelta(days=2))
    )
    store.add_product(
        Product.expirable("Fresh Cheese", price=Decimal("15"), quantity=5, expires_at=now + timedelta(days=5))
    )
    store.add_product(Product.non_expirable("Mobile Card", price=Decimal("10"), quantity=0))
    return store.add_customer("Zyad", balance)


def fill_cart(store: Store, customer: Customer, scenario: str) -> None:
    p = store.products
    if scenario == "success":
        customer.cart.add_product(p["TV"], 1)
        customer.cart.add_product(p["Fresh Cheese"], 2)
    elif scenario == "expired":
        customer.cart.add_product(p["Expired Cheese"], 1)
    elif scenario == "out-of-stock":
        customer.cart.add_product(p["Mobile Card"], 1)
    elif scenario == "insufficient-balance":
        customer.cart.add_product(p["TV"], 2)
        customer.cart.add_product(p["Fresh Cheese"], 5)


def run(scenario: str, balance: Decimal) -> tuple[Store, Optional[CheckoutResult]]:
    store = Store()
    customer = seed(store, balance)
    try:
        fill_cart(store, customer, scenario)
    except InsufficientStockError as e:
        store.log(f"Error: {e}")
        return store, None
    return store, CheckoutEngine(store).checkout(customer)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    p = argparse.ArgumentParser(description="Run one checkout against the sample catalogue and print logs.")
    p.add_argument("--scenario", choices=SCENARIOS, default="success")
    p.add_argument("--balance", type=amount, default=Decimal("500"))
    args = p.parse_args()

    store, result = run(args.scenario, args.balance)

    print("\n=== RESULT ===")
    if result is None:
        print("success: False (cart could not be filled)")
    else:
        print("success:", result.success)
        print("reason:", result.reason.value if result.reason else None)
        print("total:", result.total)
        print("remaining balance:", result.remaining_balance)
    print("products:", {name: product.quantity for name, product in store.products.items()})


if __name__ == "__main__":
    main()
