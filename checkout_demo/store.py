from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, List

from checkout_demo.models import Customer, Product

logger = logging.getLogger(__name__)


class Store:
    """
    In-memory catalogue, customer book and report sink.

    Holds only:
    - products by name (stock lives on the Product itself)
    - customers by name (each with their own cart)
    - the list of report lines emitted by checkouts (for the demo and tests)
    """

    def __init__(self) -> None:
        self.products: Dict[str, Product] = {}
        self.customers: Dict[str, Customer] = {}

        self.logs: List[str] = []

    def log(self, message: str) -> None:
        self.logs.append(message)
        logger.info(message)

    # Seed helpers
    def add_product(self, product: Product) -> Product:
        self.products[product.name] = product
        return product

    def add_customer(self, name: str, balance: Decimal) -> Customer:
        customer = Customer(name=name, balance=balance)
        self.customers[name] = customer
        return customer
