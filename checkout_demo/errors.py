from __future__ import annotations

from enum import Enum


class InsufficientStockError(ValueError):
    """Raised when a cart line asks for more units than are on hand."""

    def __init__(self, product_name: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for {product_name}: requested={requested}, available={available}"
        )
        self.product_name = product_name
        self.requested = requested
        self.available = available


class RejectionReason(str, Enum):
    EMPTY_CART = "empty_cart"
    EXPIRED = "expired"
    INSUFFICIENT_STOCK = "insufficient_stock"
    INSUFFICIENT_BALANCE = "insufficient_balance"
