from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Iterator, List, Optional, Tuple

from checkout_demo.errors import InsufficientStockError, RejectionReason


@dataclass(slots=True, eq=False)
class Product:
    """
    A purchasable item.

    Expiry and shipping are independent capabilities carried as optional fields:
    - expires_at is None  -> never expires
    - weight_kg is None   -> not shipped (digital cards, services, ...)

    Instances are compared by identity: two carts pointing at the same product
    share its stock.
    """

    name: str
    price: Decimal
    quantity: int
    expires_at: Optional[datetime] = None
    weight_kg: Optional[float] = None

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValueError(f"price must be >= 0, got {self.price} for {self.name}")
        if self.quantity < 0:
            raise ValueError(f"quantity must be >= 0, got {self.quantity} for {self.name}")
        if self.weight_kg is not None and self.weight_kg < 0:
            raise ValueError(f"weight_kg must be >= 0, got {self.weight_kg} for {self.name}")

    @classmethod
    def non_expirable(cls, name: str, price: Decimal, quantity: int) -> "Product":
        return cls(name=name, price=price, quantity=quantity)

    @classmethod
    def expirable(cls, name: str, price: Decimal, quantity: int, expires_at: datetime) -> "Product":
        return cls(name=name, price=price, quantity=quantity, expires_at=expires_at)

    @classmethod
    def shippable(cls, name: str, price: Decimal, quantity: int, weight_kg: float) -> "Product":
        return cls(name=name, price=price, quantity=quantity, weight_kg=weight_kg)

    @classmethod
    def shippable_expirable(
        cls, name: str, price: Decimal, quantity: int, weight_kg: float, expires_at: datetime
    ) -> "Product":
        return cls(name=name, price=price, quantity=quantity, expires_at=expires_at, weight_kg=weight_kg)

    @property
    def is_expirable(self) -> bool:
        return self.expires_at is not None

    @property
    def is_shippable(self) -> bool:
        return self.weight_kg is not None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        if now is None:
            # same awareness as expires_at, otherwise the comparison raises
            now = datetime.now(tz=self.expires_at.tzinfo)
        return now > self.expires_at

    def shipping_info(self) -> Optional[Tuple[str, float]]:
        if self.weight_kg is None:
            return None
        return self.name, self.weight_kg


@dataclass(slots=True)
class CartItem:
    product: Product
    quantity: int

    def line_total(self) -> Decimal:
        return self.product.price * Decimal(self.quantity)


@dataclass(slots=True)
class Cart:
    items: List[CartItem] = field(default_factory=list)

    def add_product(self, product: Product, quantity: int) -> CartItem:
        # Checked against stock as it is right now; units already sitting in
        # other lines of this cart are not subtracted. Checkout re-validates.
        if quantity <= 0:
            raise ValueError("quantity must be > 0")
        if quantity > product.quantity:
            raise InsufficientStockError(product.name, quantity, product.quantity)
        item = CartItem(product=product, quantity=quantity)
        self.items.append(item)
        return item

    def total(self) -> Decimal:
        return sum((item.line_total() for item in self.items), Decimal("0"))

    @property
    def is_empty(self) -> bool:
        return not self.items

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[CartItem]:
        return iter(self.items)


@dataclass(slots=True)
class Customer:
    name: str
    balance: Decimal
    cart: Cart = field(default_factory=Cart)


@dataclass(slots=True)
class ShipmentLine:
    name: str
    quantity: int
    weight_per_unit_kg: float
    total_weight_kg: float


@dataclass(slots=True)
class CheckoutResult:
    """
    Outcome of one checkout call.

    Rejections are ordinary results: reason says why, product_name says which
    line (None for cart-level reasons), and nothing was mutated.
    """

    success: bool
    message: str
    total: Decimal = Decimal("0")
    remaining_balance: Decimal = Decimal("0")
    reason: Optional[RejectionReason] = None
    product_name: Optional[str] = None
    shipments: List[ShipmentLine] = field(default_factory=list)

    @property
    def total_weight_kg(self) -> float:
        return sum((line.total_weight_kg for line in self.shipments), 0.0)
