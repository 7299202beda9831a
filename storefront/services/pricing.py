from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

FREE_SHIPPING_THRESHOLD = 1_000_000
SHIPPING_FEE = 50_000
TAX_RATE = Decimal("0.09")


@dataclass(frozen=True)
class OrderTotals:
    subtotal: int = 0
    shipping: int = 0
    tax: int = 0
    total: int = 0
    amount_to_free_shipping: int = 0

    @property
    def free_shipping(self) -> bool:
        return self.subtotal > FREE_SHIPPING_THRESHOLD


def calculate_tax(subtotal: int) -> int:
    # half-up on the exact product; round() would round half to even
    return int((Decimal(subtotal) * TAX_RATE).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_totals(items: Iterable) -> OrderTotals:
    """
    Price a list of cart lines (anything with ``price`` and ``quantity``).

    Shipping is free strictly above the threshold; an empty cart costs nothing.
    """
    lines = list(items)
    if not lines:
        return OrderTotals()

    subtotal = sum(it.price * it.quantity for it in lines)

    shipping = 0 if subtotal > FREE_SHIPPING_THRESHOLD else SHIPPING_FEE
    tax = calculate_tax(subtotal)
    return OrderTotals(
        subtotal=subtotal,
        shipping=shipping,
        tax=tax,
        total=subtotal + shipping + tax,
        amount_to_free_shipping=max(FREE_SHIPPING_THRESHOLD - subtotal, 0),
    )
