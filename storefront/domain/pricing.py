# storefront/domain/pricing.py
import secrets
import string
import time
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from storefront.utils.settings import ORDER_NUMBER_PREFIX

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

_BASE36 = string.digits + string.ascii_uppercase


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def unit_price(current_price, price_modifier=None) -> Decimal:
    """Live unit price of a cart line: product price plus the variant modifier."""
    return to_money(Decimal(str(current_price)) + Decimal(str(price_modifier or 0)))


def cart_totals(lines: Iterable[tuple[Decimal, int]]) -> tuple[Decimal, int]:
    """(unit_price, quantity) pairs -> (subtotal, item_count)."""
    subtotal = ZERO
    item_count = 0
    for price, quantity in lines:
        subtotal += price * quantity
        item_count += quantity
    return to_money(subtotal), item_count


def compute_reduction(discount, subtotal: Decimal) -> Decimal:
    """
    Amount taken off the subtotal by a discount.

    percentage: subtotal * value / 100, capped at max_discount_amount when set.
    fixed: the value itself, not capped by the subtotal.
    """
    if discount is None:
        return ZERO

    value = Decimal(str(discount.discount_value))
    if discount.discount_type == "percentage":
        amount = to_money(Decimal(subtotal) * value / Decimal(100))
        cap = discount.max_discount_amount
        if cap is not None and amount > Decimal(str(cap)):
            amount = to_money(cap)
        return amount

    return to_money(value)


def _base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_order_number(now_ms: int | None = None) -> str:
    """NC-<base36 ms timestamp>-<4 random base36 chars>. Not re-checked for uniqueness."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(4))
    return f"{ORDER_NUMBER_PREFIX}-{_base36(now_ms)}-{suffix}"
