import re
from decimal import Decimal
from types import SimpleNamespace

from storefront.domain.pricing import cart_totals, compute_reduction, generate_order_number, to_money, unit_price


def _discount(discount_type, value, cap=None):
    return SimpleNamespace(discount_type=discount_type, discount_value=Decimal(value), max_discount_amount=cap)


def test_unit_price_adds_variant_modifier():
    assert unit_price(Decimal("1000.00"), Decimal("100.00")) == Decimal("1100.00")
    assert unit_price(Decimal("1000.00"), None) == Decimal("1000.00")
    assert unit_price(Decimal("19.99"), Decimal("-5.00")) == Decimal("14.99")


def test_cart_totals():
    subtotal, count = cart_totals([(Decimal("1000.00"), 2), (Decimal("9.99"), 3)])
    assert subtotal == Decimal("2029.97")
    assert count == 5


def test_cart_totals_empty():
    assert cart_totals([]) == (Decimal("0.00"), 0)


def test_percentage_reduction():
    assert compute_reduction(_discount("percentage", "10"), Decimal("2000.00")) == Decimal("200.00")


def test_percentage_reduction_is_capped():
    discount = _discount("percentage", "50", cap=Decimal("300.00"))
    assert compute_reduction(discount, Decimal("2000.00")) == Decimal("300.00")


def test_percentage_reduction_rounds_half_up():
    # 12.5% of 0.20 = 0.025
    assert compute_reduction(_discount("percentage", "12.5"), Decimal("0.20")) == Decimal("0.03")


def test_fixed_reduction_ignores_cap_and_subtotal():
    discount = _discount("fixed", "500", cap=Decimal("100.00"))
    assert compute_reduction(discount, Decimal("300.00")) == Decimal("500.00")


def test_no_discount_means_no_reduction():
    assert compute_reduction(None, Decimal("123.45")) == Decimal("0.00")


def test_to_money():
    assert to_money("1.005") == Decimal("1.01")
    assert to_money(2) == Decimal("2.00")


def test_order_number_format():
    number = generate_order_number(now_ms=1700000000000)
    assert re.fullmatch(r"NC-[0-9A-Z]+-[0-9A-Z]{4}", number)
    assert number.startswith("NC-LOYW3V28-")
