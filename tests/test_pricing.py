from storefront.schemas.cart_schema import CartItem
from storefront.services.pricing import (
    FREE_SHIPPING_THRESHOLD,
    SHIPPING_FEE,
    OrderTotals,
    calculate_tax,
    calculate_totals,
)


def _line(price, qty, item_id="x"):
    return CartItem(id=item_id, product_id=item_id, name="line", price=price, quantity=qty)


def test_empty_cart_is_free():
    assert calculate_totals([]) == OrderTotals()
    t = calculate_totals([])
    assert (t.subtotal, t.shipping, t.tax, t.total) == (0, 0, 0, 0)


def test_subtotal_is_sum_of_lines():
    t = calculate_totals([_line(1200, 3, "a"), _line(7, 5, "b"), _line(99999, 1, "c")])
    assert t.subtotal == 1200 * 3 + 7 * 5 + 99999


def test_shipping_boundary_is_strictly_greater():
    at = calculate_totals([_line(FREE_SHIPPING_THRESHOLD, 1)])
    above = calculate_totals([_line(FREE_SHIPPING_THRESHOLD + 1, 1)])
    assert at.shipping == SHIPPING_FEE == 50000
    assert not at.free_shipping
    assert above.shipping == 0
    assert above.free_shipping


def test_tax_is_nine_percent():
    assert calculate_totals([_line(100000, 1)]).tax == 9000


def test_tax_rounds_half_up():
    # 50 * 0.09 = 4.5; banker's rounding would give 4
    assert calculate_tax(50) == 5
    assert calculate_tax(49) == 4
    assert calculate_tax(0) == 0


def test_checkout_scenario():
    t = calculate_totals([_line(250000, 2, "a"), _line(150000, 1, "b")])
    assert t.subtotal == 650000
    assert t.shipping == 50000
    assert t.tax == 58500
    assert t.total == 758500
    assert t.amount_to_free_shipping == 350000


def test_no_free_shipping_hint_above_threshold():
    t = calculate_totals([_line(600000, 2)])
    assert t.amount_to_free_shipping == 0
    assert t.total == 1200000 + 108000
