"""Unit tests for the OrderLedger engine.

These tests check the financial invariant, the merge-on-duplicate rule
for catalog products, validation of custom lines and payments, and the
no-op behaviour for unknown line and payment ids.
"""

import random

import pytest

from furniture_pos.orders.domain import Order, ValidationError
from furniture_pos.orders.ledger import placeholder_image_url


def assert_financials(order: Order):
    assert order.total == sum(ln.price * ln.quantity for ln in order.order_lines)
    assert order.paid_amount == sum(p.amount for p in order.payments)
    assert order.balance_due == order.total - order.paid_amount


def test_create_empty_order(ledger):
    """Happy path: a new order has a fresh id, a timestamp and zero totals."""
    order = ledger.create_empty_order()
    assert order.id == "order-1"
    assert order.order_lines == () and order.payments == ()
    assert (order.total, order.paid_amount, order.balance_due) == (0, 0, 0)
    assert order.created_at.tzinfo is not None


def test_same_product_twice_merges_into_one_line(ledger, chair):
    """Merge: adding the same catalog product twice bumps quantity on one line."""
    order = ledger.add_catalog_line(ledger.create_empty_order(), chair)
    order = ledger.add_catalog_line(order, chair)
    assert len(order.order_lines) == 1
    line = order.order_lines[0]
    assert line.quantity == 2
    assert line.price == 12000
    assert line.name == "Accent Chair"
    assert line.image_url == "https://img/chair.jpg"
    assert order.total == 24000


def test_merge_keeps_edited_price(ledger, chair):
    """Merge: a repeat add keeps the price edited on the existing line."""
    order = ledger.add_catalog_line(ledger.create_empty_order(), chair)
    line_id = order.order_lines[0].line_id
    order = ledger.update_line(order, line_id, price=11000)
    order = ledger.add_catalog_line(order, chair)
    assert order.order_lines[0].price == 11000
    assert order.order_lines[0].quantity == 2
    assert order.total == 22000


def test_custom_line_never_merges(ledger, chair):
    """Merge: custom lines are never merged, even with a matching name."""
    order = ledger.add_custom_line(ledger.create_empty_order(), "Accent Chair", 1, 12000)
    order = ledger.add_catalog_line(order, chair)
    order = ledger.add_custom_line(order, "Accent Chair", 1, 12000)
    assert len(order.order_lines) == 3
    assert [ln.product_id for ln in order.order_lines] == [None, "p1", None]
    assert_financials(order)


def test_late_add_flag_only_on_new_lines(ledger, chair, bed):
    """Late add: the flag is set only on lines created while it is on."""
    order = ledger.add_catalog_line(ledger.create_empty_order(), chair, is_late_add=False)
    order = ledger.add_catalog_line(order, chair, is_late_add=True)
    order = ledger.add_catalog_line(order, bed, is_late_add=True)
    assert [ln.is_added_later for ln in order.order_lines] == [False, True]


@pytest.mark.parametrize(
    "name, quantity, price, code",
    [
        ("", 1, 100, "EMPTY_NAME"),
        ("   ", 1, 100, "EMPTY_NAME"),
        ("Delivery Fee", 0, 100, "INVALID_QUANTITY"),
        ("Delivery Fee", -2, 100, "INVALID_QUANTITY"),
        ("Delivery Fee", 1, 0, "INVALID_PRICE"),
        ("Delivery Fee", 1, -5, "INVALID_PRICE"),
    ],
)
def test_add_custom_line_rejects_invalid_input(ledger, chair, name, quantity, price, code):
    """Validation: bad custom-line input raises its code and leaves the order alone."""
    order = ledger.add_catalog_line(ledger.create_empty_order(), chair)
    with pytest.raises(ValidationError) as e:
        ledger.add_custom_line(order, name, quantity, price)
    assert str(e.value) == code
    assert len(order.order_lines) == 1
    assert order.total == 12000


def test_custom_line_placeholder_image_is_deterministic(ledger):
    """Placeholder image URL is derived from the line name."""
    order = ledger.add_custom_line(ledger.create_empty_order(), "Delivery  Fee", 1, 2000, note="3rd floor")
    line = order.order_lines[0]
    assert line.image_url == "https://picsum.photos/seed/Delivery-Fee/400/400"
    assert line.image_url == placeholder_image_url("Delivery Fee")
    assert line.note == "3rd floor"
    assert line.product_id is None


def test_custom_line_keeps_supplied_image(ledger):
    """An explicit image URL wins over the placeholder."""
    order = ledger.add_custom_line(ledger.create_empty_order(), "Cushion", 2, 500, image_url="data:image/png;base64,xx")
    assert order.order_lines[0].image_url == "data:image/png;base64,xx"
    assert order.total == 1000


def test_update_line_applies_only_given_fields(ledger, chair):
    """Partial update: fields not supplied keep their values."""
    order = ledger.add_catalog_line(ledger.create_empty_order(), chair)
    line_id = order.order_lines[0].line_id
    order = ledger.update_line(order, line_id, quantity=3)
    assert order.order_lines[0].price == 12000
    assert order.order_lines[0].quantity == 3
    order = ledger.update_line(order, line_id, note="walnut finish")
    assert order.order_lines[0].quantity == 3
    assert order.order_lines[0].note == "walnut finish"
    assert order.total == 36000


def test_update_line_clamps_negatives_to_zero(ledger, chair):
    """Clamp: negative quantity and price become zero."""
    order = ledger.add_catalog_line(ledger.create_empty_order(), chair)
    line_id = order.order_lines[0].line_id
    order = ledger.update_line(order, line_id, quantity=-1, price=-50)
    assert order.order_lines[0].quantity == 0
    assert order.order_lines[0].price == 0
    assert order.total == 0
    assert order.balance_due == 0


def test_unknown_ids_are_no_ops(ledger, chair):
    """Unknown line or payment ids return the order unchanged."""
    order = ledger.add_catalog_line(ledger.create_empty_order(), chair)
    order = ledger.add_payment(order, 500)
    assert ledger.remove_line(order, "line-missing") == order
    assert ledger.remove_payment(order, "pay-missing") == order
    assert ledger.update_line(order, "line-missing", quantity=9) == order


def test_operations_do_not_mutate_input(ledger, chair):
    """Every operation returns a new order and leaves its input intact."""
    original = ledger.add_catalog_line(ledger.create_empty_order(), chair)
    snapshot = (original.order_lines, original.payments, original.total)
    ledger.add_catalog_line(original, chair)
    ledger.add_payment(original, 100)
    ledger.remove_line(original, original.order_lines[0].line_id)
    assert (original.order_lines, original.payments, original.total) == snapshot


def test_add_payment_rejects_non_positive(ledger, chair):
    """Validation: zero or negative payments raise INVALID_AMOUNT."""
    order = ledger.add_catalog_line(ledger.create_empty_order(), chair)
    for amount in (0, -100):
        with pytest.raises(ValidationError) as e:
            ledger.add_payment(order, amount)
        assert str(e.value) == "INVALID_AMOUNT"
    assert order.payments == ()


def test_overpayment_gives_negative_balance(ledger, chair):
    """Overpayment is accepted and shows as a negative balance."""
    order = ledger.add_catalog_line(ledger.create_empty_order(), chair)
    order = ledger.add_payment(order, 15000)
    assert order.paid_amount == 15000
    assert order.balance_due == -3000


def test_removing_settling_payment_restores_full_balance(ledger, chair):
    """Removing payments restores the balance they covered."""
    order = ledger.add_catalog_line(ledger.create_empty_order(), chair)
    order = ledger.add_catalog_line(order, chair)
    order = ledger.add_payment(order, 10000)
    order = ledger.add_payment(order, 14000)
    assert order.balance_due == 0
    settling = order.payments[-1].id
    order = ledger.remove_payment(order, settling)
    assert order.balance_due == 14000
    order = ledger.remove_payment(order, order.payments[0].id)
    assert order.balance_due == order.total == 24000
    assert order.paid_amount == 0


def test_update_customer_fields(ledger):
    """Customer fields are replaced one at a time."""
    order = ledger.update_customer(ledger.create_empty_order(), customer_name="Ayesha", customer_phone="0300 1234567")
    assert order.customer_name == "Ayesha"
    assert order.customer_phone == "0300 1234567"
    assert order.customer_address == ""
    order = ledger.update_customer(order, notes="deliver after 5pm")
    assert order.customer_name == "Ayesha"
    assert order.notes == "deliver after 5pm"


def test_duplicate_resets_payments_and_keeps_lines(ledger, chair):
    """Duplicate: new id and time, no payments, lines and flags kept."""
    order = ledger.add_catalog_line(ledger.create_empty_order(), chair)
    order = ledger.add_custom_line(order, "Delivery Fee", 1, 2000, is_late_add=True)
    order = ledger.update_customer(order, customer_name="Bilal", notes="gift")
    order = ledger.add_payment(order, 5000)

    clone = ledger.duplicate(order)
    assert clone.id != order.id
    assert clone.created_at > order.created_at
    assert clone.payments == ()
    assert clone.paid_amount == 0
    assert clone.balance_due == clone.total == 14000
    assert [ln.is_added_later for ln in clone.order_lines] == [False, True]
    assert clone.notes.startswith(f"Duplicated from order {order.id}")
    assert clone.notes.endswith("gift")
    assert clone.customer_name == "Bilal"


def test_invariant_holds_over_random_mutations(ledger, chair, bed):
    """Invariant: totals match lines and payments after any sequence of edits."""
    rng = random.Random(7)
    order = ledger.create_empty_order()
    for _ in range(300):
        op = rng.choice(["catalog", "custom", "update", "remove", "pay", "unpay"])
        if op == "catalog":
            order = ledger.add_catalog_line(order, rng.choice([chair, bed]), rng.random() < 0.5)
        elif op == "custom":
            order = ledger.add_custom_line(order, "Extra", rng.randint(1, 4), rng.randint(1, 5000))
        elif op == "update" and order.order_lines:
            line = rng.choice(order.order_lines)
            order = ledger.update_line(order, line.line_id, quantity=rng.randint(-2, 6), price=rng.randint(-10, 90000))
        elif op == "remove" and order.order_lines:
            order = ledger.remove_line(order, rng.choice(order.order_lines).line_id)
        elif op == "pay":
            order = ledger.add_payment(order, rng.randint(1, 20000))
        elif op == "unpay" and order.payments:
            order = ledger.remove_payment(order, rng.choice(order.payments).id)
        assert_financials(order)
        assert all(ln.price >= 0 and ln.quantity >= 0 for ln in order.order_lines)
        assert len({ln.line_id for ln in order.order_lines}) == len(order.order_lines)


@pytest.mark.parametrize(
    "quantity, price, code",
    [
        (1.5, 100, "INVALID_QUANTITY"),
        (1, 99.5, "INVALID_PRICE"),
        ("two", 100, "INVALID_QUANTITY"),
        (1, None, "INVALID_PRICE"),
    ],
)
def test_add_custom_line_rejects_non_whole_numbers(ledger, quantity, price, code):
    """Validation: fractional or non-numeric quantity and price are rejected with a code."""
    order = ledger.create_empty_order()
    with pytest.raises(ValidationError) as e:
        ledger.add_custom_line(order, "Delivery Fee", quantity, price)
    assert str(e.value) == code
    assert order.order_lines == ()


def test_add_custom_line_accepts_whole_number_floats(ledger):
    """Whole-valued floats and numeric strings are stored as ints."""
    order = ledger.add_custom_line(ledger.create_empty_order(), "  Cushion ", 2.0, "500")
    line = order.order_lines[0]
    assert (line.name, line.quantity, line.price) == ("Cushion", 2, 500)
    assert type(line.price) is int
    assert order.total == 1000


@pytest.mark.parametrize("amount", [99.5, "abc", None])
def test_add_payment_rejects_non_whole_amounts(ledger, chair, amount):
    """Validation: a fractional or non-numeric payment raises INVALID_AMOUNT and records nothing."""
    order = ledger.add_catalog_line(ledger.create_empty_order(), chair)
    with pytest.raises(ValidationError) as e:
        ledger.add_payment(order, amount)
    assert str(e.value) == "INVALID_AMOUNT"
    assert order.payments == ()
    assert order.paid_amount == 0


@pytest.mark.parametrize(
    "changes, code",
    [
        ({"price": 99.9}, "INVALID_PRICE"),
        ({"quantity": 2.5}, "INVALID_QUANTITY"),
        ({"quantity": "many"}, "INVALID_QUANTITY"),
    ],
)
def test_update_line_rejects_fractional_values(ledger, chair, changes, code):
    """Validation: update_line raises instead of truncating a fractional value."""
    order = ledger.add_catalog_line(ledger.create_empty_order(), chair)
    line_id = order.order_lines[0].line_id
    with pytest.raises(ValidationError) as e:
        ledger.update_line(order, line_id, **changes)
    assert str(e.value) == code
    assert order.order_lines[0].price == 12000
    assert order.order_lines[0].quantity == 1


def test_update_line_accepts_whole_number_float(ledger, chair):
    """A whole-valued float price is accepted and stored as an int."""
    order = ledger.add_catalog_line(ledger.create_empty_order(), chair)
    order = ledger.update_line(order, order.order_lines[0].line_id, price=11000.0)
    assert order.order_lines[0].price == 11000
    assert type(order.total) is int
