"""Order ledger engine.

Pure transformations over a single ``Order``: line-item and payment
mutations plus recomputation of the derived financials. The engine never
mutates its input and never keeps a reference to an order between calls;
every operation returns a new ``Order`` that has been routed through
``recalculate``. Ids and timestamps come from the injected ports.
"""

import logging
import re
from dataclasses import replace
from typing import Any

from .domain import (
    UNSET,
    Clock,
    IdGenerator,
    Order,
    OrderLine,
    Payment,
    Product,
)
from .schemas import (
    CUSTOM_LINE_CODES,
    LINE_PATCH_CODES,
    PAYMENT_CODES,
    CustomLineIn,
    LinePatchIn,
    PaymentIn,
    validate_input,
)

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER_IMAGE_URL = "https://picsum.photos/seed/{seed}/400/400"
_WS_RE = re.compile(r"\s+")


def placeholder_image_url(name: str, template: str = DEFAULT_PLACEHOLDER_IMAGE_URL) -> str:
    """Derive a stable placeholder image URL from a line name."""
    return template.format(seed=_WS_RE.sub("-", name.strip()))


def recalculate(order: Order) -> Order:
    """Return ``order`` with total, paid amount and balance recomputed.

    This is the only place the derived financial fields are written.
    """
    total = sum(ln.price * ln.quantity for ln in order.order_lines)
    paid = sum(p.amount for p in order.payments)
    return replace(order, total=total, paid_amount=paid, balance_due=total - paid)


class OrderLedger:
    """Ledger engine enforcing the order financial invariants.

    The engine holds no order state; it only carries the ports used to
    mint identifiers and timestamps for new orders, lines and payments.
    """

    recalculate = staticmethod(recalculate)

    def __init__(
        self,
        ids: IdGenerator,
        clock: Clock,
        placeholder_template: str = DEFAULT_PLACEHOLDER_IMAGE_URL,
    ):
        """Initialize the ledger with required dependencies.

        Args:
            ids: IdGenerator used for orders, lines and payments.
            clock: Clock used for creation timestamps.
            placeholder_template: URL template for custom-line images.
        """
        self.ids = ids
        self.clock = clock
        self.placeholder_template = placeholder_template

    def create_empty_order(self) -> Order:
        """Return a new order with fresh id, current timestamp and zero totals."""
        return Order(id=self.ids.new_id("order"), created_at=self.clock.now())

    # ---- Lines ----
    def add_catalog_line(self, order: Order, product: Product, is_late_add: bool = False) -> Order:
        """Add one unit of a catalog product.

        When a line with the same ``product_id`` already exists its quantity
        is incremented by one and nothing else changes. Custom lines carry no
        product id and are never merged into.

        Args:
            order: Order to extend.
            product: Catalog product whose name, price and image are
                snapshotted into a new line.
            is_late_add: Flag new lines as added after the order was saved.

        Returns:
            A recalculated copy of the order.
        """
        for ln in order.order_lines:
            if ln.product_id is not None and ln.product_id == product.id:
                merged = replace(ln, quantity=ln.quantity + 1)
                return recalculate(_swap_line(order, merged))

        line = OrderLine(
            line_id=self.ids.new_id("line"),
            product_id=product.id,
            name=product.name,
            price=product.base_price,
            quantity=1,
            image_url=product.image_url,
            added_at=self.clock.now(),
            is_added_later=is_late_add,
        )
        return recalculate(replace(order, order_lines=order.order_lines + (line,)))

    def add_custom_line(
        self,
        order: Order,
        name: str,
        quantity: int,
        price: int,
        note: str | None = None,
        is_late_add: bool = False,
        image_url: str | None = None,
    ) -> Order:
        """Append a free-form line. Custom lines are never merged.

        Raises:
            ValidationError: 'EMPTY_NAME' if the name is blank,
                'INVALID_QUANTITY' if ``quantity <= 0``,
                'INVALID_PRICE' if ``price <= 0``.
                Non-integer quantity or price is rejected the same way.
        """
        data = validate_input(CustomLineIn, CUSTOM_LINE_CODES, name=name, quantity=quantity, price=price, note=note)

        line = OrderLine(
            line_id=self.ids.new_id("line"),
            product_id=None,
            name=data.name,
            price=data.price,
            quantity=data.quantity,
            image_url=image_url or placeholder_image_url(data.name, self.placeholder_template),
            added_at=self.clock.now(),
            is_added_later=is_late_add,
            note=data.note or None,
        )
        return recalculate(replace(order, order_lines=order.order_lines + (line,)))

    def update_line(
        self,
        order: Order,
        line_id: str,
        quantity: Any = UNSET,
        price: Any = UNSET,
        note: Any = UNSET,
    ) -> Order:
        """Patch quantity, price and/or note of one line.

        Only the supplied fields change. Negative quantity or price is
        clamped to zero. An unknown ``line_id`` returns the order unchanged.

        Raises:
            ValidationError: 'INVALID_QUANTITY' or 'INVALID_PRICE' when the
                supplied value is not a whole number.
        """
        supplied = {k: v for k, v in (("quantity", quantity), ("price", price)) if v is not UNSET}
        patch = validate_input(LinePatchIn, LINE_PATCH_CODES, **supplied)
        line = order.find_line(line_id)
        if line is None:
            return order
        changes: dict[str, Any] = {}
        if patch.quantity is not None:
            changes["quantity"] = max(0, patch.quantity)
        if patch.price is not None:
            changes["price"] = max(0, patch.price)
        if note is not UNSET:
            changes["note"] = note or None
        return recalculate(_swap_line(order, replace(line, **changes)))

    def remove_line(self, order: Order, line_id: str) -> Order:
        lines = tuple(ln for ln in order.order_lines if ln.line_id != line_id)
        if len(lines) == len(order.order_lines):
            return order
        return recalculate(replace(order, order_lines=lines))

    # ---- Payments ----
    def add_payment(self, order: Order, amount: int) -> Order:
        """Record a payment. Overpayment is allowed.

        Raises:
            ValidationError: 'INVALID_AMOUNT' if ``amount`` is not a positive
                whole number.
        """
        data = validate_input(PaymentIn, PAYMENT_CODES, amount=amount)
        payment = Payment(id=self.ids.new_id("pay"), amount=data.amount, date=self.clock.now())
        return recalculate(replace(order, payments=order.payments + (payment,)))

    def remove_payment(self, order: Order, payment_id: str) -> Order:
        payments = tuple(p for p in order.payments if p.id != payment_id)
        if len(payments) == len(order.payments):
            return order
        return recalculate(replace(order, payments=payments))

    # ---- Customer / lifecycle ----
    def update_customer(
        self,
        order: Order,
        customer_name: Any = UNSET,
        customer_phone: Any = UNSET,
        customer_address: Any = UNSET,
        notes: Any = UNSET,
    ) -> Order:
        """Replace any of the plain-string customer fields."""
        supplied = {
            "customer_name": customer_name,
            "customer_phone": customer_phone,
            "customer_address": customer_address,
            "notes": notes,
        }
        changes = {k: str(v) for k, v in supplied.items() if v is not UNSET}
        return recalculate(replace(order, **changes))

    def duplicate(self, order: Order) -> Order:
        """Clone a saved order into a new, unpaid order.

        The clone gets a new id and creation time, no payments, and notes
        prefixed with the source order id. Lines, including their late-add
        flags, are kept as they are.
        """
        provenance = f"Duplicated from order {order.id}"
        notes = f"{provenance}\n{order.notes}" if order.notes else provenance
        clone = replace(
            order,
            id=self.ids.new_id("order"),
            created_at=self.clock.now(),
            payments=(),
            notes=notes,
        )
        logger.debug("order duplicated", extra={"source_id": order.id, "order_id": clone.id})
        return recalculate(clone)


def _swap_line(order: Order, line: OrderLine) -> Order:
    lines = tuple(line if ln.line_id == line.line_id else ln for ln in order.order_lines)
    return replace(order, order_lines=lines)
