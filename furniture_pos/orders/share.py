"""Plain-text order summary and WhatsApp deep link.

The layout of the message is a presentation detail; the fields it carries
and their values (line quantities and subtotals, the derived total, paid
amount and balance, customer details and notes) come straight from the
recalculated order.
"""

import re

import httpx

from .domain import Order, ValidationError
from .ledger import recalculate

WHATSAPP_BASE_URL = "https://wa.me/"
SEPARATOR = "-" * 31
_NON_DIGIT_RE = re.compile(r"\D+")


def format_amount(amount: int, currency_label: str = "Rs") -> str:
    """Format a whole-unit amount with thousands separators, e.g. 'Rs 12,000'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency_label} {abs(amount):,}"


def build_share_message(order: Order, shop_name: str = "Rafiq Furniture House", currency_label: str = "Rs") -> str:
    """Render the order as a plain-text message.

    Args:
        order: Order to describe; financials are recomputed first.
        shop_name: Heading line.
        currency_label: Prefix for amounts.

    Returns:
        The message text.

    Raises:
        ValidationError: 'EMPTY_ORDER' if the order has no lines,
            'MISSING_CUSTOMER_PHONE' if no phone number is set.
    """
    if not order.order_lines:
        raise ValidationError("EMPTY_ORDER")
    if not order.customer_phone.strip():
        raise ValidationError("MISSING_CUSTOMER_PHONE")

    order = recalculate(order)

    def fmt(amount: int) -> str:
        return format_amount(amount, currency_label)

    parts = [f"{shop_name} - Customer Order", ""]
    for n, line in enumerate(order.order_lines, start=1):
        parts.append(f"{n}) {line.name} (x{line.quantity})")
        parts.append(f"   Price: {fmt(line.subtotal)}")
        if line.note:
            parts.append(f"   Note: {line.note}")
        parts.append("")
    parts.append(SEPARATOR)
    parts.append(f"Total: {fmt(order.total)}")
    parts.append(f"Paid: {fmt(order.paid_amount)}")
    parts.append(f"Balance: {fmt(order.balance_due)}")
    parts.append("")
    parts.append(f"Customer: {order.customer_name}")
    parts.append(f"Phone: {order.customer_phone}")
    if order.customer_address:
        parts.append(f"Address: {order.customer_address}")
    if order.notes:
        parts.append(f"Notes: {order.notes}")
    return "\n".join(parts) + "\n"


def build_share_link(
    order: Order,
    shop_name: str = "Rafiq Furniture House",
    currency_label: str = "Rs",
    to_customer: bool = False,
) -> str:
    """Return a ``wa.me`` link that opens a chat prefilled with the summary.

    When ``to_customer`` is set the link targets the customer's phone
    number (digits only); otherwise the user picks the recipient.
    """
    message = build_share_message(order, shop_name, currency_label)
    base = WHATSAPP_BASE_URL
    if to_customer:
        base += _NON_DIGIT_RE.sub("", order.customer_phone)
    return str(httpx.URL(base, params={"text": message}))
