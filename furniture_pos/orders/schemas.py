"""Pydantic schemas for orders.

This module exposes the records used to move orders and catalog entries
between the frozen domain dataclasses and the JSON documents held by a
``StoragePort``. Records validate what comes back from storage so that a
corrupted document is detected on load instead of surfacing later as a
broken order. Input schemas validate the values callers pass to the
ledger; their failures are reported as domain ``ValidationError`` codes.
"""

from datetime import datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as SchemaError

from .domain import Category, Order, OrderLine, Payment, Product, ValidationError

M = TypeVar("M", bound=BaseModel)


class CategoryRecord(BaseModel):
    """Stored form of a ``Category``."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    image_url: str = ""

    def to_domain(self) -> Category:
        return Category(id=self.id, name=self.name, image_url=self.image_url)


class ProductRecord(BaseModel):
    """Stored form of a ``Product``.

    Attributes:
        base_price: Non-negative price in whole currency units.
    """

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    base_price: int = Field(ge=0)
    image_url: str = ""
    sku: str = ""
    category_id: str = ""
    description: str = ""

    def to_domain(self) -> Product:
        return Product(**self.model_dump())


class OrderLineRecord(BaseModel):
    """Stored form of an ``OrderLine``."""

    model_config = ConfigDict(frozen=True)

    line_id: str = Field(min_length=1)
    product_id: str | None = None
    name: str
    price: int = Field(ge=0)
    quantity: int = Field(ge=0)
    image_url: str = ""
    added_at: datetime
    is_added_later: bool = False
    note: str | None = None

    @classmethod
    def from_domain(cls, line: OrderLine) -> "OrderLineRecord":
        return cls(
            line_id=line.line_id,
            product_id=line.product_id,
            name=line.name,
            price=line.price,
            quantity=line.quantity,
            image_url=line.image_url,
            added_at=line.added_at,
            is_added_later=line.is_added_later,
            note=line.note,
        )

    def to_domain(self) -> OrderLine:
        return OrderLine(**self.model_dump())


class PaymentRecord(BaseModel):
    """Stored form of a ``Payment``. Amounts are strictly positive."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    amount: int = Field(gt=0)
    date: datetime

    @classmethod
    def from_domain(cls, payment: Payment) -> "PaymentRecord":
        return cls(id=payment.id, amount=payment.amount, date=payment.date)

    def to_domain(self) -> Payment:
        return Payment(id=self.id, amount=self.amount, date=self.date)


class OrderRecord(BaseModel):
    """Stored form of an ``Order``.

    Derived financials are written to storage for readability but are
    ignored on load: ``to_domain`` leaves them at zero and callers run the
    ledger's ``recalculate`` on the result.
    """

    id: str = Field(min_length=1)
    created_at: datetime
    customer_name: str = ""
    customer_phone: str = ""
    customer_address: str = ""
    notes: str = ""
    order_lines: list[OrderLineRecord] = Field(default_factory=list)
    payments: list[PaymentRecord] = Field(default_factory=list)
    total: int = 0
    paid_amount: int = 0
    balance_due: int = 0

    @classmethod
    def from_domain(cls, order: Order) -> "OrderRecord":
        return cls(
            id=order.id,
            created_at=order.created_at,
            customer_name=order.customer_name,
            customer_phone=order.customer_phone,
            customer_address=order.customer_address,
            notes=order.notes,
            order_lines=[OrderLineRecord.from_domain(ln) for ln in order.order_lines],
            payments=[PaymentRecord.from_domain(p) for p in order.payments],
            total=order.total,
            paid_amount=order.paid_amount,
            balance_due=order.balance_due,
        )

    def to_domain(self) -> Order:
        return Order(
            id=self.id,
            created_at=self.created_at,
            customer_name=self.customer_name,
            customer_phone=self.customer_phone,
            customer_address=self.customer_address,
            notes=self.notes,
            order_lines=tuple(r.to_domain() for r in self.order_lines),
            payments=tuple(r.to_domain() for r in self.payments),
        )


class EditorStateRecord(BaseModel):
    """Stored form of the current-order slot."""

    order: OrderRecord
    editing: bool = False


# ---- Input ----
class CustomLineIn(BaseModel):
    """Input schema for a free-form order line.

    Attributes:
        name: Line name, stripped; must not be blank.
        quantity: Positive whole number of units.
        price: Positive unit price in whole currency units.
        note: Optional free text; blank becomes None.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    quantity: int = Field(gt=0)
    price: int = Field(gt=0)
    note: str | None = None


class LinePatchIn(BaseModel):
    """Input schema for a line update. Negatives are allowed and clamped later."""

    quantity: int | None = None
    price: int | None = None


class PaymentIn(BaseModel):
    """Input schema for a payment; ``amount`` is a positive whole number."""

    amount: int = Field(gt=0)


CUSTOM_LINE_CODES = {"name": "EMPTY_NAME", "quantity": "INVALID_QUANTITY", "price": "INVALID_PRICE"}
LINE_PATCH_CODES = {"quantity": "INVALID_QUANTITY", "price": "INVALID_PRICE"}
PAYMENT_CODES = {"amount": "INVALID_AMOUNT"}


def validate_input(model: type[M], codes: dict[str, str], **data: Any) -> M:
    """Validate ``data`` against ``model``.

    Args:
        model: Input schema class.
        codes: Maps a field name to the error code raised when it fails.
        **data: Raw values supplied by the caller.

    Returns:
        The validated model instance.

    Raises:
        ValidationError: With the code of the first failing field, or
            'INVALID_INPUT' when the field has no code.
    """
    try:
        return model.model_validate(data)
    except SchemaError as exc:
        loc = exc.errors()[0]["loc"]
        field = loc[0] if loc else ""
        raise ValidationError(codes.get(field, "INVALID_INPUT")) from exc
