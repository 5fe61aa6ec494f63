"""Domain models, errors and ports for orders.

This module contains the frozen dataclasses that describe products,
order lines, payments and orders, the error kinds raised by the order
core, and protocol definitions (ports) for the collaborators the core
depends on: the catalog, durable storage, id generation and the clock.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Protocol, Sequence


# ---- Errors ----
class OrderError(Exception):
    """Base class for errors raised by the order core.

    The message is a short upper-case code (e.g. ``EMPTY_ORDER``) so that
    callers can branch on ``str(exc)``.
    """


class ValidationError(OrderError, ValueError):
    """Caller input violated a precondition. State is left unchanged."""


class PersistenceError(OrderError):
    """Writing to durable storage failed. In-memory state is kept."""


# ---- Enums ----
class EditorMode(str, Enum):
    """States of the current-order slot."""

    DRAFTING = "DRAFTING"
    EDITING_SAVED = "EDITING_SAVED"


# ---- Catalog entities ----
@dataclass(frozen=True)
class Category:
    """A catalog category (e.g. 'Beds')."""

    id: str
    name: str
    image_url: str = ""


@dataclass(frozen=True)
class Product:
    """A catalog product. Owned by the catalog, read-only to the order core.

    Attributes:
        id: Unique product identifier.
        name: Display name, snapshotted into order lines.
        base_price: Non-negative unit price in whole currency units.
        image_url: Image snapshotted into order lines.
        sku: Stock-keeping unit code.
        category_id: Identifier of the owning category.
        description: Free text.
    """

    id: str
    name: str
    base_price: int
    image_url: str = ""
    sku: str = ""
    category_id: str = ""
    description: str = ""


# ---- Order entities ----
@dataclass(frozen=True)
class OrderLine:
    """A single priced, quantified entry within an order.

    Attributes:
        line_id: Identifier unique within the parent order.
        product_id: Catalog product id, or None for custom lines.
        name: Name snapshot.
        price: Unit price (never negative).
        quantity: Units (never negative).
        image_url: Image snapshot.
        added_at: Creation timestamp.
        is_added_later: True when the line was created while its order was
            being edited after save.
        note: Optional free text.
    """

    line_id: str
    product_id: str | None
    name: str
    price: int
    quantity: int
    image_url: str
    added_at: datetime
    is_added_later: bool = False
    note: str | None = None

    @property
    def subtotal(self) -> int:
        return self.price * self.quantity


@dataclass(frozen=True)
class Payment:
    """A partial payment recorded against an order. Never edited in place."""

    id: str
    amount: int
    date: datetime


@dataclass(frozen=True)
class Order:
    """Container for order data.

    ``total``, ``paid_amount`` and ``balance_due`` are derived fields; they
    are only ever written by ``OrderLedger.recalculate``.

    Attributes:
        id: Stable identifier, re-assigned only on duplication.
        customer_name: Plain string.
        customer_phone: Plain string.
        customer_address: Plain string.
        notes: Plain string.
        order_lines: Lines in display order.
        payments: Payments in the order they were recorded.
        total: Sum of line subtotals.
        paid_amount: Sum of payment amounts.
        balance_due: ``total - paid_amount``; negative when overpaid.
        created_at: Creation timestamp.
    """

    id: str
    created_at: datetime
    customer_name: str = ""
    customer_phone: str = ""
    customer_address: str = ""
    notes: str = ""
    order_lines: tuple[OrderLine, ...] = ()
    payments: tuple[Payment, ...] = ()
    total: int = 0
    paid_amount: int = 0
    balance_due: int = 0

    def find_line(self, line_id: str) -> OrderLine | None:
        return next((ln for ln in self.order_lines if ln.line_id == line_id), None)


@dataclass(frozen=True)
class LoadRequest:
    """Tagged payload for loading an order into the current slot."""

    order: Order
    editing: bool


@dataclass(frozen=True)
class EditorState:
    """The current order together with its editing flag."""

    order: Order
    editing: bool = False

    @property
    def mode(self) -> EditorMode:
        return EditorMode.EDITING_SAVED if self.editing else EditorMode.DRAFTING


# ---- Ports (DIP) ----
class IdGenerator(Protocol):
    """Port producing unique identifiers."""

    def new_id(self, prefix: str) -> str:
        """Return a fresh identifier starting with ``prefix``."""
        raise NotImplementedError()


class Clock(Protocol):
    """Port returning the current time."""

    def now(self) -> datetime:
        raise NotImplementedError()


class CatalogPort(Protocol):
    """Port describing read-only catalog access used by the order core."""

    def list_categories(self) -> Sequence[Category]:
        raise NotImplementedError()

    def list_products(self, category_id: str | None = None) -> Sequence[Product]:
        """Return products, optionally filtered by ``category_id``."""
        raise NotImplementedError()

    def get_product(self, product_id: str) -> Product | None:
        raise NotImplementedError()


class StoragePort(Protocol):
    """Port describing durable key-value storage.

    Values are JSON-compatible documents and are always replaced whole.
    """

    def load(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key`` or ``default``."""
        raise NotImplementedError()

    def save(self, key: str, value: Any) -> None:
        """Replace the value stored under ``key``.

        Raises:
            Exception: Any backend error; callers wrap it.
        """
        raise NotImplementedError()


class _Unset:
    """Sentinel for 'argument not supplied' in partial updates."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()
