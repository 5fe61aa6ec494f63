from .domain import (
    Category,
    EditorMode,
    LoadRequest,
    Order,
    OrderError,
    OrderLine,
    Payment,
    PersistenceError,
    Product,
    ValidationError,
)
from .ledger import OrderLedger, recalculate
from .providers import get_order_store
from .store import OrderStore

__all__ = [
    "Category",
    "EditorMode",
    "LoadRequest",
    "Order",
    "OrderError",
    "OrderLine",
    "OrderLedger",
    "OrderStore",
    "Payment",
    "PersistenceError",
    "Product",
    "ValidationError",
    "get_order_store",
    "recalculate",
]
