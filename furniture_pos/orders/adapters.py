"""In-process adapters for the orders domain ports.

These adapters implement ``StoragePort``, ``CatalogPort``,
``IdGenerator`` and ``Clock`` without any I/O beyond process memory. They
back unit tests and the ``memory`` storage backend, and the seeded catalog
is what the application uses when no catalog overrides are stored.
"""

import copy
import itertools
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Iterable, Sequence

from pydantic import TypeAdapter, ValidationError as SchemaError

from .catalog_seed import CATEGORIES, PRODUCTS
from .domain import CatalogPort, Category, Clock, IdGenerator, Product, StoragePort
from .schemas import CategoryRecord, ProductRecord

logger = logging.getLogger(__name__)

PRODUCTS_KEY = "products"
CATEGORIES_KEY = "categories"

_products_adapter = TypeAdapter(list[ProductRecord])
_categories_adapter = TypeAdapter(list[CategoryRecord])


class InMemoryStorage(StoragePort):
    """Dictionary-backed ``StoragePort``.

    Values are deep-copied on the way in and out so callers never share
    mutable documents with the store.
    """

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, Any] = copy.deepcopy(initial or {})

    def load(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def save(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)


class UuidIdGenerator(IdGenerator):
    """Random ids of the form ``<prefix>-<uuid4 hex>``."""

    def new_id(self, prefix: str) -> str:
        return f"{prefix}-{uuid.uuid4().hex}"


class SequentialIdGenerator(IdGenerator):
    """Deterministic ids of the form ``<prefix>-<n>`` from a shared counter."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    def new_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._counter)}"


class SystemClock(Clock):
    """Timezone-aware UTC wall clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class SeededCatalog(CatalogPort):
    """Read-only catalog built from seed data or stored overrides.

    When ``storage`` holds a ``products`` or ``categories`` document it
    replaces the corresponding seed list. Undecodable documents are logged
    and the seed data is used instead.
    """

    def __init__(
        self,
        storage: StoragePort | None = None,
        products: Iterable[Product] = PRODUCTS,
        categories: Iterable[Category] = CATEGORIES,
    ):
        self._products = list(products)
        self._categories = list(categories)
        if storage is not None:
            self._apply_overrides(storage)
        self._by_id = {p.id: p for p in self._products}

    def _apply_overrides(self, storage: StoragePort) -> None:
        raw_products = storage.load(PRODUCTS_KEY)
        if raw_products is not None:
            try:
                self._products = [r.to_domain() for r in _products_adapter.validate_python(raw_products)]
            except SchemaError:
                logger.warning("stored products are invalid, using seed catalog", exc_info=True)
        raw_categories = storage.load(CATEGORIES_KEY)
        if raw_categories is not None:
            try:
                self._categories = [r.to_domain() for r in _categories_adapter.validate_python(raw_categories)]
            except SchemaError:
                logger.warning("stored categories are invalid, using seed catalog", exc_info=True)

    def list_categories(self) -> Sequence[Category]:
        return tuple(self._categories)

    def list_products(self, category_id: str | None = None) -> Sequence[Product]:
        if category_id is None:
            return tuple(self._products)
        return tuple(p for p in self._products if p.category_id == category_id)

    def get_product(self, product_id: str) -> Product | None:
        return self._by_id.get(product_id)
