"""Service provider helpers for wiring OrderStore with ports.

This module exposes small factory functions that return a configured
storage backend, catalog and ``OrderStore``. The ``sql`` backend uses the
SQLAlchemy repository; the ``memory`` backend uses in-process adapters
suitable for tests and demos.
"""

from ..config import Settings
from .adapters import InMemoryStorage, SeededCatalog, SystemClock, UuidIdGenerator
from .domain import StoragePort
from .ledger import OrderLedger
from .repository import SqlKeyValueStorage
from .store import OrderStore


def get_storage(settings: Settings) -> StoragePort:
    """Return the storage backend selected by ``settings.storage_backend``.

    Raises:
        ValueError: For an unknown backend name.
    """
    if settings.storage_backend == "sql":
        return SqlKeyValueStorage(settings.database_url)
    if settings.storage_backend == "memory":
        return InMemoryStorage()
    raise ValueError(f"Unknown storage backend: {settings.storage_backend!r}")


def get_order_store(settings: Settings | None = None, storage: StoragePort | None = None) -> OrderStore:
    """Return a configured OrderStore.

    Args:
        settings: Runtime settings; read from the environment when omitted.
        storage: Storage to use instead of the configured backend.

    Returns:
        OrderStore: A store wired with a UUID id generator, the system
        clock, the seeded catalog and the chosen storage.
    """
    settings = settings or Settings.from_env()
    storage = storage if storage is not None else get_storage(settings)
    ledger = OrderLedger(
        ids=UuidIdGenerator(),
        clock=SystemClock(),
        placeholder_template=settings.placeholder_image_url,
    )
    return OrderStore(
        ledger=ledger,
        storage=storage,
        catalog=SeededCatalog(storage),
        restore_draft=settings.restore_draft,
    )
