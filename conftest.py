# Shared fixtures: deterministic ids and timestamps for the order core.
from datetime import datetime, timedelta, timezone

import pytest

from furniture_pos.orders.adapters import InMemoryStorage, SeededCatalog, SequentialIdGenerator
from furniture_pos.orders.domain import Product
from furniture_pos.orders.ledger import OrderLedger
from furniture_pos.orders.store import OrderStore


class TickingClock:
    """Clock that advances one minute on every call."""

    def __init__(self, start=datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)):
        self.current = start

    def now(self):
        self.current += timedelta(minutes=1)
        return self.current


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def ledger(clock):
    return OrderLedger(ids=SequentialIdGenerator(), clock=clock)


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def store(ledger, storage):
    return OrderStore(ledger=ledger, storage=storage, catalog=SeededCatalog())


@pytest.fixture
def chair():
    return Product(id="p1", name="Accent Chair", base_price=12000, image_url="https://img/chair.jpg")


@pytest.fixture
def bed():
    return Product(id="p2", name="Classic King Bed", base_price=85000, image_url="https://img/bed.jpg")
