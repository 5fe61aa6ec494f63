"""Order store: the current order, the editing flag and saved orders.

The store is the only owner of session state. It delegates all per-order
math to ``OrderLedger`` and writes every changed collection through to a
``StoragePort`` in full. In-memory state is applied first and is
authoritative for the running session: a failed write raises
``PersistenceError`` but does not roll anything back.

State machine for the current slot::

    Drafting     --save()-------------> Drafting (new empty order)
    Drafting     --load_for_edit()----> EditingSaved
    EditingSaved --save()-------------> Drafting
    any          --load_for_duplicate-> Drafting
"""

import functools
import logging
import uuid
from dataclasses import replace
from typing import Any, Callable

from pydantic import ValidationError as SchemaError

from ..logging_filters import SESSION_ID_CTX
from .domain import (
    UNSET,
    CatalogPort,
    EditorMode,
    EditorState,
    LoadRequest,
    Order,
    PersistenceError,
    Product,
    StoragePort,
    ValidationError,
)
from .ledger import OrderLedger
from .schemas import EditorStateRecord, OrderRecord

logger = logging.getLogger(__name__)

SAVED_ORDERS_KEY = "saved-orders"
CURRENT_ORDER_KEY = "current-order"

Listener = Callable[["OrderStore"], None]


def _in_session(method):
    """Run a store operation with the store's session id in ``SESSION_ID_CTX``."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        token = SESSION_ID_CTX.set(self.session_id)
        try:
            return method(self, *args, **kwargs)
        finally:
            SESSION_ID_CTX.reset(token)

    return wrapper


class OrderStore:
    """Stateful owner of the current order and the saved-orders collection.

    UI layers hold a reference to the store, call its operations, and
    re-render from ``subscribe`` notifications.
    """

    def __init__(
        self,
        ledger: OrderLedger,
        storage: StoragePort,
        catalog: CatalogPort | None = None,
        restore_draft: bool = False,
    ):
        """Initialize the store and load saved orders from storage.

        Args:
            ledger: Engine used for every per-order computation.
            storage: Persistence provider for write-through.
            catalog: Catalog used by ``add_product_by_id``.
            restore_draft: Reload the persisted current-order slot instead
                of starting with an empty draft.
        """
        self.ledger = ledger
        self.storage = storage
        self.catalog = catalog
        self.session_id = uuid.uuid4().hex
        self._listeners: list[Listener] = []
        self._rejected: list[Any] = []
        token = SESSION_ID_CTX.set(self.session_id)
        try:
            self._saved: list[Order] = self._load_saved()
            self._state = EditorState(order=ledger.create_empty_order(), editing=False)
            if restore_draft:
                self._state = self._load_draft() or self._state
            logger.info(
                "order store ready",
                extra={"saved_orders": len(self._saved), "rejected_orders": len(self._rejected)},
            )
        finally:
            SESSION_ID_CTX.reset(token)

    # ---- Read access ----
    @property
    def current(self) -> Order:
        return self._state.order

    @property
    def editing(self) -> bool:
        return self._state.editing

    @property
    def state(self) -> EditorMode:
        return self._state.mode

    @property
    def saved_orders(self) -> tuple[Order, ...]:
        return tuple(self._saved)

    def get_saved(self, order_id: str) -> Order | None:
        return next((o for o in self._saved if o.id == order_id), None)

    # ---- Observers ----
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` to be called after every mutation.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ---- Load transitions ----
    @_in_session
    def load_for_new_order(self) -> None:
        self._load(LoadRequest(order=self.ledger.create_empty_order(), editing=False))

    @_in_session
    def load_for_edit(self, saved_order: Order) -> None:
        """Load a saved order into the current slot for editing.

        Lines added until the next ``save`` are flagged as added later.
        """
        self._load(LoadRequest(order=saved_order, editing=True))

    @_in_session
    def load_for_duplicate(self, saved_order: Order) -> None:
        self._load(LoadRequest(order=self.ledger.duplicate(saved_order), editing=False))

    def clear_current(self) -> None:
        """Discard the current order and start a new draft."""
        self.load_for_new_order()

    def _load(self, request: LoadRequest) -> None:
        # Orders are immutable, so the saved value is shared rather than copied.
        self._state = EditorState(order=self.ledger.recalculate(request.order), editing=request.editing)
        logger.info(
            "order loaded",
            extra={"order_id": request.order.id, "mode": self._state.mode.value},
        )
        self._commit(current=True)

    # ---- Current-order intents ----
    @_in_session
    def add_product(self, product: Product) -> None:
        self._update_current(self.ledger.add_catalog_line(self.current, product, self.editing))

    @_in_session
    def add_product_by_id(self, product_id: str) -> None:
        """Add a catalog product by id. Unknown ids are ignored."""
        product = self.catalog.get_product(product_id) if self.catalog else None
        if product is None:
            logger.warning("product not found", extra={"product_id": product_id})
            return
        self.add_product(product)

    @_in_session
    def add_custom_line(
        self,
        name: str,
        quantity: int,
        price: int,
        note: str | None = None,
        image_url: str | None = None,
    ) -> None:
        order = self.ledger.add_custom_line(
            self.current,
            name,
            quantity,
            price,
            note=note,
            is_late_add=self.editing,
            image_url=image_url,
        )
        self._update_current(order)

    @_in_session
    def update_line(self, line_id: str, quantity: Any = UNSET, price: Any = UNSET, note: Any = UNSET) -> None:
        self._update_current(
            self.ledger.update_line(self.current, line_id, quantity=quantity, price=price, note=note)
        )

    @_in_session
    def remove_line(self, line_id: str) -> None:
        self._update_current(self.ledger.remove_line(self.current, line_id))

    @_in_session
    def add_payment(self, amount: int) -> None:
        self._update_current(self.ledger.add_payment(self.current, amount))

    @_in_session
    def remove_payment(self, payment_id: str) -> None:
        self._update_current(self.ledger.remove_payment(self.current, payment_id))

    @_in_session
    def update_customer(
        self,
        customer_name: Any = UNSET,
        customer_phone: Any = UNSET,
        customer_address: Any = UNSET,
        notes: Any = UNSET,
    ) -> None:
        self._update_current(
            self.ledger.update_customer(
                self.current,
                customer_name=customer_name,
                customer_phone=customer_phone,
                customer_address=customer_address,
                notes=notes,
            )
        )

    def _update_current(self, order: Order) -> None:
        if order == self.current:
            return
        self._state = replace(self._state, order=order)
        self._commit(current=True)

    # ---- Saved collection ----
    @_in_session
    def save(self) -> Order:
        """Persist the current order into the saved collection.

        An order whose id is already saved replaces that entry and keeps its
        original ``created_at``; otherwise it is inserted at the front with
        ``created_at`` set to now. The collection is then sorted newest
        first and the current slot resets to a new empty draft.

        Returns:
            The order as stored in the collection.

        Raises:
            ValidationError: 'EMPTY_ORDER' when the order has no lines,
                'MISSING_CUSTOMER_NAME' when the customer name is blank.
            PersistenceError: When the write-through fails. The in-memory
                save has already been applied.
        """
        order = self.ledger.recalculate(self.current)
        if not order.order_lines:
            raise ValidationError("EMPTY_ORDER")
        if not order.customer_name.strip():
            raise ValidationError("MISSING_CUSTOMER_NAME")

        idx = self._index_of(order.id)
        if idx is None:
            order = replace(order, created_at=self.ledger.clock.now())
            self._saved.insert(0, order)
            action = "inserted"
        else:
            order = replace(order, created_at=self._saved[idx].created_at)
            self._saved[idx] = order
            action = "replaced"
        self._saved.sort(key=lambda o: o.created_at, reverse=True)
        self._state = EditorState(order=self.ledger.create_empty_order(), editing=False)
        logger.info(
            "order saved",
            extra={"order_id": order.id, "action": action, "total": order.total, "balance_due": order.balance_due},
        )
        self._commit(saved=True, current=True)
        return order

    @_in_session
    def delete_saved(self, order_id: str) -> None:
        """Remove a saved order permanently. Unknown ids are ignored."""
        idx = self._index_of(order_id)
        if idx is None:
            return
        del self._saved[idx]
        logger.info("order deleted", extra={"order_id": order_id})
        self._commit(saved=True)

    @_in_session
    def add_payment_to_saved(self, order_id: str, amount: int) -> Order | None:
        """Record a payment against a saved order without touching the current one.

        Returns:
            The updated saved order, or None when ``order_id`` is unknown.

        Raises:
            ValidationError: 'INVALID_AMOUNT' if ``amount <= 0``.
        """
        idx = self._index_of(order_id)
        if idx is None:
            return None
        updated = self.ledger.add_payment(self._saved[idx], amount)
        self._saved[idx] = updated
        logger.info(
            "payment recorded",
            extra={"order_id": order_id, "amount": amount, "balance_due": updated.balance_due},
        )
        self._commit(saved=True)
        return updated

    def _index_of(self, order_id: str) -> int | None:
        return next((i for i, o in enumerate(self._saved) if o.id == order_id), None)

    # ---- Persistence ----
    def _commit(self, saved: bool = False, current: bool = False) -> None:
        """Write the changed documents, notify listeners, then report failures.

        Each key is written independently; a failure on one does not skip
        the other. The first ``PersistenceError`` is raised after listeners
        have run.
        """
        writes: list[tuple[str, Callable[[], Any]]] = []
        if saved:
            writes.append((SAVED_ORDERS_KEY, self._saved_document))
        if current:
            writes.append((CURRENT_ORDER_KEY, self._current_document))
        failures: list[PersistenceError] = []
        for key, build in writes:
            try:
                self._write(key, build)
            except PersistenceError as exc:
                failures.append(exc)
        for listener in list(self._listeners):
            listener(self)
        if failures:
            raise failures[0]

    def _write(self, key: str, build: Callable[[], Any]) -> None:
        try:
            self.storage.save(key, build())
        except Exception as exc:
            logger.exception("storage write failed", extra={"key": key})
            raise PersistenceError("STORAGE_WRITE_FAILED") from exc

    def _saved_document(self) -> list[Any]:
        # Records that failed validation on load are carried along untouched.
        return [OrderRecord.from_domain(o).model_dump(mode="json") for o in self._saved] + self._rejected

    def _current_document(self) -> dict[str, Any]:
        record = EditorStateRecord(order=OrderRecord.from_domain(self.current), editing=self.editing)
        return record.model_dump(mode="json")

    def _load_saved(self) -> list[Order]:
        raw = self.storage.load(SAVED_ORDERS_KEY, [])
        if not isinstance(raw, list):
            raw = [raw]
        orders: list[Order] = []
        for item in raw:
            try:
                record = OrderRecord.model_validate(item)
            except SchemaError:
                logger.warning(
                    "stored order is invalid, keeping it aside",
                    extra={"order_id": item.get("id") if isinstance(item, dict) else None},
                    exc_info=True,
                )
                self._rejected.append(item)
                continue
            orders.append(self.ledger.recalculate(record.to_domain()))
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return orders

    def _load_draft(self) -> EditorState | None:
        raw = self.storage.load(CURRENT_ORDER_KEY)
        if raw is None:
            return None
        try:
            record = EditorStateRecord.model_validate(raw)
        except SchemaError:
            logger.warning("stored draft is invalid, starting empty", exc_info=True)
            return None
        return EditorState(order=self.ledger.recalculate(record.order.to_domain()), editing=record.editing)
