# storefront/cart.py
import threading
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Iterable, List, Optional, Tuple

import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from .catalog import Catalog
from .models import CartLine
from .storage import KeyValueStorage

logger = structlog.get_logger(__name__)

CART_KEY = "cart"
CENTS = Decimal("0.01")
EMPTY_CART_MESSAGE = "Your cart is empty!"

_LINES = TypeAdapter(List[CartLine])


# ---------------------------
# Serialization
# ---------------------------
def serialize_cart(lines: Iterable[CartLine]) -> str:
    return _LINES.dump_json(list(lines)).decode("utf-8")


def deserialize_cart(raw: Optional[str]) -> List[CartLine]:
    """Parse a persisted cart. Anything absent or malformed yields an empty cart."""
    if not raw:
        return []
    try:
        lines = _LINES.validate_json(raw)
    except ValidationError as e:
        logger.warning("cart_deserialize_failed", errors=e.error_count())
        return []
    ids = [line.id for line in lines]
    if len(ids) != len(set(ids)):
        logger.warning("cart_deserialize_failed", reason="duplicate product ids")
        return []
    return lines


# ---------------------------
# Aggregation
# ---------------------------
def total_item_count(lines: Iterable[CartLine]) -> int:
    return sum(line.quantity for line in lines)


def total_price(lines: Iterable[CartLine]) -> Decimal:
    total = sum((line.line_total for line in lines), Decimal(0))
    return total.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_price(amount, symbol: str = "") -> str:
    amount = Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)
    return f"{symbol}{amount}"


# ---------------------------
# Checkout placeholder
# ---------------------------
class CheckoutNotice(BaseModel):
    ok: bool
    message: str
    total: Decimal


# ---------------------------
# Cart store
# ---------------------------
CartListener = Callable[["CartStore"], None]


class CartStore:
    """Owns the cart lines and keeps the persisted copy in sync.

    The cart is hydrated from ``storage`` on construction and written back in
    full after every add or remove. Callers get copies of the lines and must
    go through ``add_to_cart``/``remove_from_cart`` to change anything.
    """

    def __init__(
        self,
        catalog: Catalog,
        storage: KeyValueStorage,
        key: str = CART_KEY,
        currency_symbol: str = "",
    ):
        self.catalog = catalog
        self.key = key
        self.currency_symbol = currency_symbol
        self._storage = storage
        self._lines: List[CartLine] = []
        self._listeners: List[CartListener] = []
        self._lock = threading.RLock()
        self.reload()

    def reload(self) -> None:
        with self._lock:
            self._lines = deserialize_cart(self._storage.get(self.key))
        logger.debug("cart_hydrated", key=self.key, lines=len(self._lines))

    def _persist(self) -> None:
        self._storage.set(self.key, serialize_cart(self._lines))

    # listeners act as the refresh signal for whatever renders the cart
    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("cart_listener_failed", listener=repr(listener))

    # ---------------------------
    # Queries
    # ---------------------------
    @property
    def lines(self) -> Tuple[CartLine, ...]:
        with self._lock:
            return tuple(line.model_copy() for line in self._lines)

    def get_line(self, product_id: int) -> Optional[CartLine]:
        with self._lock:
            line = self._find(product_id)
            return line.model_copy() if line else None

    def _find(self, product_id: int) -> Optional[CartLine]:
        return next((line for line in self._lines if line.id == product_id), None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)

    @property
    def is_empty(self) -> bool:
        with self._lock:
            return not self._lines

    def total_item_count(self) -> int:
        with self._lock:
            return total_item_count(self._lines)

    def total_price(self) -> Decimal:
        with self._lock:
            return total_price(self._lines)

    def formatted_total(self) -> str:
        return format_price(self.total_price(), self.currency_symbol)

    # ---------------------------
    # Mutations
    # ---------------------------
    def add_to_cart(self, product_id: int) -> Optional[CartLine]:
        """Add one unit of a catalog product.

        Returns the updated line, or None when the id isn't in the catalog
        (the cart is left untouched in that case).
        """
        product = self.catalog.get(product_id)
        if product is None:
            logger.warning("cart_add_unknown_product", product_id=product_id)
            return None

        with self._lock:
            line = self._find(product_id)
            if line is not None:
                line.quantity += 1
            else:
                line = CartLine.from_product(product)
                self._lines.append(line)
            self._persist()
            result = line.model_copy()

        logger.info("cart_line_added", product_id=product_id, quantity=result.quantity)
        self._notify()
        return result

    def remove_from_cart(self, product_id: int) -> bool:
        """Drop the whole line for ``product_id``. Missing ids are not an error."""
        with self._lock:
            before = len(self._lines)
            self._lines = [line for line in self._lines if line.id != product_id]
            removed = len(self._lines) != before
            self._persist()

        logger.info("cart_line_removed", product_id=product_id, removed=removed)
        self._notify()
        return removed

    # ---------------------------
    # Checkout (not implemented beyond the notice)
    # ---------------------------
    def checkout(self) -> CheckoutNotice:
        total = self.total_price()
        if self.is_empty:
            return CheckoutNotice(ok=False, message=EMPTY_CART_MESSAGE, total=total)
        return CheckoutNotice(
            ok=True,
            message=f"Checkout is not available yet. Current total: {format_price(total, self.currency_symbol)}",
            total=total,
        )
