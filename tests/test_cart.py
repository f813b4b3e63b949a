# tests/test_cart.py
import json
from decimal import Decimal

from storefront.cart import (
    EMPTY_CART_MESSAGE,
    CartStore,
    deserialize_cart,
    format_price,
    serialize_cart,
    total_item_count,
    total_price,
)
from storefront.catalog import Catalog
from storefront.models import CartLine, Product
from storefront.storage import MemoryStorage


def test_add_creates_line_with_copied_fields(store, catalog):
    before = store.total_item_count()
    line = store.add_to_cart(3)
    assert store.total_item_count() == before + 1
    assert line.quantity == 1
    product = catalog.get(3)
    assert (line.id, line.title, line.price, line.category, line.img) == (
        product.id, product.title, product.price, product.category, product.img
    )


def test_repeated_add_aggregates_quantity(store):
    store.add_to_cart(1)
    store.add_to_cart(1)
    assert len(store.lines) == 1
    assert store.get_line(1).quantity == 2


def test_totals_scenario(store):
    store.add_to_cart(1)
    store.add_to_cart(1)
    assert store.total_price() == Decimal("598.00")
    assert format_price(store.total_price()) == "598.00"

    store.remove_from_cart(1)
    assert store.total_item_count() == 0
    assert format_price(store.total_price()) == "0.00"


def test_every_mutation_persists(store, storage):
    store.add_to_cart(1)
    store.add_to_cart(4)
    saved = json.loads(storage.get("cart"))
    assert [item["id"] for item in saved] == [1, 4]
    assert set(saved[0]) == {"id", "title", "price", "category", "img", "quantity"}

    store.remove_from_cart(1)
    saved = json.loads(storage.get("cart"))
    assert [item["id"] for item in saved] == [4]


def test_remove_on_empty_cart_is_noop(store, storage):
    assert store.remove_from_cart(1) is False
    assert store.is_empty
    assert deserialize_cart(storage.get("cart")) == []


def test_unknown_product_is_rejected(store, storage):
    assert store.add_to_cart(999) is None
    assert store.is_empty
    assert storage.get("cart") is None


def test_cart_is_hydrated_from_storage(catalog, storage):
    first = CartStore(catalog, storage)
    first.add_to_cart(2)
    first.add_to_cart(2)
    first.add_to_cart(7)

    second = CartStore(catalog, storage)
    assert second.lines == first.lines
    assert second.total_item_count() == 3


def test_lines_copy_survives_catalog_change(storage):
    old = Catalog([Product(id=1, title="Mug", price=10, category="kitchen")])
    CartStore(old, storage).add_to_cart(1)

    new = Catalog([Product(id=1, title="Big Mug", price=20, category="kitchen")])
    store = CartStore(new, storage)
    line = store.add_to_cart(1)
    assert line.quantity == 2
    assert line.title == "Mug"
    assert store.total_price() == Decimal("20.00")


def test_lines_are_snapshots(store):
    store.add_to_cart(1)
    snapshot = store.lines
    snapshot[0].quantity = 50
    assert store.get_line(1).quantity == 1


def test_listeners_get_notified_and_can_unsubscribe(store):
    seen = []
    unsubscribe = store.subscribe(lambda s: seen.append(s.total_item_count()))
    store.add_to_cart(1)
    store.remove_from_cart(1)
    unsubscribe()
    store.add_to_cart(1)
    assert seen == [1, 0]


def test_failing_listener_does_not_break_mutation(store):
    def boom(_):
        raise RuntimeError("render failed")

    store.subscribe(boom)
    assert store.add_to_cart(1) is not None
    assert store.total_item_count() == 1


def test_serialization_round_trip(store):
    for pid in (1, 3, 3, 5, 8, 8, 8):
        store.add_to_cart(pid)
    store.remove_from_cart(5)
    lines = list(store.lines)
    assert deserialize_cart(serialize_cart(lines)) == lines


def test_malformed_persisted_state_gives_empty_cart(catalog):
    bad_values = [
        "not json",
        '{"id": 1}',
        "null",
        '[{"id": 1, "title": "x"}]',
        '[{"id": 1, "title": "x", "price": 1, "category": "c", "img": "", "quantity": 0}]',
        '[{"id": 1, "title": "x", "price": 1, "category": "c", "img": "", "quantity": 1},'
        ' {"id": 1, "title": "x", "price": 1, "category": "c", "img": "", "quantity": 2}]',
    ]
    for raw in bad_values:
        store = CartStore(catalog, MemoryStorage({"cart": raw}))
        assert store.is_empty, raw


def test_price_accumulation_is_exact():
    lines = [
        CartLine(id=i, title=f"item {i}", price=Decimal("0.10"), category="misc", quantity=1)
        for i in range(30)
    ]
    lines.append(CartLine(id=99, title="gum", price=Decimal("0.20"), category="misc", quantity=3))
    assert total_item_count(lines) == 33
    assert total_price(lines) == Decimal("3.60")
    assert total_price([]) == Decimal("0.00")


def test_checkout_notice(catalog, storage):
    store = CartStore(catalog, storage, currency_symbol="¥")
    notice = store.checkout()
    assert notice.ok is False
    assert notice.message == EMPTY_CART_MESSAGE

    store.add_to_cart(1)
    notice = store.checkout()
    assert notice.ok is True
    assert "¥299.00" in notice.message
    assert store.total_item_count() == 1


def test_format_price_with_symbol():
    assert format_price(Decimal("1299"), "¥") == "¥1299.00"
    assert format_price(Decimal("0.005")) == "0.01"


def test_prices_are_persisted_as_numbers(catalog, storage):
    store = CartStore(catalog, storage)
    store.add_to_cart(1)
    saved = json.loads(storage.get("cart"))
    assert saved[0]["price"] == 299
    assert isinstance(saved[0]["price"], int)

    raw = json.dumps([{"id": 9, "title": "Tea", "price": 12.5, "category": "food", "img": "", "quantity": 2}])
    lines = deserialize_cart(raw)
    assert lines[0].price == Decimal("12.5")
    assert json.loads(serialize_cart(lines))[0]["price"] == 12.5
    assert total_price(lines) == Decimal("25.00")
