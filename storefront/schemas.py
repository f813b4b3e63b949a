# storefront/schemas.py
from decimal import Decimal
from typing import List

from pydantic import BaseModel

from .cart import CartStore, format_price, total_item_count
from .models import CartLine


class AddToCartIn(BaseModel):
    product_id: int


class RemoveFromCartIn(BaseModel):
    product_id: int


class CartView(BaseModel):
    items: List[CartLine]
    total_items: int
    total_price: Decimal
    total_price_formatted: str


def _make_cart_view(store: CartStore) -> CartView:
    lines = store.lines
    total = store.total_price()
    return CartView(
        items=list(lines),
        total_items=total_item_count(lines),
        total_price=total,
        total_price_formatted=format_price(total, store.currency_symbol),
    )
