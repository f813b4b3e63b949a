from .cart import CartStore, deserialize_cart, format_price, serialize_cart, total_item_count, total_price
from .catalog import Catalog, SAMPLE_PRODUCTS
from .filters import filter_products
from .models import CartLine, FilterCriteria, Product
from .storage import FileStorage, MemoryStorage

__all__ = [
    "CartLine",
    "CartStore",
    "Catalog",
    "FileStorage",
    "FilterCriteria",
    "MemoryStorage",
    "Product",
    "SAMPLE_PRODUCTS",
    "deserialize_cart",
    "filter_products",
    "format_price",
    "serialize_cart",
    "total_item_count",
    "total_price",
]
