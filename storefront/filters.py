# storefront/filters.py
from typing import Iterable, List

from .models import ALL_CATEGORIES, FilterCriteria, Product


def _fold(text: str) -> str:
    return text.casefold()


def matches_category(product: Product, category: str) -> bool:
    return category == ALL_CATEGORIES or product.category == category


def matches_search(product: Product, search: str) -> bool:
    if not search:
        return True
    return _fold(search) in _fold(product.title)


def filter_products(catalog: Iterable[Product], criteria: FilterCriteria) -> List[Product]:
    """Return the products matching both the category and the search text.

    Catalog order is preserved. An unknown category simply matches nothing.
    """
    return [
        p for p in catalog
        if matches_category(p, criteria.category) and matches_search(p, criteria.search)
    ]
