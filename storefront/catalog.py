# storefront/catalog.py
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .errors import UnknownProductError
from .models import ALL_CATEGORIES, Product

# Sample catalog shown by the widget out of the box.
SAMPLE_PRODUCTS: Tuple[Product, ...] = (
    Product(id=1, title="Wireless Earbuds", price=299, category="electronics", img="wireless-earbuds.jpg"),
    Product(id=2, title="T-Shirt", price=89, category="clothing", img="t-shirt.png"),
    Product(id=3, title="Chocolate", price=25, category="food", img="chocolate.png"),
    Product(id=4, title="Programming Guide", price=68, category="books", img="programming-guide.jpg"),
    Product(id=5, title="Smart Watch", price=1299, category="electronics", img="smart-watch.png"),
    Product(id=6, title="Jeans", price=199, category="clothing", img="jeans.jpg"),
    Product(id=7, title="Nut Gift Box", price=158, category="food", img="nut-gift-box.webp"),
    Product(id=8, title="Short Story Collection", price=45, category="books", img="short-stories.jpg"),
)


class Catalog:
    """Immutable, ordered set of purchasable products, indexed by id."""

    def __init__(self, products: Iterable[Product]):
        self._products: Tuple[Product, ...] = tuple(products)
        self._by_id: Dict[int, Product] = {}
        for p in self._products:
            if p.id in self._by_id:
                raise ValueError(f"duplicate product id: {p.id}")
            if p.category == ALL_CATEGORIES:
                raise ValueError(f"'{ALL_CATEGORIES}' is reserved and can't be a product category")
            self._by_id[p.id] = p

    @classmethod
    def sample(cls) -> "Catalog":
        return cls(SAMPLE_PRODUCTS)

    @property
    def products(self) -> Tuple[Product, ...]:
        return self._products

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._by_id

    def get(self, product_id: int) -> Optional[Product]:
        return self._by_id.get(product_id)

    def require(self, product_id: int) -> Product:
        p = self._by_id.get(product_id)
        if p is None:
            raise UnknownProductError(product_id)
        return p

    def categories(self) -> List[str]:
        # first-seen order
        out: List[str] = []
        for p in self._products:
            if p.category not in out:
                out.append(p.category)
        return out
