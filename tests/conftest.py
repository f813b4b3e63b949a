import pytest

from storefront.cart import CartStore
from storefront.catalog import Catalog
from storefront.storage import MemoryStorage


@pytest.fixture
def catalog() -> Catalog:
    return Catalog.sample()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(catalog, storage) -> CartStore:
    return CartStore(catalog, storage)
