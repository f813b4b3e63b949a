#!/usr/bin/env python
from storefront import Catalog, CartStore, FilterCriteria, MemoryStorage, filter_products


def main():
    storage = MemoryStorage()
    store = CartStore(Catalog.sample(), storage, currency_symbol="¥")

    # -----------------------------
    # Browse
    # -----------------------------
    print("All products:")
    for p in filter_products(store.catalog, FilterCriteria()):
        print(f"  {p.id}  {p.title:<24} {p.price:>6}  {p.category}")

    print("\nFood matching 'choc':")
    for p in filter_products(store.catalog, FilterCriteria(category="food", search="choc")):
        print(f"  {p.id}  {p.title}")

    # -----------------------------
    # Cart
    # -----------------------------
    print("\nAdding earbuds twice and a book...")
    store.add_to_cart(1)
    store.add_to_cart(1)
    store.add_to_cart(8)
    for line in store.lines:
        print(f"  {line.title} {line.price} x {line.quantity}")
    print(f"Items: {store.total_item_count()}  Total: {store.formatted_total()}")

    print("\nPersisted value:")
    print(" ", storage.get("cart"))

    # -----------------------------
    # Reload from storage
    # -----------------------------
    reloaded = CartStore(Catalog.sample(), storage, currency_symbol="¥")
    print(f"\nReloaded cart has {reloaded.total_item_count()} items, {reloaded.formatted_total()}")

    print("\nRemoving earbuds...")
    reloaded.remove_from_cart(1)
    print(f"Items: {reloaded.total_item_count()}  Total: {reloaded.formatted_total()}")
    print(reloaded.checkout().message)


if __name__ == "__main__":
    main()
