# storefront/cli.py
import sys
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table
from rich.text import Text

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from .cart import CartStore, format_price
from .config import get_settings
from .filters import filter_products
from .log import configure_logging
from .main import build_store
from .models import ALL_CATEGORIES, CartLine, FilterCriteria, Product

console = Console()

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def render_categories(categories: List[str], active: str) -> Text:
    text = Text()
    for i, name in enumerate(categories):
        if i:
            text.append("  ")
        if name == active:
            text.append(f"[{name}]", style="bold reverse cyan")
        else:
            text.append(name, style="cyan")
    return text


def render_products(products: List[Product], currency: str = "") -> Table:
    table = Table(
        title="📦 Products",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=4)
    table.add_column("Title", style="bold", width=24)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=12)
    table.add_column("Image", style="dim", width=22)

    for p in products:
        table.add_row(str(p.id), p.title, format_price(p.price, currency), p.category, p.img)
    return table


def render_cart(lines: List[CartLine], total: str, currency: str = "") -> Panel:
    title = Text()
    title.append("🛒 Cart", style="bold")
    title.append(f" - Total: {total}", style="bold green")

    if not lines:
        return Panel(Text("Your cart is empty", style="dim", justify="center"), title=title, style="blue")

    table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("ID", style="dim", width=4)
    table.add_column("Product", style="bold", width=24)
    table.add_column("Price", justify="right", width=18)
    table.add_column("Subtotal", justify="right", width=12)

    for line in lines:
        table.add_row(
            str(line.id),
            line.title,
            f"{format_price(line.price, currency)} × {line.quantity}",
            format_price(line.line_total, currency),
        )
    return Panel(table, title=title, border_style="blue")


def show_status(message: str, is_success: bool = True) -> Panel:
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def create_header(store: CartStore) -> Panel:
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=20)
    header.add_row(
        "🛍️ Storefront",
        "[bold blue]Catalog & Cart[/bold blue]",
        f"🛒 [bold]{store.total_item_count()}[/bold]",
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = "") -> str:
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_product_id(ids: List[int], message: str) -> Optional[int]:
    completer = WordCompleter([str(i) for i in ids])
    raw = prompt_with_autocomplete(message, completer=completer).strip()
    try:
        return int(raw)
    except ValueError:
        console.print(show_status(f"'{raw}' is not a product id", False))
        return None


# ---------------------------
# Widget
# ---------------------------
class StorefrontCLI:
    """Terminal rendition of the storefront widget.

    Holds the store and the current filter; every action goes through the
    store's entry points and the view is redrawn from what they return.
    """

    def __init__(self, store: CartStore, out: Console = console):
        self.store = store
        self.console = out
        self.criteria = FilterCriteria()
        self.status_message = "Ready"
        self.store.subscribe(self._on_cart_change)

    def _on_cart_change(self, store: CartStore) -> None:
        self.status_message = f"Cart updated: {store.total_item_count()} item(s), {store.formatted_total()}"

    @property
    def categories(self) -> List[str]:
        return [ALL_CATEGORIES] + self.store.catalog.categories()

    def visible_products(self) -> List[Product]:
        return filter_products(self.store.catalog, self.criteria)

    def show_products(self) -> None:
        self.console.print(render_categories(self.categories, self.criteria.category))
        if self.criteria.search:
            self.console.print(f"[dim]search:[/dim] {self.criteria.search}")
        products = self.visible_products()
        if not products:
            self.console.print("[italic yellow]No products found[/italic yellow]")
            return
        self.console.print(render_products(products, self.store.currency_symbol))

    def show_cart(self) -> None:
        self.console.print(render_cart(
            list(self.store.lines), self.store.formatted_total(), self.store.currency_symbol
        ))

    def set_category(self, category: str) -> None:
        self.criteria = FilterCriteria(category=category, search=self.criteria.search)
        self.show_products()

    def set_search(self, search: str) -> None:
        self.criteria = FilterCriteria(category=self.criteria.category, search=search)
        self.show_products()

    def add(self, product_id: int) -> bool:
        line = self.store.add_to_cart(product_id)
        if line is None:
            self.status_message = f"Error: product {product_id} not found"
            return False
        return True

    def remove(self, product_id: int) -> None:
        self.store.remove_from_cart(product_id)
        self.show_cart()

    def checkout(self) -> None:
        notice = self.store.checkout()
        self.console.print(show_status(notice.message, notice.ok))

    # ---------------------------
    # Main menu
    # ---------------------------
    def menu(self) -> None:
        self.console.clear()
        self.console.print(create_header(self.store))
        self.show_products()

        while True:
            if self.status_message:
                self.console.print(show_status(self.status_message, "Error" not in self.status_message))

            menu_table = Table.grid(padding=(0, 2))
            menu_table.add_column("Key", style="bold cyan", width=4)
            menu_table.add_column("Option", width=30)
            menu_table.add_column("Key", style="bold cyan", width=4)
            menu_table.add_column("Option", width=30)

            options = [
                ("1", "📦 List products", "4", "🛒 Open cart"),
                ("2", "🏷️ Choose category", "5", "➖ Remove from cart"),
                ("3", "🔍 Search", "6", "✅ Checkout"),
                ("a", "➕ Add to cart", "q", "👋 Quit"),
            ]
            for row in options:
                menu_table.add_row(*row)

            self.console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

            choice = prompt_with_autocomplete(
                "\nChoose an option",
                completer=WordCompleter(["1", "2", "3", "4", "5", "6", "a", "q", "quit", "exit"])
            ).strip()

            if choice == "1":
                self.show_products()

            elif choice == "2":
                category = prompt_with_autocomplete(
                    "Category", completer=WordCompleter(self.categories), default=self.criteria.category
                ).strip()
                self.set_category(category)

            elif choice == "3":
                term = prompt_with_autocomplete("Search", default=self.criteria.search)
                self.set_search(term)

            elif choice.lower() == "a":
                pid = ask_product_id([p.id for p in self.visible_products()], "Product ID")
                if pid is not None and self.add(pid):
                    self.console.print(create_header(self.store))

            elif choice == "4":
                self.show_cart()

            elif choice == "5":
                self.show_cart()
                if self.store.is_empty:
                    continue
                pid = ask_product_id([line.id for line in self.store.lines], "Product ID to remove")
                if pid is not None:
                    self.remove(pid)

            elif choice == "6":
                self.checkout()

            elif choice.lower() in ("q", "quit", "exit"):
                if Confirm.ask("Are you sure you want to quit?"):
                    self.console.print(Panel.fit("[bold green]Thanks for shopping! 👋[/bold green]", title="Goodbye"))
                    return

            self.console.print()
            self.console.rule(style="dim")


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)
    try:
        StorefrontCLI(build_store(settings)).menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
