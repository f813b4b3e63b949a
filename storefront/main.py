# storefront/main.py
from typing import List, Optional

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .cart import CartStore, CheckoutNotice
from .catalog import Catalog
from .config import Settings, get_settings
from .errors import UnknownProductError
from .filters import filter_products
from .log import configure_logging
from .models import ALL_CATEGORIES, FilterCriteria, Product
from .schemas import AddToCartIn, CartView, RemoveFromCartIn, _make_cart_view
from .storage import FileStorage

logger = structlog.get_logger(__name__)


def build_store(settings: Settings, catalog: Optional[Catalog] = None) -> CartStore:
    return CartStore(
        catalog or Catalog.sample(),
        FileStorage(settings.storage_path),
        key=settings.cart_key,
        currency_symbol=settings.currency_symbol,
    )


def create_app(store: Optional[CartStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    if store is None:
        configure_logging(settings.log_level, settings.log_json)
        store = build_store(settings)

    app = FastAPI(title="storefront widget backend")
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def _store(request: Request) -> CartStore:
        return request.app.state.store

    @app.exception_handler(UnknownProductError)
    async def unknown_product_handler(request: Request, exc: UnknownProductError):
        return JSONResponse(status_code=404, content={"detail": "product not found"})

    # sync handlers: store calls block on storage I/O and must stay off the event loop

    # ---------------------------
    # Catalog endpoints
    # ---------------------------
    @app.get("/products", response_model=List[Product])
    def list_products(request: Request, category: str = ALL_CATEGORIES, search: str = ""):
        criteria = FilterCriteria(category=category, search=search)
        return filter_products(_store(request).catalog, criteria)

    @app.get("/products/{product_id}", response_model=Product)
    def get_product(product_id: int, request: Request):
        return _store(request).catalog.require(product_id)

    @app.get("/categories")
    def list_categories(request: Request):
        return [ALL_CATEGORIES] + _store(request).catalog.categories()

    # ---------------------------
    # Cart endpoints
    # ---------------------------
    @app.get("/cart", response_model=CartView)
    def view_cart(request: Request):
        return _make_cart_view(_store(request))

    @app.post("/cart/add", response_model=CartView)
    def cart_add(payload: AddToCartIn, request: Request):
        store = _store(request)
        store.catalog.require(payload.product_id)
        store.add_to_cart(payload.product_id)
        return _make_cart_view(store)

    @app.post("/cart/remove", response_model=CartView)
    def cart_remove(payload: RemoveFromCartIn, request: Request):
        # removing something that isn't in the cart just returns the cart
        store = _store(request)
        store.remove_from_cart(payload.product_id)
        return _make_cart_view(store)

    @app.post("/cart/checkout", response_model=CheckoutNotice)
    def cart_checkout(request: Request):
        notice = _store(request).checkout()
        if not notice.ok:
            raise HTTPException(status_code=400, detail=notice.message)
        return notice

    @app.get("/health")
    async def health():
        return {"status": "healthy", "service": "storefront"}

    logger.info("storefront_app_created", products=len(store.catalog), cart_lines=len(store))
    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings=settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
