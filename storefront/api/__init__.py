# storefront/api/__init__.py
from fastapi import FastAPI

from storefront.api.middleware import ApiVersionMiddleware, SessionCookieMiddleware
from storefront.api.routers import carts, health, products
from storefront.services.cart_service import CartAggregator
from storefront.services.catalog_service import CatalogStore
from storefront.utils.settings import API_VERSION


def create_app(catalog: CatalogStore, cart_repo) -> FastAPI:
    """
    The catalog is one shared store handed to both the product routes
    and the cart aggregator.
    """
    app = FastAPI(
        title="Storefront",
        version="1.0.0",
    )

    app.state.catalog = catalog
    app.state.carts = CartAggregator(catalog, cart_repo)

    app.add_middleware(ApiVersionMiddleware, version=API_VERSION)
    # outermost, so version errors also carry the session cookie
    app.add_middleware(SessionCookieMiddleware)

    # Include routers
    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(carts.router)

    return app
