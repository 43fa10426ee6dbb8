# storefront/api/deps.py
from fastapi import Request

from storefront.services.catalog_service import CatalogStore
from storefront.services.cart_service import CartAggregator


def get_catalog(request: Request) -> CatalogStore:
    return request.app.state.catalog


def get_carts(request: Request) -> CartAggregator:
    return request.app.state.carts


def get_session_id(request: Request) -> str:
    #issued by SessionCookieMiddleware
    return request.state.session_id
