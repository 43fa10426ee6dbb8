# storefront/main.py
import locale

import uvicorn

from storefront.api import create_app
from storefront.data.database import Base, SessionLocal, engine
from storefront.data.seed import seed
from storefront.repos.cart_repo import make_cart_repo
from storefront.repos.product_repo import ProductRepo
from storefront.services.catalog_service import CatalogStore
from storefront.utils.logging import get_logger
from storefront.utils.settings import CART_BACKEND, PORT, SORT_LOCALE, API_VERSION

# import all models before create_all
from storefront.data.models import ProductModel  # noqa: F401

logger = get_logger(__name__)


def build_catalog() -> CatalogStore:
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise

    repo = ProductRepo(SessionLocal)
    seed(repo)
    return CatalogStore(repo)


if SORT_LOCALE:
    #name sorting collates with LC_COLLATE
    locale.setlocale(locale.LC_COLLATE, SORT_LOCALE)

app = create_app(build_catalog(), make_cart_repo(CART_BACKEND))


def run():
    logger.info(f"Server running on http://localhost:{PORT}")
    logger.info(f"Expect X-API-Version: {API_VERSION} on all API requests")
    uvicorn.run(app, host="0.0.0.0", port=PORT)


if __name__ == "__main__":
    run()
