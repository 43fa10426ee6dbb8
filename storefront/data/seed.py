# storefront/data/seed.py
import json
from pathlib import Path

from pydantic import ValidationError as SchemaError

from storefront.domain.schemas import Product
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger
from storefront.utils.settings import CATALOG_SEED_PATH

logger = get_logger(__name__)


def load_seed_file(path: str | Path) -> list[Product]:
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        return [Product.model_validate(p) for p in raw]
    except (OSError, json.JSONDecodeError, SchemaError) as e:
        logger.error(f"Failed to load seed catalog {path}: {e}")
        return []


def seed(repo: ProductRepo, path: str | Path = CATALOG_SEED_PATH) -> int:
    # not forcing: only seed if empty
    if not repo.is_empty():
        return 0

    products = load_seed_file(path)
    if products:
        repo.save_all(products)
        logger.info(f"Seeded catalog with {len(products)} products from {path}")
    return len(products)
