# storefront/repos/product_repo.py
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from storefront.data.models.product import ProductModel
from storefront.domain.errors import StorageError
from storefront.domain.schemas import Product
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ProductRepo:
    """
    Durable copy of the whole catalog.
    No incremental writes: save_all replaces every row in one transaction.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def load_all(self) -> List[Product]:
        with self.session_factory() as db:
            rows = db.execute(
                select(ProductModel).order_by(ProductModel.position)
            ).scalars().all()
            return [Product.model_validate(r) for r in rows]

    def save_all(self, products: List[Product]) -> None:
        db = self.session_factory()
        try:
            db.execute(delete(ProductModel))
            db.add_all(
                ProductModel(position=pos, **p.model_dump())
                for pos, p in enumerate(products)
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to save {len(products)} products: {e}")
            raise StorageError("Failed to persist product") from e
        finally:
            db.close()

    def is_empty(self) -> bool:
        with self.session_factory() as db:
            return db.execute(select(ProductModel.id).limit(1)).first() is None
