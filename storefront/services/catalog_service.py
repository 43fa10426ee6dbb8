# storefront/services/catalog_service.py
import locale
from typing import Any, Dict, List

from storefront.domain.errors import NotFoundError, ValidationError
from storefront.domain.schemas import Product, ProductFilter
from storefront.utils.logging import get_logger
from storefront.utils.validators import to_number, to_product_id

logger = get_logger(__name__)

TEXT_FIELDS = ("category", "image", "description")


def _name_key(product: Product) -> str:
    return locale.strxfrm(product.name.casefold())


#sort name -> (key, reverse); sorted() is stable in both directions
SORTS = {
    "price_asc": (lambda p: p.price, False),
    "price_desc": (lambda p: p.price, True),
    "name_asc": (_name_key, False),
    "name_desc": (_name_key, True),
}


def _valid_name(value: Any) -> str | None:
    if value is None:
        return None
    name = str(value)
    return name if name.strip() else None


def _valid_price(value: Any) -> float | None:
    price = to_number(value)
    if price is None or price < 0:
        return None
    return price


class CatalogStore:
    """
    Authoritative product collection.

    The list lives in memory and is rewritten wholesale to the repo after
    every mutation. Nothing is locked: two concurrent creates can compute
    the same next id. A failed write leaves the in-memory change in place
    and raises StorageError.
    """

    def __init__(self, repo):
        self.repo = repo
        self._products: List[Product] = repo.load_all()
        logger.info(f"Catalog loaded with {len(self._products)} products")

    # query
    def list(self, filter: ProductFilter | None = None) -> List[Product]:
        f = filter or ProductFilter()
        items = list(self._products)

        if f.search:
            s = f.search.casefold()
            items = [
                p for p in items
                if s in p.name.casefold() or (p.description and s in p.description.casefold())
            ]

        if f.category:
            c = f.category.casefold()
            items = [p for p in items if p.category.casefold() == c]

        if f.min_price is not None:
            items = [p for p in items if p.price >= f.min_price]
        if f.max_price is not None:
            items = [p for p in items if p.price <= f.max_price]

        if f.sort in SORTS:
            key, reverse = SORTS[f.sort]
            items = sorted(items, key=key, reverse=reverse)

        return items

    def get(self, product_id: Any) -> Product:
        pid = to_product_id(product_id)
        for p in self._products:
            if p.id == pid:
                return p
        raise NotFoundError("Product not found")

    def find(self, product_id: Any) -> Product | None:
        try:
            return self.get(product_id)
        except NotFoundError:
            return None

    # commands
    def create(self, fields: Dict[str, Any]) -> Product:
        name = _valid_name(fields.get("name"))
        price = _valid_price(fields.get("price"))
        if name is None or price is None:
            raise ValidationError("Valid name and price are required")

        #max + 1, not atomic
        new_id = max((p.id for p in self._products), default=0) + 1

        product = Product(
            id=new_id,
            name=name,
            price=price,
            **{k: str(fields[k]) if fields.get(k) else "" for k in TEXT_FIELDS},
        )

        self._products.append(product)
        logger.info(f"Created product {product.id} ({product.name})")
        self._persist()
        return product

    def update(self, product_id: Any, fields: Dict[str, Any]) -> Product:
        product = self.get(product_id)

        # validate everything first so a rejected patch changes nothing
        changes: Dict[str, Any] = {}
        if fields.get("name") is not None:
            name = _valid_name(fields["name"])
            if name is None:
                raise ValidationError("Name cannot be empty")
            changes["name"] = name
        if fields.get("price") is not None:
            price = _valid_price(fields["price"])
            if price is None:
                raise ValidationError("Invalid price")
            changes["price"] = price
        for k in TEXT_FIELDS:
            if fields.get(k) is not None:
                changes[k] = str(fields[k])

        for k, v in changes.items():
            setattr(product, k, v)

        logger.info(f"Updated product {product.id}: {sorted(changes)}")
        self._persist()
        return product

    def delete(self, product_id: Any) -> None:
        product = self.get(product_id)
        self._products.remove(product)
        logger.info(f"Deleted product {product.id}")
        self._persist()

    def _persist(self) -> None:
        #raises StorageError, in-memory state is kept either way
        self.repo.save_all(self._products)
