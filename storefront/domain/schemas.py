# storefront/domain/schemas.py
from typing import Any, List
from pydantic import BaseModel, Field, ConfigDict


class Product(BaseModel):
    """Product record as stored in the catalog and returned by the API."""

    id: int
    name: str
    price: float
    category: str = ""
    image: str = ""
    description: str = ""

    model_config = ConfigDict(from_attributes=True)


class ProductIn(BaseModel):
    """
    Payload for creating a product.
    Types are loose on purpose: the catalog does the validation
    so the same rules apply to API and direct calls.
    """

    name: Any = None
    price: Any = None
    category: Any = None
    image: Any = None
    description: Any = None


class ProductPatch(ProductIn):
    """Partial update, only fields present in the payload are applied."""


class ProductFilter(BaseModel):
    """Catalog query, every field is optional and they AND together."""

    search: str | None = None
    category: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    sort: str | None = None


class CartLine(BaseModel):
    product_id: int
    quantity: int


class Cart(BaseModel):
    session_id: str
    items: List[CartLine] = Field(default_factory=list)

    def find(self, product_id: int) -> CartLine | None:
        for line in self.items:
            if line.product_id == product_id:
                return line
        return None


class CartItemIn(BaseModel):
    product_id: Any = Field(None, alias="productId")
    quantity: Any = None

    model_config = ConfigDict(populate_by_name=True)


class QuantityIn(BaseModel):
    quantity: Any = None


class CartLineOut(BaseModel):
    """Priced cart line (response)."""

    product_id: int = Field(..., alias="productId")
    quantity: int
    product: Product
    subtotal: float

    model_config = ConfigDict(populate_by_name=True)


class CartOut(BaseModel):
    """Priced cart view (response)."""

    items: List[CartLineOut]
    total: float


class MessageOut(BaseModel):
    message: str
