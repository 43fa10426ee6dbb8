# storefront/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from storefront.api.deps import get_catalog
from storefront.domain.errors import NotFoundError, StorageError, ValidationError
from storefront.domain.schemas import (
    MessageOut,
    Product,
    ProductFilter,
    ProductIn,
    ProductPatch,
)
from storefront.services.catalog_service import CatalogStore
from storefront.utils.validators import to_number

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=List[Product])
def list_products(
    search: str | None = None,
    category: str | None = None,
    min_price: str | None = Query(None, alias="minPrice"),
    max_price: str | None = Query(None, alias="maxPrice"),
    sort: str | None = None,
    catalog: CatalogStore = Depends(get_catalog),
):
    #non-numeric bounds are ignored, not rejected
    return catalog.list(
        ProductFilter(
            search=search,
            category=category,
            min_price=to_number(min_price),
            max_price=to_number(max_price),
            sort=sort,
        )
    )


@router.get("/{product_id}", response_model=Product)
def get_product(product_id: str, catalog: CatalogStore = Depends(get_catalog)):
    try:
        return catalog.get(product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=Product, status_code=201)
def create_product(payload: ProductIn, catalog: CatalogStore = Depends(get_catalog)):
    try:
        return catalog.create(payload.model_dump())
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.patch("/{product_id}", response_model=Product)
def update_product(
    product_id: str,
    payload: ProductPatch,
    catalog: CatalogStore = Depends(get_catalog),
):
    try:
        return catalog.update(product_id, payload.model_dump(exclude_unset=True))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{product_id}", response_model=MessageOut)
def delete_product(product_id: str, catalog: CatalogStore = Depends(get_catalog)):
    try:
        catalog.delete(product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"message": "Deleted"}
