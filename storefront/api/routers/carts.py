# storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException

from storefront.api.deps import get_carts, get_session_id
from storefront.domain.errors import NotFoundError, StorageError, ValidationError
from storefront.domain.schemas import Cart, CartItemIn, CartOut, MessageOut, QuantityIn
from storefront.services.cart_service import CartAggregator

router = APIRouter(prefix="/api/cart", tags=["cart"])


def get_cart(
    session_id: str = Depends(get_session_id),
    carts: CartAggregator = Depends(get_carts),
) -> Cart:
    try:
        return carts.get_or_create_cart(session_id)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("", response_model=CartOut)
def view_cart(
    cart: Cart = Depends(get_cart),
    carts: CartAggregator = Depends(get_carts),
):
    return carts.view(cart)


@router.post("", response_model=MessageOut, status_code=201)
def add_item(
    payload: CartItemIn,
    cart: Cart = Depends(get_cart),
    carts: CartAggregator = Depends(get_carts),
):
    try:
        carts.add_item(cart, payload.product_id, payload.quantity)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"message": "Added to cart"}


@router.patch("/{product_id}", response_model=MessageOut)
def set_quantity(
    product_id: str,
    payload: QuantityIn,
    cart: Cart = Depends(get_cart),
    carts: CartAggregator = Depends(get_carts),
):
    try:
        line = carts.set_quantity(cart, product_id, payload.quantity)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))

    if line is None:
        return {"message": "Removed from cart"}
    return {"message": "Quantity updated"}


@router.delete("/{product_id}", response_model=MessageOut)
def remove_item(
    product_id: str,
    cart: Cart = Depends(get_cart),
    carts: CartAggregator = Depends(get_carts),
):
    try:
        carts.remove_item(cart, product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"message": "Removed from cart"}
