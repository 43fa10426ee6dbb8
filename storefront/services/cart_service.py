# storefront/services/cart_service.py
import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any

from storefront.domain.errors import NotFoundError, ValidationError
from storefront.domain.schemas import Cart, CartLine, CartLineOut, CartOut
from storefront.services.catalog_service import CatalogStore
from storefront.utils.logging import get_logger
from storefront.utils.validators import to_number, to_product_id

logger = get_logger(__name__)

CENT = Decimal("0.01")


def round2(value) -> Decimal:
    """Round to cents, half away from zero."""
    d = Decimal(str(value))
    with localcontext() as ctx:
        #quantize needs every digit down to the cents
        ctx.prec = max(ctx.prec, d.adjusted() + 3)
        return d.quantize(CENT, rounding=ROUND_HALF_UP)


def _line_subtotal(price: float, quantity: int) -> Decimal:
    d = Decimal(str(price))
    with localcontext() as ctx:
        #exact product, large quantities must not lose digits
        ctx.prec = max(ctx.prec, len(str(quantity)) + len(d.as_tuple().digits) + 2)
        return round2(d * quantity)


def _check_representable(price: float, quantity: int) -> None:
    #subtotal must still fit a float for the json view
    try:
        fits = math.isfinite(price * quantity)
    except OverflowError:
        fits = False
    if not fits:
        raise ValidationError("Quantity too large")


def _whole(qty: float) -> int:
    if not qty.is_integer():
        raise ValidationError("Quantity must be a whole number")
    return int(qty)


class CartAggregator:
    """
    Per-session carts holding only (product_id, quantity) pairs.
    Commands (add, set, remove) change the stored cart,
    the query (view) prices it against the live catalog.
    """

    def __init__(self, catalog: CatalogStore, repo):
        self.catalog = catalog
        self.repo = repo

    def get_or_create_cart(self, session_id: str) -> Cart:
        cart = self.repo.get(session_id)
        if cart is None:
            cart = Cart(session_id=session_id)
            self.repo.save(cart)
            logger.info(f"Created cart for session {session_id}")
        return cart

    # query
    def view(self, cart: Cart) -> CartOut:
        # lines of deleted products are skipped here but stay in the cart
        lines = []
        for line in cart.items:
            product = self.catalog.find(line.product_id)
            if product is None:
                continue
            lines.append(
                CartLineOut(
                    product_id=line.product_id,
                    quantity=line.quantity,
                    product=product,
                    subtotal=float(_line_subtotal(product.price, line.quantity)),
                )
            )

        total = round2(sum((Decimal(str(i.subtotal)) for i in lines), Decimal("0")))
        return CartOut(items=lines, total=float(total))

    # commands
    def add_item(self, cart: Cart, product_id: Any, quantity: Any = None) -> CartLine:
        qty = to_number(quantity)
        if qty is None:
            qty = 1.0

        product = self.catalog.find(product_id)
        if product is None:
            raise NotFoundError("Product not found")

        if qty <= 0:
            raise ValidationError("Quantity must be > 0")
        qty = _whole(qty)

        line = cart.find(product.id)
        _check_representable(product.price, qty + (line.quantity if line is not None else 0))
        if line is not None:
            logger.info(
                f"Product {product.id} already in cart {cart.session_id}, "
                f"quantity {line.quantity} -> {line.quantity + qty}"
            )
            line.quantity += qty
        else:
            line = CartLine(product_id=product.id, quantity=qty)
            cart.items.append(line)
            logger.info(f"Added product {product.id} x{qty} to cart {cart.session_id}")

        self.repo.save(cart)
        return line

    def set_quantity(self, cart: Cart, product_id: Any, quantity: Any) -> CartLine | None:
        """
        Absolute set, not a delta.
        Returns the updated line, or None when quantity 0 removed it.
        """
        qty = to_number(quantity)
        if qty is None:
            raise ValidationError("Quantity required")
        if qty < 0:
            raise ValidationError("Quantity cannot be negative")
        qty = _whole(qty)

        line = cart.find(to_product_id(product_id))
        if line is None:
            raise NotFoundError("Item not in cart")

        product = self.catalog.find(line.product_id)
        if qty and product is not None:
            _check_representable(product.price, qty)

        if qty == 0:
            cart.items.remove(line)
            logger.info(f"Removed product {line.product_id} from cart {cart.session_id}")
        else:
            line.quantity = qty
            logger.info(f"Set product {line.product_id} to x{qty} in cart {cart.session_id}")

        self.repo.save(cart)
        return line if qty else None

    def remove_item(self, cart: Cart, product_id: Any) -> None:
        line = cart.find(to_product_id(product_id))
        if line is None:
            raise NotFoundError("Item not in cart")

        cart.items.remove(line)
        logger.info(f"Removed product {line.product_id} from cart {cart.session_id}")
        self.repo.save(cart)
