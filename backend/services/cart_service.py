import logging
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, List, Optional, Tuple

from sqlalchemy.orm import Session

from models.cart import Cart
from models.product import Product
from repositories.cart_repo import CartRepository
from repositories.product_repo import ProductRepository
from utils.errors import BadRequest, NotFound, parse_id

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def resolve_unit_price(product: Product) -> Decimal:
    """Current unit price of a catalog product, discount applied, rounded to cents."""
    price = Decimal(str(product.price))
    if product.discount is not None:
        price = price * (Decimal(1) - Decimal(str(product.discount)) / Decimal(100))
    return price.quantize(CENT, rounding=ROUND_HALF_UP)


def cart_total(items: List[dict]) -> float:
    # Summed in Decimal over the captured prices so the cached total never drifts
    total = sum((Decimal(str(i["price"])) * i["quantity"] for i in items), Decimal("0.00"))
    return float(total)


class CartService:
    """
    Read-modify-write operations on a user's cart document.

    Each mutation loads the cart, edits the item list in memory, recomputes
    total_price and writes everything back in one row update. Nothing
    serializes concurrent mutations of the same cart.
    """

    def __init__(self, db: Session, catalog: ProductRepository = None, clock: Callable[[], datetime] = None):
        self.repo = CartRepository(db)
        self.catalog = catalog or ProductRepository(db)
        self.clock = clock or utcnow

    # query
    def get_cart(self, user_id: int) -> Cart:
        cart = self.repo.find_by_user(user_id)
        if cart is not None:
            return cart
        # Synthesized, never persisted
        now = self.clock()
        return Cart(id=None, user_id=user_id, items=[], total_price=0.0, created_at=now, updated_at=now)

    # commands
    def add_item(self, user_id: int, product_id: str, quantity: int) -> Tuple[Cart, bool]:
        """Add ``quantity`` of a product; returns the cart and whether it was created."""
        pid = parse_id(product_id, "product")
        if quantity <= 0:
            raise BadRequest("Quantity must be positive")

        product = self.catalog.find_product(pid)
        if product is None:
            raise NotFound("Product not found")
        price = resolve_unit_price(product)

        cart = self.repo.find_by_user(user_id)
        items = self._copy_items(cart)
        key = str(pid)

        line = self._find_line(items, key)
        if line is not None:
            # The price captured when the line was first added stands
            logger.info(
                "Product %s already in cart of user %s, quantity %s -> %s",
                key, user_id, line["quantity"], line["quantity"] + quantity,
            )
            line["quantity"] += quantity
        else:
            logger.info("Adding product %s to cart of user %s at %s", key, user_id, price)
            items.append({"product_id": key, "quantity": quantity, "price": float(price)})

        saved = self.repo.upsert(user_id, items, cart_total(items), self.clock())
        return saved, cart is None

    def update_item_quantity(self, user_id: int, product_id: str, quantity: int) -> Cart:
        key = str(parse_id(product_id, "product"))
        cart = self._existing_cart(user_id)
        items = self._copy_items(cart)

        line = self._find_line(items, key)
        if line is None:
            raise NotFound("Cart item not found")

        if quantity <= 0:
            # The line goes, the (possibly empty) cart document stays
            items = [i for i in items if i["product_id"] != key]
            logger.info("Quantity %s for product %s, line removed from cart of user %s", quantity, key, user_id)
        else:
            line["quantity"] = quantity

        return self.repo.upsert(user_id, items, cart_total(items), self.clock())

    def remove_item(self, user_id: int, product_id: str) -> Cart:
        key = str(parse_id(product_id, "product"))
        cart = self._existing_cart(user_id)
        items = self._copy_items(cart)

        remaining = [i for i in items if i["product_id"] != key]
        if len(remaining) == len(items):
            raise NotFound("Item not found in cart")

        logger.info("Removed product %s from cart of user %s", key, user_id)
        return self.repo.upsert(user_id, remaining, cart_total(remaining), self.clock())

    def clear(self, user_id: int) -> None:
        if not self.repo.delete_by_user(user_id):
            raise NotFound("Cart not found")
        logger.info("Cart of user %s cleared", user_id)

    # helpers
    def _existing_cart(self, user_id: int) -> Cart:
        cart = self.repo.find_by_user(user_id)
        if cart is None:
            raise NotFound("Cart not found")
        return cart

    @staticmethod
    def _copy_items(cart: Optional[Cart]) -> List[dict]:
        if cart is None:
            return []
        return [dict(i) for i in cart.items]

    @staticmethod
    def _find_line(items: List[dict], key: str) -> Optional[dict]:
        return next((i for i in items if i["product_id"] == key), None)
