import logging
from typing import Callable, List, Optional, Tuple

from sqlalchemy.orm import Session

from models.order import Order
from repositories.cart_repo import CartRepository
from repositories.order_repo import OrderRepository
from services.cart_service import utcnow
from utils.errors import BadRequest, InternalError, NotFound, parse_id

logger = logging.getLogger(__name__)

ORDER_TYPES = ("shipping", "pickup")


def normalize_order_type(order_type: str) -> str:
    value = (order_type or "").lower()
    if value not in ORDER_TYPES:
        raise BadRequest("order_type must be 'shipping' or 'pickup'")
    return value


class OrderService:
    def __init__(self, db: Session, clock: Callable = None):
        self.repo = OrderRepository(db)
        self.carts = CartRepository(db)
        self.clock = clock or utcnow

    def place_order(self, user_id: str, items: List[dict], total_price: float, order_type: str) -> Tuple[Order, str]:
        """
        Persist a new pending order, then try to delete the user's cart.

        total_price is stored as submitted. Once the order row is committed
        the call succeeds; the cart cleanup outcome only changes the message.
        """
        uid = parse_id(user_id, "user")
        kind = normalize_order_type(order_type)

        now = self.clock()
        order = self.repo.insert_order(Order(
            user_id=str(uid),
            products=[dict(i) for i in items],
            total_price=total_price,
            order_type=kind,
            status="pending",
            created_at=now,
            updated_at=now,
        ))
        logger.info("Order %s created for user %s (%s)", order.id, uid, kind)

        try:
            cleared = self.carts.delete_by_user(uid)
        except InternalError as e:
            logger.warning("Order %s created but cart of user %s not cleared: %s", order.id, uid, e.__cause__)
            return order, f"Order created but failed to clear cart: {e.__cause__}"

        if cleared:
            return order, "Order created successfully and cart cleared"
        return order, "Order created successfully (no cart to clear)"

    def get_order(self, order_id: str) -> Order:
        order = self.repo.find_order(parse_id(order_id, "order"))
        if order is None:
            raise NotFound("Order not found")
        return order

    def list_orders(self, user_id: Optional[str] = None) -> List[Order]:
        return self.repo.list_orders(user_id)

    def update_order(self, order_id: str, status: Optional[str] = None, order_type: Optional[str] = None) -> None:
        oid = parse_id(order_id, "order")
        fields = {}
        if status is not None:
            fields["status"] = status
        if order_type is not None:
            fields["order_type"] = normalize_order_type(order_type)
        if not fields:
            raise BadRequest("No update fields provided")
        fields["updated_at"] = self.clock()

        if not self.repo.update_order_fields(oid, fields):
            raise NotFound("Order not found")

    def delete_order(self, order_id: str) -> None:
        if not self.repo.delete_order(parse_id(order_id, "order")):
            raise NotFound("Order not found")
