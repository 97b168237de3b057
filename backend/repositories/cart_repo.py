from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from models.cart import Cart
from utils.transactions import store_errors


class CartRepository:
    """One cart document per user, addressed by user_id.

    Writes replace the whole item list in a single row update. There is no
    version check: of two concurrent read-modify-write cycles the later
    write wins.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_user(self, user_id: int) -> Optional[Cart]:
        with store_errors(self.db, "Error accessing cart"):
            return self.db.query(Cart).filter(Cart.user_id == user_id).first()

    def upsert(self, user_id: int, items: List[dict], total_price: float, now: datetime) -> Cart:
        """Insert the cart if the user has none, else replace items/total/updated_at."""
        with store_errors(self.db, "Error updating cart"):
            cart = self.db.query(Cart).filter(Cart.user_id == user_id).first()
            if cart is None:
                cart = Cart(user_id=user_id, created_at=now)
                self.db.add(cart)
            cart.items = list(items)
            cart.total_price = total_price
            cart.updated_at = now
            self.db.commit()
            self.db.refresh(cart)
        return cart

    def delete_by_user(self, user_id: int) -> bool:
        with store_errors(self.db, "Error clearing cart"):
            deleted = self.db.query(Cart).filter(Cart.user_id == user_id).delete()
            self.db.commit()
        return deleted > 0
