from typing import List, Optional

from sqlalchemy.orm import Session

from models.order import Order
from utils.transactions import store_errors


class OrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def insert_order(self, order: Order) -> Order:
        with store_errors(self.db, "Error creating order"):
            self.db.add(order)
            self.db.commit()
            self.db.refresh(order)
        return order

    def find_order(self, order_id: int) -> Optional[Order]:
        with store_errors(self.db, "Error retrieving order"):
            return self.db.query(Order).filter(Order.id == order_id).first()

    def list_orders(self, user_id: str = None) -> List[Order]:
        with store_errors(self.db, "Error fetching orders"):
            query = self.db.query(Order)
            if user_id is not None:
                query = query.filter(Order.user_id == user_id)
            return query.order_by(Order.created_at.desc(), Order.id.desc()).all()

    def update_order_fields(self, order_id: int, fields: dict) -> bool:
        with store_errors(self.db, "Error updating order"):
            matched = self.db.query(Order).filter(Order.id == order_id).update(
                fields, synchronize_session="fetch"
            )
            self.db.commit()
        return matched > 0

    def delete_order(self, order_id: int) -> bool:
        with store_errors(self.db, "Error deleting order"):
            deleted = self.db.query(Order).filter(Order.id == order_id).delete()
            self.db.commit()
        return deleted > 0
