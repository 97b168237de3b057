from sqlalchemy import Column, Integer, String, Float, DateTime, JSON
from database import Base

# A placed order. products is a JSON snapshot of
# {"product_id": str, "quantity": int, "price": float} lines, fixed at creation.
class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    products = Column(JSON, nullable=False, default=list)
    total_price = Column(Float, nullable=False) # As submitted by the client
    order_type = Column(String, nullable=False) # "shipping" or "pickup"
    status = Column(String, nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
