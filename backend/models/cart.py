# backend/models/cart.py
from sqlalchemy import Column, Integer, DateTime, Float, JSON
from sqlalchemy.ext.mutable import MutableList
from database import Base

# The shopping cart of one user, stored as a single document:
# items is a JSON list of {"product_id": str, "quantity": int, "price": float}.
# At most one row per user_id is kept by upserting on user_id.
class Cart(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, index=True, nullable=False) # Owner reference (not a foreign key)
    items = Column(MutableList.as_mutable(JSON), nullable=False, default=list)
    total_price = Column(Float, nullable=False, default=0.0) # Cached sum of price * quantity
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
