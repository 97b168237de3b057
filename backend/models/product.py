# backend/models/product.py
from sqlalchemy import Column, Integer, String, Float, DateTime, CheckConstraint, func
from database import Base

# Model Product
# A single catalog entry. price is the current unit price, discount an
# optional percentage taken off it when the product is added to a cart.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False, default="")
    category = Column(String, nullable=False, default="")

    price = Column(Float, CheckConstraint("price >= 0"), nullable=False)
    discount = Column(Float, CheckConstraint("discount >= 0 AND discount <= 100"), nullable=True)

    stock = Column(Integer, nullable=False, default=0)
    image_url = Column(String, nullable=False, default="")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())
