from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime


# Order line as sent by the client and stored on the order
class OrderItem(BaseModel):
    product_id: str
    quantity: int
    price: float


# Input schema for placing an order
class OrderCreate(BaseModel):
    user_id: str
    products: List[OrderItem] = Field(default_factory=list)
    total_price: float
    order_type: str


# Status and/or order type patch
class OrderUpdate(BaseModel):
    status: Optional[str] = None
    order_type: Optional[str] = None


# Output schema representing the full order details
class OrderOut(BaseModel):
    id: str
    user_id: str
    products: List[OrderItem]
    total_price: float
    order_type: str
    status: str
    created_at: datetime
    updated_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v):
        return str(v)

    model_config = ConfigDict(from_attributes=True)
