from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime

# Request schema for adding an item to the cart
class CartAddItem(BaseModel):
    product_id: str
    quantity: int = Field(gt=0)

# Request schema for changing a line's quantity (<= 0 removes the line)
class CartUpdateItem(BaseModel):
    quantity: int

# A single cart line; price is the unit price captured when the line was added
class CartItemOut(BaseModel):
    product_id: str
    quantity: int
    price: float

# The whole cart document
class CartOut(BaseModel):
    id: Optional[str] = None # None for a synthesized empty cart
    user_id: str
    items: List[CartItemOut]
    total_price: float
    created_at: datetime
    updated_at: datetime

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def _id_to_str(cls, v):
        return None if v is None else str(v)

    model_config = ConfigDict(from_attributes=True)
