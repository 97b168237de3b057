from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime


class ProductCreate(BaseModel):
    title: str
    description: str
    price: float = Field(ge=0)
    category: str
    stock: int
    image_url: str
    discount: Optional[float] = Field(default=None, ge=0, le=100)


# Partial update: only the fields that were sent are written
class ProductUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    category: Optional[str] = None
    stock: Optional[int] = None
    image_url: Optional[str] = None
    discount: Optional[float] = Field(default=None, ge=0, le=100)


class ProductOut(BaseModel):
    id: str
    title: str
    description: str
    price: float
    discount: Optional[float] = None
    category: str
    stock: int
    image_url: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v):
        return str(v)

    model_config = ConfigDict(from_attributes=True)
