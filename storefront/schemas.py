from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

# Documents served by the backend

class Category(BaseModel):
    id: str
    name: str
    slug: str

class Product(BaseModel):
    id: str
    title: str
    price: float = Field(ge=0)
    category: str = ""
    brand: Optional[str] = None
    image: Optional[str] = None

class WishlistEntry(BaseModel):
    product_id: str
    user_email: str

# Documents sent to the backend

class OrderItem(BaseModel):
    product_id: str
    title: str
    price: float = Field(ge=0)
    quantity: int = Field(ge=1)

class Order(BaseModel):
    user_email: str
    shipping_address: str
    payment_method: str
    items: list[OrderItem]
    total: float = Field(ge=0)

# Local client state

class FilterCriteria(BaseModel):
    q: Optional[str] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    min_price: Optional[str] = None
    max_price: Optional[str] = None

    @field_validator("min_price", "max_price", mode="before")
    @classmethod
    def price_bound_is_numeric(cls, value):
        if value is None or value == "":
            return value
        if isinstance(value, bool):
            raise ValueError(f"price bound must be numeric, got {value!r}")
        if isinstance(value, (int, float)):
            return str(value)
        try:
            float(value)
        except (TypeError, ValueError):
            raise ValueError(f"price bound must be numeric, got {value!r}")
        return value

class CartLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: str
    title: str
    price: float = Field(ge=0)
    quantity: int = Field(ge=1, default=1)

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity
