"""Pydantic model for product records."""

from typing import Any

from pydantic import BaseModel, Field


class Product(BaseModel):
    """A catalogue entry.  No field has business rules beyond presence."""

    id: str
    name: Any = Field(None, examples=["Desk lamp"])
    price: Any = Field(None, examples=[24.99])
    quantity: Any = Field(None, examples=[10])
    image: Any = Field(None, examples=["https://example.com/lamp.png"])


PRODUCT_FIELDS = ("name", "price", "quantity", "image")
