"""Data models for shopping results."""

from typing import Optional

from pydantic import Field

from .base import CamelModel


class Product(CamelModel):
    id: str
    title: str
    description: str = ""
    price: str
    original_price: Optional[str] = None
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    reviews: int = 0
    url: str
    domain: str
    image: Optional[str] = None
    store: Optional[str] = None
    free_shipping: bool = False
    in_stock: bool = True
    prime: bool = False
