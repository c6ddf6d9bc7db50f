# catalog/schemas/statistics.py
from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class CategoryHighestPrice(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category_name: str
    highest_price: Decimal


class PriceRangeCount(BaseModel):
    """Bucket fix: '0-500' | '501-1000' | '1000+'."""
    price_range: str
    product_count: int


class ProductWithoutMedia(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: int
    product_name: str
