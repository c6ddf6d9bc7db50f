# catalog/schemas/category.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CategoryRead(BaseModel):
    """Răspuns pentru categorie."""
    model_config = ConfigDict(from_attributes=True)

    category_id: int
    category_name: str
