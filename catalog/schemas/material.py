# catalog/schemas/material.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class MaterialRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    material_id: int
    material_name: str
