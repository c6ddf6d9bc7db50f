# catalog/models/material.py
from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog.database import Base


class Material(Base):
    __tablename__ = "material"

    material_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    material_name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Material id={self.material_id!r} name={self.material_name!r}>"
