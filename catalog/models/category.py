# catalog/models/category.py
from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog.database import Base


class Category(Base):
    """
    Tabelul 'category'. Read-only din punctul de vedere al API-ului
    (populat prin seed / din afara serviciului).
    """
    __tablename__ = "category"

    category_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category_name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:  # pragma: no cover
        name_preview = (
            (self.category_name[:32] + "…")
            if self.category_name and len(self.category_name) > 33
            else self.category_name
        )
        return f"<Category id={self.category_id!r} name={name_preview!r}>"
