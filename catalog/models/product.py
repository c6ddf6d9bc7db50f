# catalog/models/product.py
from __future__ import annotations

from decimal import Decimal

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog.database import Base


class Product(Base):
    """
    Tabelul 'product'.

    Note:
    - `sku` conține ciphertext-ul (hex) produs de `SkuCipher` (max 64 caractere
      în clar → max 544 hex); criptarea e deterministă, deci indexul UNIC
      pe coloana criptată impune unicitatea SKU-ului în clar.
    - `price` NUMERIC(10,2), NOT NULL și >= 0 (CHECK la nivel DB).
    """
    __tablename__ = "product"
    __table_args__ = (
        Index("ix_product_sku", "sku", unique=True),
        Index("ix_product_category_id", "category_id"),
        CheckConstraint("price >= 0", name="price_nonnegative"),
    )

    product_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sku: Mapped[str] = mapped_column(String(600), nullable=False)
    product_name: Mapped[str] = mapped_column(String(255), nullable=False)
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("category.category_id"),
        nullable=False,
    )
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    def __repr__(self) -> str:
        # nu punem SKU-ul (criptat) în repr; scurtăm numele pentru loguri
        name_preview = (
            (self.product_name[:32] + "…")
            if self.product_name and len(self.product_name) > 33
            else self.product_name
        )
        return f"<Product id={self.product_id!r} name={name_preview!r}>"


class ProductMaterial(Base):
    """
    Tabelul M2M 'product_material' (PK compus).
    Index suplimentar pe material_id pentru interogări inverse.
    """
    __tablename__ = "product_material"
    __table_args__ = (
        Index("ix_product_material_material_id", "material_id"),
    )

    product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("product.product_id", ondelete="CASCADE"),
        primary_key=True,
    )
    material_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("material.material_id"),
        primary_key=True,
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<ProductMaterial product_id={self.product_id} material_id={self.material_id}>"


class ProductMedia(Base):
    """
    Tabelul 'product_media'. Ordinea URL-urilor = ordinea de inserare (media_id).
    """
    __tablename__ = "product_media"
    __table_args__ = (
        Index("ix_product_media_product_id", "product_id"),
    )

    media_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("product.product_id", ondelete="CASCADE"),
        nullable=False,
    )
    url: Mapped[str] = mapped_column(String(2048), nullable=False)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<ProductMedia id={self.media_id} product_id={self.product_id}>"
