# catalog/schemas/product.py
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Annotated, List

from pydantic import BaseModel, Field, ConfigDict, field_validator

MAX_PRICE = Decimal("99999999.99")  # NUMERIC(10,2)


def _quantize_price(v: Decimal) -> Decimal:
    # Aliniază la NUMERIC(10,2) și evită erori de reprezentare
    return v.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class ProductWrite(BaseModel):
    """
    Payload pentru create/replace. Toate câmpurile sunt obligatorii;
    `materials` și `image_urls` pot fi liste goale, dar trebuie trimise.
    """
    sku: str = Field(..., min_length=1, max_length=64)
    product_name: str = Field(..., min_length=1, max_length=255)
    category_id: int = Field(..., gt=0)
    price: Decimal = Field(..., ge=0, le=MAX_PRICE)
    materials: List[Annotated[int, Field(gt=0)]]
    image_urls: List[Annotated[str, Field(min_length=1, max_length=2048)]]

    # --- Validators ---
    @field_validator("sku", "product_name")
    @classmethod
    def _strip_nonempty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("price")
    @classmethod
    def _price_quantize(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("price must be >= 0")
        return _quantize_price(v)

    @field_validator("materials")
    @classmethod
    def _materials_distinct(cls, v: List[int]) -> List[int]:
        # PK compus (product_id, material_id) → duplicatele colapsează
        return list(dict.fromkeys(v))

    @field_validator("image_urls")
    @classmethod
    def _urls_strip(cls, v: List[str]) -> List[str]:
        out = [u.strip() for u in v]
        if any(not u for u in out):
            raise ValueError("image_urls must not contain empty values")
        return out

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "sku": "ABC-100",
                    "product_name": "Widget",
                    "category_id": 1,
                    "price": "19.99",
                    "materials": [2, 3],
                    "image_urls": ["http://x/1.png"],
                }
            ]
        }
    )


class ProductSummary(BaseModel):
    """Vedere denormalizată pentru listă (materiale = nume)."""
    product_id: int
    sku: str
    product_name: str
    category_name: str
    price: Decimal
    materials: List[str]
    image_urls: List[str]


class ProductDetail(BaseModel):
    """Vedere pentru un singur produs (materiale = id-uri)."""
    product_id: int
    sku: str
    product_name: str
    category_id: int
    category_name: str
    price: Decimal
    materials: List[int]
    image_urls: List[str]


class ProductCreated(BaseModel):
    product_id: int
    message: str = "Product and materials added successfully"


class Message(BaseModel):
    message: str
