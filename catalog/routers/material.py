# catalog/routers/material.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from catalog.crud import material as crud
from catalog.database import get_db
from catalog.schemas.material import MaterialRead

router = APIRouter(prefix="/api/materials", tags=["materials"])


@router.get(
    "",
    response_model=List[MaterialRead],
    summary="List materials",
)
def list_materials(db: Session = Depends(get_db)):
    return crud.list_materials(db)
