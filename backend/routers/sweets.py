from typing import Dict, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import require
from core.policy import Caller, Operation
from db.database import get_async_session
from schemas.sweets import SweetCreate, SweetUpdate
from services.catalog import CatalogStore

router = APIRouter()


def get_catalog(db: AsyncSession = Depends(get_async_session)) -> CatalogStore:
    return CatalogStore(db)


@router.get("", response_model=Dict)
async def list_sweets(
    caller: Caller = Depends(require(Operation.VIEW_SWEETS)),
    catalog: CatalogStore = Depends(get_catalog),
):
    """List all sweets, newest first"""
    sweets = await catalog.list()
    return {"sweets": [s.to_schema for s in sweets]}


@router.get("/search", response_model=Dict)
async def search_sweets(
    name: Optional[str] = None,
    category: Optional[str] = None,
    minPrice: Optional[float] = Query(default=None, allow_inf_nan=False),
    maxPrice: Optional[float] = Query(default=None, allow_inf_nan=False),
    caller: Caller = Depends(require(Operation.VIEW_SWEETS)),
    catalog: CatalogStore = Depends(get_catalog),
):
    """
    Search sweets. All filters are optional and combine with AND.

    - name: case-insensitive substring
    - category: exact match
    - minPrice/maxPrice: inclusive price bounds
    """
    sweets = await catalog.search(name=name, category=category, min_price=minPrice, max_price=maxPrice)
    return {"sweets": [s.to_schema for s in sweets], "count": len(sweets)}


@router.get("/{sweet_id}", response_model=Dict)
async def get_sweet(
    sweet_id: int,
    caller: Caller = Depends(require(Operation.VIEW_SWEETS)),
    catalog: CatalogStore = Depends(get_catalog),
):
    sweet = await catalog.get(sweet_id)
    return {"sweet": sweet.to_schema}


@router.post("", response_model=Dict, status_code=status.HTTP_201_CREATED)
async def create_sweet(
    payload: SweetCreate,
    caller: Caller = Depends(require(Operation.MANAGE_SWEETS)),
    catalog: CatalogStore = Depends(get_catalog),
):
    sweet = await catalog.create(payload.name, payload.category, payload.price, payload.quantity)
    return {"message": "Sweet added successfully", "sweet": sweet.to_schema}


@router.put("/{sweet_id}", response_model=Dict)
async def update_sweet(
    sweet_id: int,
    payload: SweetUpdate,
    caller: Caller = Depends(require(Operation.MANAGE_SWEETS)),
    catalog: CatalogStore = Depends(get_catalog),
):
    """Update only the fields present in the body"""
    sweet = await catalog.update(sweet_id, payload.model_dump(exclude_unset=True))
    return {"message": "Sweet updated successfully", "sweet": sweet.to_schema}


@router.delete("/{sweet_id}", response_model=Dict)
async def delete_sweet(
    sweet_id: int,
    caller: Caller = Depends(require(Operation.MANAGE_SWEETS)),
    catalog: CatalogStore = Depends(get_catalog),
):
    sweet = await catalog.delete(sweet_id)
    return {"message": "Sweet deleted successfully", "sweet": sweet.to_schema}
