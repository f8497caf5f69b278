from typing import Dict, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import require
from core.policy import Caller, Operation
from db.database import get_async_session
from schemas.sweets import PurchaseRequest, RestockRequest
from services.ledger import InventoryLedger

router = APIRouter()


def get_ledger(db: AsyncSession = Depends(get_async_session)) -> InventoryLedger:
    return InventoryLedger(db)


@router.post("/{sweet_id}/purchase", response_model=Dict)
async def purchase_sweet(
    sweet_id: int,
    payload: Optional[PurchaseRequest] = Body(default=None),
    caller: Caller = Depends(require(Operation.PURCHASE)),
    ledger: InventoryLedger = Depends(get_ledger),
):
    """Buy `quantity` units (default 1 when the key is absent). Fails without side effects if stock is short."""
    quantity = payload.quantity if payload and "quantity" in payload.model_fields_set else 1
    result = await ledger.purchase(sweet_id, quantity)
    return {
        "message": "Purchase successful",
        "sweet": result.sweet.to_schema,
        "purchased": result.purchased,
    }


@router.post("/{sweet_id}/restock", response_model=Dict)
async def restock_sweet(
    sweet_id: int,
    payload: RestockRequest,
    caller: Caller = Depends(require(Operation.RESTOCK)),
    ledger: InventoryLedger = Depends(get_ledger),
):
    result = await ledger.restock(sweet_id, payload.quantity)
    return {
        "message": "Restock successful",
        "sweet": result.sweet.to_schema,
        "restocked": result.restocked,
    }
