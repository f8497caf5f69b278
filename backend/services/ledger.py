"""
Inventory ledger: purchase and restock.

Both operations are a single conditional UPDATE ... RETURNING per sweet, so
the sufficiency check and the decrement happen in one statement. Two buyers
racing for the last units can never both pass the check against a stale
quantity: the database applies the updates one after the other and the loser
matches zero rows.
"""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import InsufficientQuantityError, NotFoundError
from db.sweet import Sweet
from services.validation import validate_positive_quantity

logger = logging.getLogger(__name__)


@dataclass
class PurchaseResult:
    sweet: Sweet
    purchased: int


@dataclass
class RestockResult:
    sweet: Sweet
    restocked: int


class InventoryLedger:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def purchase(self, sweet_id: int, quantity: Any = 1) -> PurchaseResult:
        """
        Take `quantity` units of a sweet out of stock.

        Raises ValidationError for quantity < 1, NotFoundError for an unknown
        sweet and InsufficientQuantityError when fewer than `quantity` units
        are available. Nothing is changed unless the whole amount is there.
        """
        qty = validate_positive_quantity(quantity).raise_for_errors()["quantity"]

        stmt = (
            update(Sweet)
            .where(Sweet.id == sweet_id, Sweet.quantity >= qty)
            .values(quantity=Sweet.quantity - qty)
            .returning(Sweet)
            .execution_options(synchronize_session="fetch")
        )
        sweet = (await self.session.execute(stmt)).scalar_one_or_none()

        if sweet is None:
            await self.session.rollback()
            current = await self.session.get(Sweet, sweet_id, populate_existing=True)
            if current is None:
                raise NotFoundError("Sweet not found")
            logger.warning(
                "Purchase rejected sweet_id=%s requested=%s available=%s",
                sweet_id, qty, current.quantity,
            )
            raise InsufficientQuantityError(available=current.quantity, requested=qty)

        await self.session.commit()
        logger.info("Purchased sweet_id=%s qty=%s remaining=%s", sweet_id, qty, sweet.quantity)
        return PurchaseResult(sweet=sweet, purchased=qty)

    async def restock(self, sweet_id: int, quantity: Any) -> RestockResult:
        """Add `quantity` (>= 1) units to a sweet. There is no upper bound."""
        qty = validate_positive_quantity(quantity).raise_for_errors()["quantity"]

        stmt = (
            update(Sweet)
            .where(Sweet.id == sweet_id)
            .values(quantity=Sweet.quantity + qty)
            .returning(Sweet)
            .execution_options(synchronize_session="fetch")
        )
        sweet = (await self.session.execute(stmt)).scalar_one_or_none()

        if sweet is None:
            await self.session.rollback()
            raise NotFoundError("Sweet not found")

        await self.session.commit()
        logger.info("Restocked sweet_id=%s qty=%s now=%s", sweet_id, qty, sweet.quantity)
        return RestockResult(sweet=sweet, restocked=qty)
