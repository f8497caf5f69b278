import logging
from typing import Any, List, Mapping, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import NotFoundError
from db.sweet import Sweet
from services.validation import validate_sweet_fields

logger = logging.getLogger(__name__)


class CatalogStore:
    """CRUD and search over sweets, bound to one session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _newest_first(stmt):
        return stmt.order_by(Sweet.created_at.desc(), Sweet.id.desc())

    async def create(self, name: Any, category: Any, price: Any, quantity: Any) -> Sweet:
        values = validate_sweet_fields(
            {"name": name, "category": category, "price": price, "quantity": quantity}
        ).raise_for_errors()

        sweet = Sweet(**values)
        self.session.add(sweet)
        await self.session.commit()
        await self.session.refresh(sweet)
        logger.info("Created sweet id=%s name=%r", sweet.id, sweet.name)
        return sweet

    async def get(self, sweet_id: int) -> Sweet:
        sweet = await self.session.get(Sweet, sweet_id)
        if sweet is None:
            raise NotFoundError("Sweet not found")
        return sweet

    async def list(self) -> Sequence[Sweet]:
        res = await self.session.execute(self._newest_first(select(Sweet)))
        return res.scalars().all()

    async def search(
        self,
        name: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
    ) -> List[Sweet]:
        """
        Filter sweets. Every filter is optional and they combine with AND.

        - name: case-insensitive substring; `%` and `_` match literally.
        - category: exact match.
        - min_price / max_price: inclusive bounds.
        """
        stmt = select(Sweet)
        if name:
            stmt = stmt.where(Sweet.name.icontains(name, autoescape=True))
        if category:
            stmt = stmt.where(Sweet.category == category)
        if min_price is not None:
            stmt = stmt.where(Sweet.price >= min_price)
        if max_price is not None:
            stmt = stmt.where(Sweet.price <= max_price)

        res = await self.session.execute(self._newest_first(stmt))
        return list(res.scalars().all())

    async def update(self, sweet_id: int, fields: Mapping[str, Any]) -> Sweet:
        values = validate_sweet_fields(fields, partial=True).raise_for_errors()
        sweet = await self.get(sweet_id)

        for key, value in values.items():
            setattr(sweet, key, value)
        await self.session.commit()
        await self.session.refresh(sweet)
        logger.info("Updated sweet id=%s fields=%s", sweet.id, sorted(values))
        return sweet

    async def delete(self, sweet_id: int) -> Sweet:
        sweet = await self.get(sweet_id)
        await self.session.delete(sweet)
        await self.session.commit()
        logger.info("Deleted sweet id=%s", sweet_id)
        return sweet
