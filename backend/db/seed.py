"""Sample catalog loaded into an empty sweets table."""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .sweet import Sweet

logger = logging.getLogger(__name__)

SAMPLE_SWEETS = [
    {"name": "Milk Chocolate Bar", "category": "Chocolate", "price": 2.99, "quantity": 100},
    {"name": "Dark Chocolate Truffles", "category": "Chocolate", "price": 5.99, "quantity": 50},
    {"name": "Gummy Bears", "category": "Gummy", "price": 1.99, "quantity": 150},
    {"name": "Sour Gummy Worms", "category": "Gummy", "price": 2.49, "quantity": 80},
    {"name": "Rainbow Lollipops", "category": "Lollipop", "price": 0.99, "quantity": 200},
    {"name": "Cherry Lollipop", "category": "Lollipop", "price": 1.49, "quantity": 120},
    {"name": "Peppermint Candies", "category": "Hard Candy", "price": 1.29, "quantity": 90},
    {"name": "Butterscotch Discs", "category": "Hard Candy", "price": 1.79, "quantity": 75},
    {"name": "English Toffee", "category": "Toffee", "price": 4.99, "quantity": 40},
    {"name": "Caramel Chews", "category": "Caramel", "price": 3.49, "quantity": 60},
    {"name": "Marshmallow Treats", "category": "Other", "price": 2.99, "quantity": 85},
    {"name": "White Chocolate Bark", "category": "Chocolate", "price": 6.99, "quantity": 30},
    {"name": "Fruit Gummies", "category": "Gummy", "price": 2.29, "quantity": 110},
    {"name": "Cola Gummies", "category": "Gummy", "price": 2.49, "quantity": 0},  # out of stock
    {"name": "Jawbreaker", "category": "Hard Candy", "price": 0.79, "quantity": 250},
]


async def seed_sweets(session: AsyncSession) -> int:
    """Insert SAMPLE_SWEETS if the table is empty. Returns how many rows were added."""
    existing = (await session.execute(select(func.count(Sweet.id)))).scalar_one()
    if existing:
        logger.info("Database already contains %s sweets; skipping seed", existing)
        return 0

    session.add_all([Sweet(**row) for row in SAMPLE_SWEETS])
    await session.commit()
    logger.info("Seeded database with %s sweets", len(SAMPLE_SWEETS))
    return len(SAMPLE_SWEETS)
