import asyncio
import sys
from pathlib import Path

"""
Seed the sample sweets into the configured database.

Skips seeding when the sweets table already has rows. Reads DATABASE_URL from
the environment / .env like the API does.

  python backend/scripts/seed_sweets.py
"""

# Allow running from repo root by ensuring `backend/` is on sys.path
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from core.config import Settings  # noqa: E402
from core.logging_config import configure_logging  # noqa: E402
from db.database import Database  # noqa: E402
from db.seed import seed_sweets  # noqa: E402


async def main() -> int:
    settings = Settings()
    configure_logging(settings.log_level)

    db = Database(settings.database_url, echo=settings.database_echo)
    try:
        await db.create_all()
        async with db.session() as session:
            return await seed_sweets(session)
    finally:
        await db.dispose()


if __name__ == "__main__":
    added = asyncio.run(main())
    print(f"Added {added} sweets")
