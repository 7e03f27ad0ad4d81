from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine

# Import models so their tables are registered on Base.metadata
from app.auth.models import User, UserSession  # noqa: F401
from app.core import models  # noqa: F401
from app.db.session import Base, engine as default_engine


async def init_db(engine: Optional[AsyncEngine] = None) -> None:
    """Create all tables that do not exist yet."""
    async with (engine or default_engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
