"""SQL engine for the catalog tables.

The engine and session factory are built from ``settings.database_url``
(SQLite through aiosqlite unless configured otherwise). Units of work
are opened by ``shop.catalog.stores.open_stores``.
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from shop.infrastructure.config import settings

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

Base = declarative_base()


async def create_tables() -> None:
    """Create the categories, products and admins tables if missing."""
    # Model classes register themselves on Base.metadata at import
    import shop.infrastructure.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
