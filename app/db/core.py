import logging
from typing import AsyncGenerator
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from app.core.config import settings
from app.db.base import Base
from app.models import ProductRecord  # noqa: F401

logger = logging.getLogger(__name__)


def engine_options(database_url: str) -> dict:
    """Pool settings for server databases; SQLite keeps the driver defaults."""
    if make_url(database_url).get_backend_name() == "sqlite":
        return {}
    return {
        # Pool settings
        "pool_size": 10,
        "max_overflow": 20,
        "pool_timeout": 30,
        # Recycle every hour (prevents stale connections)
        "pool_recycle": 3600,
        "pool_pre_ping": True,
    }


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    return create_async_engine(database_url, echo=echo, **engine_options(database_url))


engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)

async_session_factory = async_sessionmaker(
    bind=engine,
    autoflush=False,
    expire_on_commit=False
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides an async DB session
    and ensures it's closed after the request.
    """
    async with async_session_factory() as session:
        yield session


async def init_db(bind: AsyncEngine = engine) -> None:
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("products schema ready")


async def ping_db(bind: AsyncEngine = engine) -> bool:
    try:
        async with bind.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"database health check failed: {e}", exc_info=True)
        return False
