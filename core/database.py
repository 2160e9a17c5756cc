# core/database.py

from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import NullPool

from .config import get_settings

# ==========================================================
# ✅ ENGINE CREATION
# ==========================================================
settings = get_settings()

engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,  # True = log SQL
    future=True,
    pool_pre_ping=True,
    poolclass=NullPool,  # one connection per session, nothing shared across event loops
)

# ==========================================================
# ✅ SESSION FACTORY
# ==========================================================
AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
)

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp; every DateTime column in this app stores naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# ==========================================================
# ✅ FASTAPI DEPENDENCY
# ==========================================================
async def get_db():
    """Yields a database session for FastAPI routes."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


# ==========================================================
# ✅ CREATE / DROP TABLES
# ==========================================================
def _import_models():
    # Registers every table on Base.metadata.
    import users.models  # noqa: F401
    import social.models  # noqa: F401
    import content.models  # noqa: F401
    import rewards.models  # noqa: F401
    import campaign.models  # noqa: F401


async def create_tables():
    _import_models()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables():
    _import_models()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
