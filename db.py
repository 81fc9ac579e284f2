# db.py
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)

from config.database import to_async_url
from db_base import Base


# ---------- Engine & Session factories (async) ----------

def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine; bare postgresql:// and sqlite:// URLs get async drivers."""
    return create_async_engine(
        to_async_url(database_url),
        echo=echo,
        future=True,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


# ---------- Optional init helper (for dev and tests) ----------

async def init_db(engine: AsyncEngine) -> None:
    """
    Optional helper to create tables from ORM metadata.

    In production, prefer Alembic migrations.
    """
    # Import models so they are registered on Base.metadata
    import db_models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ---------- FastAPI dependency ----------

async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async DB session from the application context."""
    session_factory = request.app.state.context.session_factory
    async with session_factory() as session:
        yield session
