# core/context.py
"""
Application context.

Holds the long-lived resources every request shares: the database engine and
session factory, the password hasher and the session token codec. One context
is built at startup, stored on ``app.state.context`` and disposed at shutdown.
"""
from dataclasses import dataclass
from datetime import timedelta

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from config import CommonSettings
from core.logging_config import get_logger
from core.security import DEV_SECRET_KEY, PasswordHasher, TokenCodec
from db import build_engine, build_session_factory

logger = get_logger("context")


@dataclass
class AppContext:
    settings: CommonSettings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    hasher: PasswordHasher
    tokens: TokenCodec

    @classmethod
    def from_settings(cls, settings: CommonSettings) -> "AppContext":
        database_url = settings.database_url
        if not database_url:
            raise RuntimeError("DATABASE_URL is not configured")

        engine = build_engine(database_url, echo=settings.DEBUG)
        return cls(
            settings=settings,
            engine=engine,
            session_factory=build_session_factory(engine),
            hasher=PasswordHasher(rounds=settings.BCRYPT_ROUNDS),
            tokens=TokenCodec(
                _secret_key_for(settings),
                ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            ),
        )

    async def dispose(self) -> None:
        await self.engine.dispose()


def _secret_key_for(settings: CommonSettings) -> str:
    if settings.SECRET_KEY:
        return settings.SECRET_KEY
    if settings.APP_ENV in ("production", "prod"):
        raise RuntimeError("SECRET_KEY must be set in production")
    # Development fallback - NOT for production!
    logger.warning("SECRET_KEY not set, using the development signing key")
    return DEV_SECRET_KEY


def get_context(request: Request) -> AppContext:
    return request.app.state.context
