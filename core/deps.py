# core/deps.py
"""
FastAPI dependencies for authentication and authorization.

The guard resolves the caller's identity from the session token and checks it
against the policy table in ``core.policy`` before any handler runs, so a
rejected request never reaches a mutation.
"""
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Path, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from api.users import db_manager as users_db
from core.context import AppContext, get_context
from core.cookies import SESSION_COOKIE_NAME
from core.errors import Forbidden, Unauthenticated
from core.logging_config import get_logger
from core.policy import Operation, policy_for
from core.security import InvalidToken

logger = get_logger("auth")

# Bearer token extraction from the Authorization header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


# Path ids share the range of the INTEGER primary key columns
MAX_ID = 2**31 - 1
EntityId = Annotated[int, Path(ge=1, le=MAX_ID)]


@dataclass(frozen=True)
class Identity:
    """Caller identity, always taken from a verified token."""
    id: int
    email: str
    role: str


def extract_token(request: Request, bearer: str | None) -> str | None:
    """Session cookie first, then the bearer header."""
    return request.cookies.get(SESSION_COOKIE_NAME) or bearer


async def get_identity(
    request: Request,
    bearer: Annotated[str | None, Depends(oauth2_scheme)],
    context: Annotated[AppContext, Depends(get_context)],
) -> Identity:
    """
    Dependency to resolve the current identity from the session token.

    Raises:
        Unauthenticated: token missing, malformed, forged or expired. The
            cause is deliberately not reported to the client.
    """
    token = extract_token(request, bearer)
    if not token:
        raise Unauthenticated()

    try:
        claims = context.tokens.verify(token)
    except InvalidToken as exc:
        logger.debug(f"Rejected session token: {exc}")
        raise Unauthenticated() from exc

    try:
        identity = Identity(
            id=int(claims["sub"]),
            email=str(claims["email"]),
            role=str(claims["role"]),
        )
    except (KeyError, ValueError, TypeError) as exc:
        raise Unauthenticated() from exc

    request.state.identity = identity
    return identity


def authorize(operation: Operation):
    """
    Build a dependency enforcing the policy for ``operation``.

    Role is checked first from the token claims; operations that require an
    active account then re-read the account so a suspension applies to tokens
    that were issued before it.
    """
    policy = policy_for(operation)

    async def dependency(
        identity: Annotated[Identity, Depends(get_identity)],
        db: AsyncSession = Depends(get_session),
    ) -> Identity:
        if not policy.allows_role(identity.role):
            logger.info(f"User {identity.id} ({identity.role}) denied {operation.value}")
            raise Forbidden()

        if policy.require_active:
            user = await users_db.find_by_email(db, identity.email)
            if user is None or user.is_suspended():
                logger.info(f"User {identity.id} denied {operation.value}: account not active")
                raise Forbidden("Account suspended")

        return identity

    dependency.__name__ = f"authorize_{operation.value}"
    return dependency


# Type alias for endpoints that only need an authenticated caller
CurrentIdentity = Annotated[Identity, Depends(get_identity)]
