# api/users/db_manager.py
"""
Credential store: user accounts, login verification and admin account actions.
"""
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import DuplicateAccount, Forbidden, InvalidInput, NotFound, Unauthenticated
from core.logging_config import get_logger
from core.security import PasswordHasher
from db_models.user import User, UserRole, UserStatus
from . import queries

logger = get_logger("users")

# Admin accounts are never self-registered
REGISTRABLE_ROLES = (UserRole.BUYER.value, UserRole.MANAGER.value)

INVALID_CREDENTIALS = "Invalid credentials"


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def find_by_email(db: AsyncSession, email: str) -> User | None:
    """Return the user for ``email`` (case-insensitive), or None."""
    stmt = queries.select_user_by_email(normalize_email(email))
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_user_by_id(db: AsyncSession, user_id: int) -> User:
    """Get a user by ID. Raises NotFound if missing."""
    result = await db.execute(queries.select_user_by_id(user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFound("User not found")
    return user


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(queries.select_all_users())
    return list(result.scalars().all())


async def register(
    db: AsyncSession,
    hasher: PasswordHasher,
    *,
    name: str,
    email: str,
    password: str,
    role: str,
) -> int:
    """
    Create a new active account and return its id.

    Raises:
        InvalidInput: role cannot be self-registered, or name is blank
        DuplicateAccount: an account with the same normalized email exists
    """
    if role not in REGISTRABLE_ROLES:
        raise InvalidInput(f"Role must be one of: {list(REGISTRABLE_ROLES)}")
    if not name.strip():
        raise InvalidInput("Name is required")

    email = normalize_email(email)
    if await find_by_email(db, email) is not None:
        raise DuplicateAccount()

    user = User(
        name=name.strip(),
        email=email,
        hashed_password=hasher.hash(password),
        role=role,
        status=UserStatus.ACTIVE.value,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as exc:
        # Lost a race against a concurrent registration for the same email
        await db.rollback()
        raise DuplicateAccount() from exc

    logger.info(f"Registered user {user.id} with role {role}")
    return user.id


async def authenticate(
    db: AsyncSession,
    hasher: PasswordHasher,
    email: str,
    password: str,
) -> User:
    """
    Verify login credentials.

    Unknown email and wrong password fail identically. Suspension is only
    reported once the password has been verified.
    """
    user = await find_by_email(db, email)

    if user is None:
        hasher.dummy_verify(password)
        logger.info("Failed login: invalid credentials")
        raise Unauthenticated(INVALID_CREDENTIALS)

    if not hasher.verify(password, user.hashed_password):
        logger.info(f"Failed login for user {user.id}: invalid credentials")
        raise Unauthenticated(INVALID_CREDENTIALS)

    if user.is_suspended():
        logger.info(f"Refused login for suspended user {user.id}")
        raise Forbidden("Account suspended")

    user.last_login_at = datetime.now(timezone.utc)
    await db.commit()
    return user


async def set_role_and_status(
    db: AsyncSession,
    user_id: int,
    *,
    role: str,
    status: str,
    acting_user_id: int | None = None,
) -> User:
    """
    Overwrite a user's role and status. Admin only (enforced by the caller).

    Returning an account to active clears its suspension details.
    """
    if role not in {r.value for r in UserRole}:
        raise InvalidInput(f"Invalid role. Must be one of: {[r.value for r in UserRole]}")
    if status not in {s.value for s in UserStatus}:
        raise InvalidInput(f"Invalid status. Must be one of: {[s.value for s in UserStatus]}")

    user = await get_user_by_id(db, user_id)

    if acting_user_id == user.id and (role != user.role or status != user.status):
        raise InvalidInput("Cannot change your own role or status")

    user.role = role
    user.status = status
    if status == UserStatus.ACTIVE.value:
        user.suspend_reason = None
        user.suspend_feedback = None

    await db.commit()
    await db.refresh(user)

    logger.info(f"User {user.id} set to role={role} status={status}")
    return user


async def suspend(
    db: AsyncSession,
    user_id: int,
    *,
    reason: str,
    feedback: str | None = None,
    acting_user_id: int | None = None,
) -> User:
    """Suspend an account with the given reason and feedback. Admin only."""
    user = await get_user_by_id(db, user_id)

    if acting_user_id == user.id:
        raise InvalidInput("Cannot suspend yourself")

    user.status = UserStatus.SUSPENDED.value
    user.suspend_reason = reason
    user.suspend_feedback = feedback

    await db.commit()
    await db.refresh(user)

    logger.info(f"Suspended user {user.id}")
    return user
