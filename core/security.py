# core/security.py
"""
Security utilities for password hashing and session token management.
"""
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import JWTError, jwt

from core.errors import InvalidInput

# JWT configuration
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60
TOKEN_TYPE = "access"

# bcrypt only looks at the first 72 bytes of the input
BCRYPT_MAX_BYTES = 72

DEV_SECRET_KEY = "dev-secret-key-change-in-production-abc123xyz"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InvalidToken(Exception):
    """Raised when a session token fails verification for any reason."""
    pass


class PasswordHasher:
    """Salted one-way hashing of account passwords (bcrypt)."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        # Built up front so every unknown-email login costs exactly one verify
        self._dummy_hash = self.hash(secrets.token_urlsafe(16))

    def hash(self, password: str) -> str:
        """Hash a password for storage. Each call uses a fresh salt."""
        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_BYTES:
            raise InvalidInput("Password is too long")
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(encoded, salt).decode("utf-8")

    def verify(self, password: str, hashed_password: str) -> bool:
        """Verify a password against its hash. Returns False on any mismatch."""
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                hashed_password.encode("utf-8"),
            )
        except ValueError:
            # Malformed digest or over-long password
            return False

    def dummy_verify(self, password: str) -> bool:
        """
        Run a full comparison against a throwaway hash.

        Used when no account matches, so a failed login costs the same
        whether or not the email is registered.
        """
        self.verify(password, self._dummy_hash)
        return False


class TokenCodec:
    """
    Signs and verifies session tokens (HS256 JWT).

    Tokens are stateless: nothing is stored server side, and a token is only
    trusted when its signature matches and it has not yet expired.
    """

    def __init__(
        self,
        secret_key: str,
        ttl: timedelta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
        clock: Callable[[], datetime] = utcnow,
    ):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._secret_key = secret_key
        self.ttl = ttl
        self._clock = clock

    def issue(self, claims: dict[str, Any], ttl: timedelta | None = None) -> str:
        """
        Create a signed token.

        Args:
            claims: Identity claims to embed (sub, email, role)
            ttl: Optional custom lifetime, defaults to the codec's ttl

        Returns:
            Encoded token string
        """
        issued_at = self._clock()
        expire = issued_at + (ttl if ttl is not None else self.ttl)

        to_encode = claims.copy()
        to_encode.update({
            "iat": int(issued_at.timestamp()),
            "exp": int(expire.timestamp()),
            "type": TOKEN_TYPE,
        })
        return jwt.encode(to_encode, self._secret_key, algorithm=ALGORITHM)

    def verify(self, token: str) -> dict[str, Any]:
        """
        Decode and validate a token.

        Raises:
            InvalidToken: bad signature, malformed token, wrong type, or expired
        """
        try:
            # Expiry is checked below against the injected clock
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[ALGORITHM],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            raise InvalidToken("Signature verification failed") from exc

        if payload.get("type") != TOKEN_TYPE:
            raise InvalidToken("Invalid token type")

        exp = payload.get("exp")
        if not isinstance(exp, (int, float)):
            raise InvalidToken("Missing expiry")
        if self._clock().timestamp() >= exp:
            raise InvalidToken("Token expired")

        return payload
