"""Database URL helpers shared by the settings classes, the app and Alembic"""
from urllib.parse import quote_plus

ASYNC_DRIVERS = {
    "postgresql": "postgresql+asyncpg",
    "postgres": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
}


def get_database_url(
    driver: str,
    host: str | None,
    port: int,
    user: str | None,
    password: str | None,
    name: str | None,
) -> str:
    """
    Construct database URL from components.

    User and password are percent-escaped so credentials containing ``@`` or
    ``/`` survive. Raises ValueError when host, user or name is missing.

    Example:
        >>> get_database_url("postgresql+asyncpg", "db", 5432, "app", "p@ss", "garments")
        'postgresql+asyncpg://app:p%40ss@db:5432/garments'
    """
    missing = [label for label, value in (("DB_HOST", host), ("DB_USER", user), ("DB_NAME", name)) if not value]
    if missing:
        raise ValueError(f"Database settings missing: {', '.join(missing)}")

    credentials = quote_plus(user)
    if password:
        credentials += f":{quote_plus(password)}"
    return f"{driver}://{credentials}@{host}:{port}/{name}"


def to_async_url(url: str) -> str:
    """Swap a bare ``postgresql://`` or ``sqlite://`` scheme for its async driver."""
    scheme, sep, rest = url.partition("://")
    if not sep or "+" in scheme:
        return url
    return f"{ASYNC_DRIVERS.get(scheme, scheme)}://{rest}"
