# core/cookies.py
"""Session cookie transport."""
from fastapi import Response

from config import CommonSettings

SESSION_COOKIE_NAME = "token"


def set_session_cookie(response: Response, token: str, settings: CommonSettings) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
    )


def clear_session_cookie(response: Response, settings: CommonSettings) -> None:
    # Attributes must match the ones used when setting it
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
    )
