# api/users/queries.py
"""
SQLAlchemy query builders for user account operations.
"""
from sqlalchemy import select

from db_models.user import User


def select_user_by_id(user_id: int):
    return select(User).where(User.id == user_id)


def select_user_by_email(email: str):
    """Select a user by already-normalized email."""
    return select(User).where(User.email == email)


def select_all_users():
    """Select all users, newest first."""
    return select(User).order_by(User.created_at.desc(), User.id.desc())
