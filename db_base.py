# db_base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Declarative base for the users, products, orders and order_tracking models.

    No engine or session imports here, so Alembic's env.py and the seed script
    can load the metadata without an async driver installed.
    """
    pass
