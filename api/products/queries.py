# api/products/queries.py
from sqlalchemy import select

from db_models.product import Product


def select_product_by_id(product_id: int):
    return select(Product).where(Product.id == product_id)
