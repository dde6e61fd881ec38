"""SQLAlchemy ORM models."""

from emilyloja.models.base import Base
from emilyloja.models.order import Order
from emilyloja.models.product import Product
from emilyloja.models.user import User

__all__ = ["Base", "Order", "Product", "User"]
