"""Product listing and order placement."""

import logging
import math
from typing import Any

from sqlalchemy.orm import Session

from emilyloja.core.errors import LojaError, ValidationError
from emilyloja.models import Order, Product
from emilyloja.schemas.catalog import OrderOut, ProductOut
from emilyloja.services.credentials import get_user_by_id

logger = logging.getLogger(__name__)

# Largest value the Numeric(10, 2) total column holds.
MAX_ORDER_TOTAL = 99_999_999.99


class BuyerNotFoundError(LojaError):
    """Order references a user that does not exist."""

    status_code = 404


def _product_out(p: Product) -> ProductOut:
    return ProductOut(
        id=p.id,
        nome=p.name,
        descricao=p.description,
        preco=p.price,
        criado_em=p.created_at,
    )


def _order_out(o: Order) -> OrderOut:
    return OrderOut(
        id=o.id,
        usuario_id=o.user_id,
        itens=o.items,
        total=o.total,
        criado_em=o.created_at,
    )


def list_products(db: Session) -> list[ProductOut]:
    return [_product_out(p) for p in db.query(Product).order_by(Product.id).all()]


def create_order(
    db: Session,
    user_id: int | None,
    items: list[dict[str, Any]] | None,
    total: float | None,
) -> OrderOut:
    """Persist an order for an existing user. Items must be non-empty and 0 <= total <= MAX_ORDER_TOTAL."""
    if user_id is None or not items or total is None:
        raise ValidationError("Informe usuario_id, itens e total!")
    if not math.isfinite(total):
        raise ValidationError("O total do pedido deve ser um número válido.")
    if total < 0:
        raise ValidationError("O total do pedido não pode ser negativo.")
    if total > MAX_ORDER_TOTAL:
        raise ValidationError("O total do pedido excede o valor máximo permitido.")
    if get_user_by_id(db, user_id) is None:
        raise BuyerNotFoundError("Usuário não encontrado.")

    order = Order(user_id=user_id, items=items, total=total)
    db.add(order)
    db.commit()
    db.refresh(order)
    logger.info("Order id=%s created for user id=%s (%d items)", order.id, user_id, len(items))
    return _order_out(order)


def list_orders(db: Session, user_id: int) -> list[OrderOut]:
    orders = db.query(Order).filter(Order.user_id == user_id).order_by(Order.id).all()
    return [_order_out(o) for o in orders]
