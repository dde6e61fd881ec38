"""Product listing and order endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from emilyloja.core.database import get_db
from emilyloja.schemas.catalog import OrderCreate, OrderCreatedResponse, OrderOut, ProductOut
from emilyloja.schemas.errors import ErrorResponse
from emilyloja.services import catalog

router = APIRouter()


@router.get("/produtos", response_model=list[ProductOut])
def list_products(db: Annotated[Session, Depends(get_db)]) -> list[ProductOut]:
    return catalog.list_products(db)


@router.post(
    "/pedidos",
    response_model=OrderCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def create_order(
    body: OrderCreate,
    db: Annotated[Session, Depends(get_db)],
) -> OrderCreatedResponse:
    """Place an order for an existing user."""
    order = catalog.create_order(db, body.usuario_id, body.itens, body.total)
    return OrderCreatedResponse(pedido=order)


@router.get("/pedidos/{usuario_id}", response_model=list[OrderOut])
def list_orders(usuario_id: int, db: Annotated[Session, Depends(get_db)]) -> list[OrderOut]:
    """Orders of one user, oldest first."""
    return catalog.list_orders(db, usuario_id)
