"""Schemas for products and orders."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ProductOut(BaseModel):
    id: int
    nome: str
    descricao: str | None = None
    preco: float
    criado_em: datetime | None = None


class OrderCreate(BaseModel):
    """Order body: who is buying, the line items and the order total."""

    usuario_id: int | None = Field(default=None, description="Buyer id")
    itens: list[dict[str, Any]] | None = Field(default=None, description="Line items")
    total: float | None = Field(default=None, description="Order total")


class OrderOut(BaseModel):
    id: int
    usuario_id: int
    itens: list[dict[str, Any]]
    total: float
    criado_em: datetime | None = None


class OrderCreatedResponse(BaseModel):
    mensagem: str = "Pedido criado!"
    pedido: OrderOut
