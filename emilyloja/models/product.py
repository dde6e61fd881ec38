"""ORM model for catalog products."""

from sqlalchemy import Column, DateTime, Integer, Numeric, Text, func

from emilyloja.models.base import Base


class Product(Base):
    __tablename__ = "produtos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column("nome", Text, nullable=False)
    description = Column("descricao", Text, nullable=True)
    price = Column("preco", Numeric(10, 2), nullable=False)
    created_at = Column(
        "criado_em",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
