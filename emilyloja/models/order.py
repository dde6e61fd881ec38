"""ORM model for customer orders."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, Numeric, func

from emilyloja.models.base import Base


class Order(Base):
    """
    One order placed by a customer.

    items is the list of line items exactly as submitted (JSON).
    """

    __tablename__ = "pedidos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        "usuario_id",
        Integer,
        ForeignKey("usuarios.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    items = Column("itens", JSON, nullable=False)
    total = Column(Numeric(10, 2), nullable=False)
    created_at = Column(
        "criado_em",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
