"""ORM model for registered customers."""

from sqlalchemy import Column, DateTime, Integer, Text, func

from emilyloja.models.base import Base


class User(Base):
    """
    Customer account used for registration and login.

    Column names follow the existing Portuguese schema; email is stored
    lowercase and the unique index is the authoritative duplicate guard.
    """

    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column("nome", Text, nullable=False)
    email = Column(Text, nullable=False, unique=True, index=True)
    password_hash = Column("senha", Text, nullable=False)
    created_at = Column(
        "criado_em",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
