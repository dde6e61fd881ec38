"""Pydantic request/response schemas."""

from emilyloja.schemas.auth import (
    CurrentUserResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserPublic,
)
from emilyloja.schemas.catalog import OrderCreate, OrderCreatedResponse, OrderOut, ProductOut
from emilyloja.schemas.errors import ErrorResponse
from emilyloja.schemas.health import HealthResponse

__all__ = [
    "CurrentUserResponse",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "OrderCreate",
    "OrderCreatedResponse",
    "OrderOut",
    "ProductOut",
    "RegisterRequest",
    "RegisterResponse",
    "UserPublic",
]
