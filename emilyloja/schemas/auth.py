"""Request/response schemas for registration and login."""

from datetime import datetime

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Registration body. Presence is checked by the credential service, not here."""

    nome: str | None = Field(default=None, description="Display name")
    email: str | None = Field(default=None, description="E-mail (stored lowercase)")
    senha: str | None = Field(default=None, description="Plain-text password")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str | None = Field(default=None, description="E-mail")
    senha: str | None = Field(default=None, description="Plain-text password")


class UserPublic(BaseModel):
    """Public projection of a user (never includes the password hash)."""

    id: int
    nome: str
    email: str
    criado_em: datetime | None = None


class RegisterResponse(BaseModel):
    usuario: UserPublic


class LoginResponse(BaseModel):
    """Login result; token is present when token issuance is enabled."""

    usuario: UserPublic
    token: str | None = Field(default=None, description="JWT (expires in JWT_EXPIRE_MINUTES)")


class CurrentUserResponse(BaseModel):
    usuario: UserPublic
