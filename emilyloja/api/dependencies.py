"""Shared FastAPI dependencies: settings and the bearer-token user."""

from typing import Annotated

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from emilyloja.core.config import Settings, get_settings
from emilyloja.core.database import get_db
from emilyloja.core.errors import AuthenticationError
from emilyloja.core.security import decode_access_token
from emilyloja.models.user import User
from emilyloja.services.credentials import get_user_by_id

security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with (falls back to the cached env settings)."""
    return getattr(request.app.state, "settings", None) or get_settings()


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> User:
    """Dependency: require a valid Bearer JWT and return its user. Raises 401 otherwise."""
    if credentials is None:
        raise AuthenticationError("Token não informado.")
    try:
        payload = decode_access_token(credentials.credentials, settings)
    except jwt.PyJWTError as e:
        raise AuthenticationError("Token inválido ou expirado.", cause=e) from e
    try:
        user_id = int(payload["id"])
    except (KeyError, TypeError, ValueError) as e:
        raise AuthenticationError("Token inválido.", cause=e) from e
    user = get_user_by_id(db, user_id)
    if user is None:
        raise AuthenticationError("Usuário não encontrado.")
    return user
