"""Registration, login and current-user endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from emilyloja.api.dependencies import get_app_settings, get_current_user
from emilyloja.core.config import Settings
from emilyloja.core.database import get_db
from emilyloja.core.errors import AuthenticationError, InvalidCredentialsError, NotFoundError
from emilyloja.core.security import create_access_token
from emilyloja.models.user import User
from emilyloja.schemas.auth import (
    CurrentUserResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from emilyloja.schemas.errors import ErrorResponse
from emilyloja.services import credentials

logger = logging.getLogger(__name__)
router = APIRouter()

GENERIC_LOGIN_FAILURE = "E-mail ou senha inválidos."


@router.post(
    "/cadastrar",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> RegisterResponse:
    """Create a customer account. Returns the user without the password hash."""
    user = credentials.register(db, body.nome, body.email, body.senha)
    return RegisterResponse(usuario=user)


@router.post(
    "/login",
    response_model=LoginResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> LoginResponse:
    """
    Authenticate with e-mail and password.

    When token issuance is enabled the response also carries a JWT; send it as
    Authorization: Bearer <token>.
    """
    try:
        user = credentials.login(db, body.email, body.senha)
    except (NotFoundError, InvalidCredentialsError) as e:
        logger.info("Login failed: %s", type(e).__name__)
        if settings.AUTH_GENERIC_ERRORS:
            raise AuthenticationError(GENERIC_LOGIN_FAILURE, cause=e) from e
        raise
    token = create_access_token(user.id, settings) if settings.AUTH_TOKENS_ENABLED else None
    return LoginResponse(usuario=user, token=token)


@router.get(
    "/me",
    response_model=CurrentUserResponse,
    responses={401: {"model": ErrorResponse}},
)
def me(current_user: Annotated[User, Depends(get_current_user)]) -> CurrentUserResponse:
    """Return the user identified by the bearer token."""
    return CurrentUserResponse(usuario=credentials.to_public(current_user))
