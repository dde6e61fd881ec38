"""Credential manager: customer registration and login against the users table."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from emilyloja.core.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from emilyloja.core.security import hash_password, verify_password
from emilyloja.models.user import User
from emilyloja.schemas.auth import UserPublic

logger = logging.getLogger(__name__)

MISSING_REGISTER_FIELDS = "Preencha todos os campos!"
MISSING_LOGIN_FIELDS = "Preencha e-mail e senha!"
USER_NOT_FOUND = "Usuário não encontrado."


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _present(value: str | None) -> bool:
    return value is not None and bool(value.strip())


def to_public(user: User, include_created_at: bool = True) -> UserPublic:
    """Public projection of a user; the password hash never leaves this module."""
    return UserPublic(
        id=user.id,
        nome=user.name,
        email=user.email,
        criado_em=user.created_at if include_created_at else None,
    )


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def get_user_by_id(db: Session, user_id: int) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def register(db: Session, name: str | None, email: str | None, password: str | None) -> UserPublic:
    """
    Register a customer and return the public projection.

    Raises ValidationError when a field is missing or blank and
    DuplicateEmailError when the (lowercased) email is taken. The unique index
    is the real guard: a concurrent insert that passes the pre-check still
    ends as DuplicateEmailError.
    """
    if not (_present(name) and _present(email) and _present(password)):
        raise ValidationError(MISSING_REGISTER_FIELDS)

    email_norm = normalize_email(email)
    if get_user_by_email(db, email_norm) is not None:
        raise DuplicateEmailError()

    user = User(name=name.strip(), email=email_norm, password_hash=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("Registration rejected by unique constraint for %s", email_norm)
        raise DuplicateEmailError(cause=e) from e
    db.refresh(user)
    logger.info("Registered user id=%s", user.id)
    return to_public(user)


def login(db: Session, email: str | None, password: str | None) -> UserPublic:
    """
    Verify credentials and return the public projection (without created_at).

    Raises ValidationError for missing fields, NotFoundError for an unknown
    email and InvalidCredentialsError for a wrong password.
    """
    if not (_present(email) and password):
        raise ValidationError(MISSING_LOGIN_FIELDS)

    user = get_user_by_email(db, email)
    if user is None:
        raise NotFoundError(USER_NOT_FOUND)
    if not verify_password(password, user.password_hash):
        raise InvalidCredentialsError()
    return to_public(user, include_created_at=False)
