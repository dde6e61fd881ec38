"""Error taxonomy shared by services and the HTTP layer.

Every error carries a client-facing message (in Portuguese, like the rest of
the API) and the HTTP status the exception handler answers with.
"""


class LojaError(Exception):
    """Base class for errors that map to a structured JSON response."""

    status_code = 500

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class ValidationError(LojaError):
    """Missing or empty input fields."""

    status_code = 400


class DuplicateEmailError(LojaError):
    """Email already registered (pre-check or unique constraint)."""

    status_code = 400

    def __init__(self, message: str = "E-mail já cadastrado.", cause: Exception | None = None) -> None:
        super().__init__(message, cause)


class NotFoundError(LojaError):
    """Requested record does not exist."""

    status_code = 401


class InvalidCredentialsError(LojaError):
    """Password does not match the stored hash."""

    status_code = 401

    def __init__(self, message: str = "Senha incorreta.", cause: Exception | None = None) -> None:
        super().__init__(message, cause)


class AuthenticationError(LojaError):
    """Missing, invalid or expired token, or a generic login failure."""

    status_code = 401


class DatabaseConnectionError(LojaError):
    """Database unreachable at startup after the retry budget (or host resolution aborted)."""

    status_code = 503


class UnexpectedError(LojaError):
    """Any other store or runtime failure."""

    status_code = 500

    def __init__(self, message: str = "Erro no servidor", cause: Exception | None = None) -> None:
        super().__init__(message, cause)
