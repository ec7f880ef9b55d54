"""Typed failures raised by the service layer.

Services raise these instead of ``HTTPException``; the handlers in
``src.api.error_handlers`` map each one to its status code and a safe
message. ``InternalError`` messages never carry persistence details, which
are logged server-side only.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class MenuAPIError(Exception):
    """Base class for every expected failure of a core operation."""

    code = "ERROR"
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        """Convert to the JSON body returned to clients."""
        return {"detail": self.message, "code": self.code}


class ValidationError(MenuAPIError):
    """Malformed or missing input."""

    code = "VALIDATION_ERROR"
    http_status = status.HTTP_400_BAD_REQUEST


class InvalidIdError(MenuAPIError):
    """Identifier is not a well-formed record key."""

    code = "INVALID_ID"
    http_status = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(MenuAPIError):
    """Missing bearer token or shared secret."""

    code = "UNAUTHORIZED"
    http_status = status.HTTP_401_UNAUTHORIZED


class InvalidTokenError(UnauthorizedError):
    """Bearer token failed verification."""

    code = "INVALID_TOKEN"

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class InvalidCredentialsError(UnauthorizedError):
    """Unknown email or wrong password; the two are indistinguishable."""

    code = "INVALID_CREDENTIALS"

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class ForbiddenError(MenuAPIError):
    """Authenticated caller does not own the record."""

    code = "FORBIDDEN"
    http_status = status.HTTP_403_FORBIDDEN


class NotFoundError(MenuAPIError):
    code = "NOT_FOUND"
    http_status = status.HTTP_404_NOT_FOUND


class DuplicateEmailError(MenuAPIError):
    code = "DUPLICATE_EMAIL"
    http_status = status.HTTP_409_CONFLICT

    def __init__(self, message: str = "Email is already registered"):
        super().__init__(message)


class InternalError(MenuAPIError):
    code = "INTERNAL_ERROR"
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR


@contextmanager
def persistence_errors(db: Session, message: str) -> Iterator[None]:
    """Reclassify database failures raised inside the block as InternalError."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"{message}: {e}")
        raise InternalError(message) from e
