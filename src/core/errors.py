"""Uniform application error type and store-error classification.

Every service function raises :class:`ApiError` (or a subclass) so views,
tasks and the DRF exception handler deal with a single error shape:
a user-facing ``message``, a machine ``code`` and optional ``details``.
"""
from __future__ import annotations

import functools
import logging

from django.core.exceptions import ObjectDoesNotExist
from django.db import DatabaseError, IntegrityError

logger = logging.getLogger("investdesk")

UNKNOWN_ERROR_MESSAGE = "Une erreur inattendue s'est produite. Veuillez reessayer."

# PostgreSQL SQLSTATE -> user-facing message.
ERROR_MESSAGES = {
    "23505": "Cet enregistrement existe deja.",
    "23503": "Impossible de supprimer cet enregistrement : il est utilise ailleurs.",
    "23502": "Un champ obligatoire est manquant.",
    "23514": "Une valeur saisie est invalide.",
    "42501": "Vous n'avez pas l'autorisation d'effectuer cette operation.",
    "42P01": "Table introuvable.",
    "22P02": "Type de donnee invalide.",
    "22003": "Valeur hors limites.",
}

INSUFFICIENT_PRIVILEGE = "42501"

# SQLite reports constraint failures only through the message text.
_SQLITE_MESSAGE_CODES = (
    ("UNIQUE constraint failed", "23505"),
    ("FOREIGN KEY constraint failed", "23503"),
    ("NOT NULL constraint failed", "23502"),
    ("CHECK constraint failed", "23514"),
)


class ApiError(Exception):
    """Application error carrying a user-facing message and a machine code."""

    status_code = 400

    def __init__(self, message, code=None, details=None, status_code=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def __repr__(self):
        return f"{type(self).__name__}(message={self.message!r}, code={self.code!r})"

    def as_dict(self) -> dict:
        return {"detail": self.message, "code": self.code, "details": self.details}

    @classmethod
    def from_database_error(cls, exc: DatabaseError) -> "ApiError":
        """Classify a database exception into an ApiError with a localized message."""
        code = sqlstate_for(exc)
        message = ERROR_MESSAGES.get(code, UNKNOWN_ERROR_MESSAGE)
        status_code = 409 if isinstance(exc, IntegrityError) else 503
        if code == INSUFFICIENT_PRIVILEGE:
            status_code = 403
        return cls(message, code=code or "UNKNOWN_ERROR", details=str(exc), status_code=status_code)


class NotFoundError(ApiError):
    """Zero rows returned where exactly one was expected."""

    status_code = 404

    def __init__(self, message="Aucune donnee trouvee.", details=None):
        super().__init__(message, code="NOT_FOUND", details=details)


class InvalidTransitionError(ApiError):
    """Status change not allowed from the record's current status."""

    status_code = 409

    def __init__(self, message, details=None):
        super().__init__(message, code="INVALID_TRANSITION", details=details)


def sqlstate_for(exc: BaseException) -> str | None:
    """Return the SQLSTATE behind a Django database error, if one is known."""
    cause = exc.__cause__
    for attr in ("sqlstate", "pgcode"):
        value = getattr(cause, attr, None)
        if value:
            return value
    text = str(exc)
    for fragment, code in _SQLITE_MESSAGE_CODES:
        if fragment in text:
            return code
    return None


def handle_api_error(exc: BaseException) -> str:
    """Return the message to show the user for any exception."""
    if isinstance(exc, ApiError):
        return exc.message
    if isinstance(exc, DatabaseError):
        return ERROR_MESSAGES.get(sqlstate_for(exc), UNKNOWN_ERROR_MESSAGE)
    return UNKNOWN_ERROR_MESSAGE


def store_operation(fallback_message: str):
    """Rewrap anything a service raises into :class:`ApiError`.

    ``ApiError`` passes through untouched; database errors are classified
    by SQLSTATE; missing rows become :class:`NotFoundError`; everything else
    becomes ``ApiError(fallback_message, "UNKNOWN_ERROR")``. The original
    exception is chained and logged, never retried.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except ApiError:
                raise
            except ObjectDoesNotExist as exc:
                raise NotFoundError(details=str(exc)) from exc
            except DatabaseError as exc:
                logger.error("%s failed: %s", func.__qualname__, exc)
                raise ApiError.from_database_error(exc) from exc
            except Exception as exc:
                logger.exception("%s failed", func.__qualname__)
                raise ApiError(fallback_message, code="UNKNOWN_ERROR", details=str(exc)) from exc

        return wrapper

    return decorator
