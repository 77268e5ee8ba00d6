"""
Domain errors raised by repositories and routers.

Each error is an HTTPException so FastAPI renders it directly:

    raise NotFoundError("Patient", patient_id)
    raise ConflictError("Billing code is referenced by 3 billing item(s)")
    raise UnauthorizedError("delete organizations")
"""

import logging
from typing import Any

from fastapi import HTTPException, status

logger = logging.getLogger(__name__)


class AppError(HTTPException):
    """Base error that logs itself when raised."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: int = logging.WARNING,
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        logger.log(log_level, "%s (status=%d) %s", detail, status_code, log_context or "")
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class NotFoundError(AppError):
    """Entity id does not resolve to an active (or any) row."""

    def __init__(self, entity: str, entity_id: Any = None, **log_context: Any):
        detail = f"{entity} {entity_id} not found" if entity_id is not None else f"{entity} not found"
        super().__init__(
            status.HTTP_404_NOT_FOUND,
            detail,
            entity=entity,
            **log_context,
        )


class ConflictError(AppError):
    """Uniqueness, dependency or state precondition violated."""

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(status.HTTP_409_CONFLICT, detail, **log_context)


class ValidationError(AppError):
    """Field values that pass schema validation but break a business rule."""

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(status.HTTP_422_UNPROCESSABLE_ENTITY, detail, **log_context)


class AuthenticationError(AppError):
    """No usable caller identity on the request."""

    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(
            status.HTTP_401_UNAUTHORIZED,
            detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class UnauthorizedError(AppError):
    """Caller's principal lacks the role or tenant access for the operation."""

    def __init__(self, action: str, **log_context: Any):
        super().__init__(
            status.HTTP_403_FORBIDDEN,
            f"Not allowed to {action}",
            **log_context,
        )
