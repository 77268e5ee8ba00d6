"""Caller identity and role checks.

Tokens are issued by the identity service; this module only verifies them and
turns the claims into a :class:`Principal`.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from uuid import UUID

import jwt
from fastapi import Depends, Request

from healthcare_platform.core.config import settings
from healthcare_platform.core.exceptions import AuthenticationError, UnauthorizedError


class Role(str, Enum):
    SYSTEM_ADMIN = "system_admin"
    ORGANIZATION_ADMIN = "organization_admin"
    DEPARTMENT_HEAD = "department_head"
    MEDICAL_DOCTOR = "medical_doctor"
    NURSE = "nurse"
    RECEPTIONIST = "receptionist"
    TECHNICIAN = "technician"
    PATIENT = "patient"


ADMINS = (Role.SYSTEM_ADMIN, Role.ORGANIZATION_ADMIN)
CLINICAL_STAFF = (
    Role.DEPARTMENT_HEAD,
    Role.MEDICAL_DOCTOR,
    Role.NURSE,
    Role.RECEPTIONIST,
    Role.TECHNICIAN,
)


@dataclass(frozen=True)
class Principal:
    id: UUID
    role: Role
    organization_id: UUID | None = None

    @property
    def is_system_admin(self) -> bool:
        return self.role is Role.SYSTEM_ADMIN


def decode_token(token: str) -> Principal:
    """Verify a bearer token and build the principal from its claims.

    Raises jwt.InvalidTokenError (or a subclass) on bad signature, expiry or
    malformed claims.
    """
    options = {"require": ["sub", "role"]}
    if settings.JWT_ISSUER:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            issuer=settings.JWT_ISSUER,
            options=options,
        )
    else:
        payload = jwt.decode(
            token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM], options=options
        )
    try:
        org = payload.get("organization_id")
        return Principal(
            id=UUID(str(payload["sub"])),
            role=Role(payload["role"]),
            organization_id=UUID(str(org)) if org else None,
        )
    except (KeyError, ValueError) as exc:
        raise jwt.InvalidTokenError("Malformed token claims") from exc


def get_current_principal(request: Request) -> Principal:
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise AuthenticationError()
    if not auth_header.startswith("Bearer "):
        raise AuthenticationError("Invalid authorization header format")

    token = auth_header[7:]
    if not token:
        raise AuthenticationError("Bearer token is required")
    try:
        return decode_token(token)
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired") from None
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token") from None


def require_roles(*roles: Role) -> Callable[..., Principal]:
    """Dependency factory admitting only the given roles."""
    allowed = frozenset(roles)

    def dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role not in allowed:
            raise UnauthorizedError("perform this operation", role=principal.role.value)
        if not principal.is_system_admin and principal.organization_id is None:
            raise UnauthorizedError("act without an organization", role=principal.role.value)
        return principal

    return dependency


def organization_scope(principal: Principal, requested: UUID | None = None) -> UUID | None:
    """Organization a request is confined to.

    System admins see every tenant (optionally narrowed by ``requested``);
    everyone else is pinned to their own organization.
    """
    if principal.is_system_admin:
        return requested
    if requested is not None and requested != principal.organization_id:
        raise UnauthorizedError("access another organization")
    return principal.organization_id


def ensure_organization_access(principal: Principal, organization_id: UUID | None) -> None:
    """Writes naming a tenant must name the caller's own; only system admins may name none."""
    if not principal.is_system_admin and organization_id != principal.organization_id:
        raise UnauthorizedError("access another organization")
