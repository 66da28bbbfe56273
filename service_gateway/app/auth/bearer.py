"""
Bearer token authentication for the Catalog Gateway.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from fastapi import Request

from shared.errors import AuthenticationError, AuthorizationError, InvalidTokenError
from shared.logging import get_logger, set_user_context
from shared.tokens import TokenSigner


class Role(str, Enum):
    """Roles recognised by the gateway."""

    USER = "user"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value: Any) -> "Role":
        """Map a claim value onto a role; anything unrecognised is a plain user."""
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.USER


@dataclass(frozen=True)
class Principal:
    """Authenticated caller derived from a verified bearer token."""

    subject_id: str
    role: Role
    email: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def require_admin(self, message: str) -> None:
        """Raise AuthorizationError unless the principal is an administrator."""
        if not self.is_admin:
            raise AuthorizationError(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the principal for response payloads."""
        payload: Dict[str, Any] = {"id": self.subject_id, "role": self.role.value}
        if self.email is not None:
            payload["email"] = self.email
        return payload


class BearerAuthenticator:
    """Validates HS256 bearer tokens signed with the shared gateway secret."""

    def __init__(self, signer: TokenSigner) -> None:
        self.signer = signer
        self.logger = get_logger("gateway.auth.bearer")

    def authenticate(self, request: Request) -> Principal:
        """Authenticate the incoming request using the Authorization bearer token."""
        authorization = request.headers.get("Authorization")
        if not authorization or not authorization.startswith("Bearer "):
            raise AuthenticationError()

        token = authorization[7:].strip()
        if not token:
            raise AuthenticationError()

        principal = self.validate(token)
        request.state.principal = principal
        return principal

    def validate(self, token: str) -> Principal:
        """Verify ``token`` and build the principal from its claims."""
        try:
            claims = self.signer.decode(token)
        except InvalidTokenError as exc:
            self.logger.warning("Bearer token rejected", reason=exc.details)
            raise

        principal = Principal(
            subject_id=str(claims["sub"]),
            role=Role.parse(claims.get("role")),
            email=claims.get("email") if isinstance(claims.get("email"), str) else None,
        )
        set_user_context(principal.subject_id, principal.role.value)
        return principal
