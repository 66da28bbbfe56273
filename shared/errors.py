"""
Shared error handling for the Catalog Gateway services.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


ROUTE_NOT_FOUND = "Rota não encontrada"
INVALID_PARAMETERS = "Parâmetros inválidos"


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str
    details: Optional[Any] = None


class GatewayException(Exception):
    """Base exception for Catalog Gateway services."""

    status_code: int = 400

    def __init__(self, code: str, message: str, details: Optional[Any] = None):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(error=self.message, details=self.details)

    def to_content(self) -> Dict[str, Any]:
        """Render the JSON body sent to clients, omitting empty details."""
        return self.to_response().model_dump(exclude_none=True)


class AuthenticationError(GatewayException):
    """No usable credential was presented."""

    status_code = 401

    def __init__(self, message: str = "Token de acesso necessário", details: Optional[Any] = None):
        super().__init__("AUTHENTICATION_ERROR", message, details)


class InvalidTokenError(GatewayException):
    """A credential was presented but is malformed, forged or expired."""

    status_code = 403

    def __init__(self, message: str = "Token inválido", details: Optional[Any] = None):
        super().__init__("INVALID_TOKEN", message, details)


class AuthorizationError(GatewayException):
    """Authenticated principal lacks the role required for the operation."""

    status_code = 403

    def __init__(self, message: str = "Acesso negado", details: Optional[Any] = None):
        super().__init__("AUTHORIZATION_ERROR", message, details)


class NotFoundError(GatewayException):
    """Requested resource does not exist upstream."""

    status_code = 404

    def __init__(self, message: str = "Recurso não encontrado", details: Optional[Any] = None):
        super().__init__("NOT_FOUND", message, details)


class UpstreamUnavailableError(GatewayException):
    """Upstream dependency timed out or failed at the transport level."""

    status_code = 500

    def __init__(self, service: str, message: str = "Erro ao buscar dados da API externa", details: Optional[Any] = None):
        self.service = service
        super().__init__("UPSTREAM_UNAVAILABLE", message, details)


class InternalError(GatewayException):
    """Unexpected failure; never exposes internal detail to clients."""

    status_code = 500

    def __init__(self, message: str = "Erro interno do servidor"):
        super().__init__("INTERNAL_ERROR", message, None)
