"""
Auth service for the Catalog Gateway.
"""

from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from shared.base_service import BaseService
from shared.config import ServiceConfig, get_config
from shared.errors import GatewayException
from shared.logging import set_user_context
from shared.tokens import TokenSigner
from .accounts import AccountDirectory
from .validation import LoginRequest, TokenValidator


class AuthService(BaseService):
    """Auth service implementation."""

    def __init__(self, config: Optional[ServiceConfig] = None, directory: Optional[AccountDirectory] = None):
        super().__init__("auth", 3001, config or get_config("auth", 3001))
        self.directory = directory or AccountDirectory()
        self.token_validator = TokenValidator(
            TokenSigner(
                self.config.jwt_secret,
                algorithm=self.config.jwt_algorithm,
                expires_in=self.config.jwt_expires_in_seconds,
            ),
            self.directory,
        )

        self._setup_auth_routes()
        self.app.state.auth_service = self

    def _setup_auth_routes(self):
        """Set up auth-specific routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": "auth",
                "message": "Catalog Gateway - Auth Service",
                "version": "1.0.0"
            }

        @self.app.post("/auth/login")
        async def login(request: Optional[LoginRequest] = None):
            """Exchange directory credentials for a bearer token."""
            request = request or LoginRequest()
            account = self.directory.authenticate(request.email, request.password)
            if account is None:
                self.metrics.increment_counter("logins_total", status="rejected")
                return JSONResponse(status_code=401, content={"error": "Credenciais inválidas"})

            token = self.token_validator.issue_for(account)
            self.metrics.increment_counter("logins_total", status="accepted")
            self.logger.info("Login succeeded", user_id=account.user_id, role=account.role)

            return {
                "message": "Login realizado com sucesso",
                "user": account.public_view(),
                "token": token,
            }

        @self.app.get("/auth/verify")
        async def verify_token(request: Request):
            """Token verification endpoint."""
            try:
                user = self.token_validator.user_from_authorization(request.headers.get("Authorization"))
            except GatewayException:
                self.metrics.increment_counter("token_validations_total", status="invalid")
                raise

            self.metrics.increment_counter("token_validations_total", status="valid")
            set_user_context(user.get("id"), user.get("role"))
            return {"message": "Token válido", "user": user}

        @self.app.get("/auth/profile")
        async def profile(request: Request):
            """Profile of the authenticated user."""
            user = self.token_validator.user_from_authorization(request.headers.get("Authorization"))
            return {"user": user}


def create_app(config: Optional[ServiceConfig] = None):
    """Create FastAPI application."""
    service = AuthService(config)
    return service.app


if __name__ == "__main__":
    service = AuthService()
    service.run()
