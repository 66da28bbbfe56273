"""
Unit tests for gateway bearer authentication and cache administration.
"""

import jwt
import pytest
from starlette.requests import Request

from service_gateway.app.auth import BearerAuthenticator, Principal, Role
from service_gateway.app.caching import CacheStore
from service_gateway.app.domain import CacheAdmin
from shared.errors import AuthenticationError, AuthorizationError, InvalidTokenError
from shared.metrics import MetricsCollector
from shared.tokens import TokenSigner


def make_request(authorization=None) -> Request:
    headers = []
    if authorization is not None:
        headers.append((b"authorization", authorization.encode()))
    return Request({"type": "http", "method": "GET", "path": "/products", "headers": headers})


class TestBearerAuthenticator:
    """Test cases for BearerAuthenticator."""

    @pytest.fixture
    def signer(self):
        return TokenSigner("test-secret")

    @pytest.fixture
    def authenticator(self, signer):
        return BearerAuthenticator(signer)

    def test_valid_token(self, authenticator, signer):
        token = signer.issue("2", role="user", email="user@exemplo.com")
        request = make_request(f"Bearer {token}")

        principal = authenticator.authenticate(request)

        assert principal == Principal(subject_id="2", role=Role.USER, email="user@exemplo.com")
        assert request.state.principal is principal

    def test_admin_token(self, authenticator, signer):
        principal = authenticator.validate(signer.issue("1", role="admin"))

        assert principal.is_admin
        assert principal.to_dict() == {"id": "1", "role": "admin"}

    def test_unknown_role_is_user(self, authenticator, signer):
        principal = authenticator.validate(signer.issue("3", role="superuser"))

        assert principal.role is Role.USER

    @pytest.mark.parametrize("header", [None, "", "Basic dXNlcjpwYXNz", "Bearer ", "bearer abc"])
    def test_missing_credential(self, authenticator, header):
        with pytest.raises(AuthenticationError) as exc_info:
            authenticator.authenticate(make_request(header))

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Token de acesso necessário"

    def test_malformed_token(self, authenticator):
        with pytest.raises(InvalidTokenError) as exc_info:
            authenticator.authenticate(make_request("Bearer not-a-jwt"))

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "Token inválido"

    def test_token_signed_with_other_secret(self, authenticator):
        token = TokenSigner("other-secret").issue("2", role="admin")

        with pytest.raises(InvalidTokenError):
            authenticator.validate(token)

    def test_expired_token(self, authenticator, signer):
        token = signer.issue("2", role="user", expires_in=-10)

        with pytest.raises(InvalidTokenError) as exc_info:
            authenticator.validate(token)

        assert exc_info.value.details == "Token expirado"

    def test_token_without_subject(self, authenticator):
        token = jwt.encode({"role": "admin", "exp": 9999999999}, "test-secret", algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            authenticator.validate(token)


class TestCacheAdmin:
    """Test cases for CacheAdmin."""

    @pytest.fixture
    def cache(self):
        cache = CacheStore(300)
        cache.put("product_1", {"id": 1})
        cache.put("categories", [])
        return cache

    @pytest.fixture
    def admin(self):
        return Principal(subject_id="1", role=Role.ADMIN, email="admin@exemplo.com")

    @pytest.fixture
    def user(self):
        return Principal(subject_id="2", role=Role.USER, email="user@exemplo.com")

    def test_admin_can_clear(self, cache, admin):
        metrics = MetricsCollector("gateway")
        cache_admin = CacheAdmin(cache, metrics=metrics)

        assert cache_admin.clear_cache(admin) == 2
        assert len(cache) == 0
        assert metrics.registry.get_sample_value("cache_entries_cleared_total") == 2
        assert metrics.registry.get_sample_value("cache_size") == 0

    def test_user_cannot_clear(self, cache, user):
        with pytest.raises(AuthorizationError) as exc_info:
            CacheAdmin(cache).clear_cache(user)

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "Acesso negado. Apenas administradores podem limpar o cache."
        assert len(cache) == 2

    def test_admin_can_read_stats(self, cache, admin):
        stats = CacheAdmin(cache).cache_stats(admin)

        assert stats["size"] == 2
        assert {entry["key"] for entry in stats["entries"]} == {"product_1", "categories"}

    def test_user_cannot_read_stats(self, cache, user):
        with pytest.raises(AuthorizationError):
            CacheAdmin(cache).cache_stats(user)
