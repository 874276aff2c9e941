"""
Unit tests for AuthGate.
"""

import pytest
from unittest.mock import MagicMock
from fastapi import HTTPException, Request
from starlette.datastructures import Headers

from service_auth.app.gate import AuthGate, UNAUTHORIZED_DETAIL, extract_token
from service_auth.app.tokens import Claims, SigningKey, TokenIssuer, TokenVerifier
from shared.errors import TokenVerificationError, VerifyErrorKind
from shared.metrics import MetricsCollector
from shared.test_helpers import FrozenClock, OTHER_SECRET, T0, TEST_SECRET, create_raw_token


class TestExtractToken:
    """Prefix handling for the authorization header value."""

    def test_strips_bearer_prefix(self):
        assert extract_token("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_bare_token_passes_through(self):
        assert extract_token("abc.def.ghi") == "abc.def.ghi"

    def test_strips_prefix_once(self):
        assert extract_token("Bearer Bearer abc") == "Bearer abc"

    def test_other_schemes_pass_through_unchanged(self):
        assert extract_token("Basic dXNlcjpwYXNz") == "Basic dXNlcjpwYXNz"
        assert extract_token("bearer abc") == "bearer abc"


class TestAuthGate:
    """Test cases for AuthGate."""

    @pytest.fixture
    def clock(self):
        return FrozenClock(T0)

    @pytest.fixture
    def issuer(self, clock):
        return TokenIssuer(SigningKey.from_secret(TEST_SECRET), clock=clock)

    @pytest.fixture
    def metrics(self):
        return MetricsCollector("auth")

    @pytest.fixture
    def auth_gate(self, clock, metrics):
        """Create AuthGate instance."""
        verifier = TokenVerifier(SigningKey.from_secret(TEST_SECRET), clock=clock)
        return AuthGate(verifier, metrics=metrics)

    @pytest.fixture
    def mock_request(self):
        """Create mock request."""
        request = MagicMock(spec=Request)
        request.headers = Headers({})
        request.state = MagicMock()
        return request

    def _validations(self, metrics, outcome):
        return metrics.registry.get_sample_value("token_validations_total", {"status": outcome}) or 0

    @pytest.mark.asyncio
    async def test_bearer_token_is_authorized(self, auth_gate, mock_request, issuer):
        """Test a Bearer-prefixed valid token is admitted."""
        mock_request.headers = Headers({"Authorization": f"Bearer {issuer.issue('alice')}"})

        claims = await auth_gate(mock_request)

        assert claims == Claims(sub="alice", exp=int(T0) + 3600)
        assert mock_request.state.claims == claims

    @pytest.mark.asyncio
    async def test_bare_token_is_authorized(self, auth_gate, mock_request, issuer):
        """Test the Bearer prefix is optional."""
        mock_request.headers = Headers({"authorization": issuer.issue("alice")})

        claims = await auth_gate(mock_request)

        assert claims.sub == "alice"

    @pytest.mark.asyncio
    async def test_header_name_is_case_insensitive(self, auth_gate, mock_request, issuer):
        """Test header lookup ignores case."""
        mock_request.headers = Headers({"AUTHORIZATION": f"Bearer {issuer.issue('alice')}"})

        claims = await auth_gate(mock_request)

        assert claims.sub == "alice"

    @pytest.mark.asyncio
    async def test_missing_header_is_rejected(self, auth_gate, mock_request, metrics):
        """Test a request with no authorization header is refused."""
        with pytest.raises(HTTPException) as exc_info:
            await auth_gate(mock_request)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == UNAUTHORIZED_DETAIL
        assert self._validations(metrics, "missing_header") == 1

    @pytest.mark.asyncio
    async def test_empty_header_is_rejected(self, auth_gate, mock_request):
        """Test an empty header value is refused."""
        mock_request.headers = Headers({"authorization": ""})

        with pytest.raises(HTTPException) as exc_info:
            await auth_gate(mock_request)

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_rejections_are_indistinguishable(self, auth_gate, mock_request, clock):
        """Test expired, forged and malformed tokens produce the same refusal."""
        tokens = {
            VerifyErrorKind.EXPIRED: create_raw_token({"sub": "alice", "exp": int(clock()) - 1}),
            VerifyErrorKind.SIGNATURE_MISMATCH: create_raw_token(
                {"sub": "alice", "exp": int(clock()) + 60}, secret=OTHER_SECRET
            ),
            VerifyErrorKind.MALFORMED_TOKEN: "garbage",
        }

        refusals = []
        for kind, token in tokens.items():
            mock_request.headers = Headers({"authorization": f"Bearer {token}"})
            with pytest.raises(HTTPException) as exc_info:
                await auth_gate(mock_request)
            assert isinstance(exc_info.value.__cause__, TokenVerificationError)
            assert exc_info.value.__cause__.kind is kind
            refusals.append((exc_info.value.status_code, exc_info.value.detail, exc_info.value.headers))

        assert len(set(map(repr, refusals))) == 1
        assert refusals[0][0] == 401

    @pytest.mark.asyncio
    async def test_outcomes_are_counted_by_kind(self, auth_gate, mock_request, issuer, metrics, clock):
        """Test validation outcomes feed the token_validations_total counter."""
        mock_request.headers = Headers({"authorization": issuer.issue("alice")})
        await auth_gate(mock_request)

        mock_request.headers = Headers({"authorization": create_raw_token({"sub": "a", "exp": int(clock())})})
        with pytest.raises(HTTPException):
            await auth_gate(mock_request)

        assert self._validations(metrics, "valid") == 1
        assert self._validations(metrics, "expired") == 1

    @pytest.mark.asyncio
    async def test_verifier_receives_stripped_token(self, mock_request):
        """Test the gate hands the verifier the token without its prefix."""
        verifier = MagicMock(spec=TokenVerifier)
        verifier.verify.return_value = Claims(sub="alice", exp=int(T0) + 3600)
        gate = AuthGate(verifier)
        mock_request.headers = Headers({"authorization": "Bearer raw-token"})

        await gate(mock_request)

        verifier.verify.assert_called_once_with("raw-token")
