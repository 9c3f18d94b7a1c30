"""
Tests for the SIWE session manager.
"""

import json

import httpx
import pytest
from eth_account import Account
from eth_account.messages import encode_defunct

from bloomfilter_client.config import validate_config
from bloomfilter_client.exceptions import AuthenticationError, WalletRequiredError
from bloomfilter_client.session import TOKEN_EXPIRY_MARGIN, SessionManager, SessionState
from bloomfilter_client.wallet import Wallet

from tests.conftest import API_URL, NETWORK, TEST_KEY, MockApi


def make_session(api: MockApi, clock, private_key=TEST_KEY) -> SessionManager:
    config = validate_config({"apiUrl": API_URL, "network": NETWORK, "privateKey": private_key})
    http = httpx.AsyncClient(base_url=API_URL, transport=api.transport)
    wallet = Wallet.from_key(private_key) if private_key else None
    return SessionManager(http, config, wallet, clock=clock)


class TestAuthenticate:
    """Tests for the nonce -> sign -> verify flow."""

    @pytest.mark.asyncio
    async def test_lazy_single_authentication(self, api, clock):
        """Repeated calls reuse the cached token."""
        session = make_session(api, clock)
        assert session.state == SessionState.UNAUTHENTICATED
        assert session.get_auth_headers() == {}

        await session.ensure_authenticated()
        await session.ensure_authenticated()

        assert api.count("GET", "/auth/nonce") == 1
        assert api.count("POST", "/auth/verify") == 1
        assert session.state == SessionState.VALID
        assert session.get_auth_headers() == {"Authorization": "Bearer access-1"}

    @pytest.mark.asyncio
    async def test_verify_payload_is_signed_siwe_message(self, api, clock):
        """The verify call carries a SIWE message signed by the wallet."""
        session = make_session(api, clock)
        address = Wallet.from_key(TEST_KEY).address

        await session.ensure_authenticated()

        nonce_request = api.requests("GET", "/auth/nonce")[0]
        assert nonce_request.url.params["address"] == address

        body = json.loads(api.requests("POST", "/auth/verify")[0].content)
        message = body["message"]
        assert message.startswith("api.test wants you to sign in with your Ethereum account:\n" + address)
        assert "URI: https://api.test\n" in message
        assert "Chain ID: 8453\n" in message
        assert "Nonce: abc123\n" in message
        recovered = Account.recover_message(encode_defunct(text=message), signature=body["signature"])
        assert recovered == address

    @pytest.mark.asyncio
    async def test_challenge_defaults_from_config(self, clock):
        """Missing challenge fields fall back to the API URL and network."""
        api = MockApi()
        api.add("GET", "/auth/nonce", {"nonce": "n-1"})
        api.add("POST", "/auth/verify", {
            "accessToken": "a", "refreshToken": "r", "expiresIn": 3600,
        })
        session = make_session(api, clock)

        await session.ensure_authenticated()

        message = json.loads(api.requests("POST", "/auth/verify")[0].content)["message"]
        assert message.startswith("api.test wants you to sign in")
        assert "URI: https://api.test\n" in message
        assert "Chain ID: 8453\n" in message

    @pytest.mark.asyncio
    async def test_no_wallet(self, api, clock):
        """Without a key, authentication fails before any request."""
        session = make_session(api, clock, private_key=None)

        with pytest.raises(WalletRequiredError):
            await session.ensure_authenticated()

        assert api.calls == []

    @pytest.mark.asyncio
    async def test_verify_rejected(self, api, clock):
        """A rejected signature surfaces as AuthenticationError."""
        api.add("POST", "/auth/verify", httpx.Response(401, json={"message": "bad signature"}))
        session = make_session(api, clock)

        with pytest.raises(AuthenticationError) as exc_info:
            await session.ensure_authenticated()

        assert str(exc_info.value) == "Authentication failed: bad signature"
        assert session.state == SessionState.UNAUTHENTICATED

    @pytest.mark.asyncio
    async def test_rejection_without_message(self, api, clock):
        """Rejections without a body message keep the HTTP error text."""
        api.add("POST", "/auth/verify", httpx.Response(403))
        session = make_session(api, clock)

        with pytest.raises(AuthenticationError) as exc_info:
            await session.ensure_authenticated()

        assert "403" in exc_info.value.detail


class TestExpiry:
    """Tests for token expiry and refresh."""

    @pytest.mark.asyncio
    async def test_expiry_margin(self, api, clock):
        """Tokens count as expired a margin before the server expiry."""
        session = make_session(api, clock)
        await session.ensure_authenticated()

        assert session.token_cache.expires_at == clock.now + 3600 - TOKEN_EXPIRY_MARGIN

        clock.advance(3600 - TOKEN_EXPIRY_MARGIN - 1)
        assert session.state == SessionState.VALID

        clock.advance(1)
        assert session.state == SessionState.EXPIRED

    @pytest.mark.asyncio
    async def test_expired_token_refreshed(self, api, clock):
        """An expired token is refreshed without a new sign-in."""
        session = make_session(api, clock)
        await session.ensure_authenticated()
        clock.advance(3600)

        await session.ensure_authenticated()

        assert api.count("GET", "/auth/nonce") == 1
        assert api.count("POST", "/auth/refresh") == 1
        refresh_body = json.loads(api.requests("POST", "/auth/refresh")[0].content)
        assert refresh_body == {"refreshToken": "refresh-1"}
        assert session.get_auth_headers() == {"Authorization": "Bearer access-2"}
        assert session.state == SessionState.VALID

    @pytest.mark.asyncio
    async def test_refresh_failure_falls_back_to_authenticate(self, api, clock):
        """A rejected refresh clears the cache and signs in again."""
        api.add("POST", "/auth/refresh", httpx.Response(401, json={"message": "revoked"}))
        session = make_session(api, clock)
        await session.ensure_authenticated()
        clock.advance(3600)

        await session.ensure_authenticated()

        assert api.count("POST", "/auth/refresh") == 1
        assert api.count("GET", "/auth/nonce") == 2
        assert api.count("POST", "/auth/verify") == 2
        assert session.get_auth_headers() == {"Authorization": "Bearer access-2"}

    @pytest.mark.asyncio
    async def test_refresh_without_cache(self, api, clock):
        """Refresh is a no-op before the first sign-in."""
        session = make_session(api, clock)

        assert await session.refresh() is False
        assert api.calls == []

    @pytest.mark.asyncio
    async def test_invalidate(self, api, clock):
        """Invalidate forces a new sign-in."""
        session = make_session(api, clock)
        await session.ensure_authenticated()

        session.invalidate()
        await session.ensure_authenticated()

        assert api.count("GET", "/auth/nonce") == 2
