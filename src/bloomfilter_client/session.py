"""
Session Manager

Owns the SIWE authentication state machine:
- Lazy challenge-response authentication
- In-memory token cache with proactive expiry
- Refresh with fallback to full re-authentication
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Dict, Optional
from urllib.parse import urlsplit

import httpx

from bloomfilter_client.config import ClientConfig
from bloomfilter_client.errors import SERVER_MESSAGE, response_body
from bloomfilter_client.exceptions import (
    AuthenticationError,
    RefreshError,
    WalletRequiredError,
)
from bloomfilter_client.models import AuthTokens, NonceResponse
from bloomfilter_client.siwe import SiweMessage
from bloomfilter_client.wallet import Wallet

logger = logging.getLogger("bloomfilter.session")

# Tokens are renewed this many seconds before the server would reject them
TOKEN_EXPIRY_MARGIN = 60.0


class SessionState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    VALID = "valid"
    EXPIRED = "expired"


@dataclass
class TokenCache:
    """Cached bearer credentials."""
    access_token: str
    refresh_token: str
    expires_at: float  # epoch seconds

    @classmethod
    def from_tokens(cls, tokens: AuthTokens, now: float) -> "TokenCache":
        return cls(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            expires_at=now + tokens.expires_in - TOKEN_EXPIRY_MARGIN,
        )


class SessionManager:
    """
    Authentication session for one client instance.

    The cache moves UNAUTHENTICATED -> VALID on authentication, VALID ->
    EXPIRED as time passes, EXPIRED -> VALID on refresh, and back to
    UNAUTHENTICATED when a refresh fails.

    There is no lock around the authentication flow: concurrent callers
    that find the session unauthenticated each run the full flow, and the
    last one to finish wins the cache.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        config: ClientConfig,
        wallet: Optional[Wallet] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize session manager.

        Args:
            http: Configured API client
            config: Validated client configuration
            wallet: Signing identity; None disables authentication
            clock: Returns the current time in epoch seconds
        """
        self._http = http
        self._config = config
        self._wallet = wallet
        self._clock = clock
        self._cache: Optional[TokenCache] = None

    @property
    def state(self) -> SessionState:
        if self._cache is None:
            return SessionState.UNAUTHENTICATED
        if self._clock() < self._cache.expires_at:
            return SessionState.VALID
        return SessionState.EXPIRED

    @property
    def token_cache(self) -> Optional[TokenCache]:
        return self._cache

    async def ensure_authenticated(self) -> None:
        """Make sure a non-expired access token is cached."""
        if self._wallet is None:
            raise WalletRequiredError()

        state = self.state
        if state is SessionState.VALID:
            return

        if state is SessionState.EXPIRED and await self.refresh():
            return

        await self.authenticate()

    def get_auth_headers(self) -> Dict[str, str]:
        """Bearer header for the cached token, or {} when unauthenticated."""
        if self._cache is None:
            return {}
        return {"Authorization": f"Bearer {self._cache.access_token}"}

    async def authenticate(self) -> None:
        """Run the full nonce -> sign -> verify flow."""
        if self._wallet is None:
            raise WalletRequiredError("Cannot authenticate without a private key")

        try:
            response = await self._http.get(
                "/auth/nonce", params={"address": self._wallet.address}
            )
            response.raise_for_status()
            challenge = NonceResponse.from_dict(response.json())

            message = self._build_message(challenge).prepare()
            signature = self._wallet.sign_message(message)

            response = await self._http.post(
                "/auth/verify", json={"message": message, "signature": signature}
            )
            response.raise_for_status()
            tokens = AuthTokens.from_dict(response.json())
        except httpx.HTTPStatusError as e:
            detail = SERVER_MESSAGE.apply(response_body(e.response))
            raise AuthenticationError(str(detail) if detail else str(e)) from e
        except Exception as e:
            raise AuthenticationError(str(e) or type(e).__name__) from e

        self._cache = TokenCache.from_tokens(tokens, self._clock())
        logger.info(f"Authenticated as {self._wallet.address}")

    async def refresh(self) -> bool:
        """
        Exchange the refresh token for new tokens.

        Returns:
            True on success. On failure the cache is discarded and False is
            returned so the caller can fall back to full authentication.
        """
        if self._cache is None:
            return False

        try:
            tokens = await self._exchange_refresh_token(self._cache.refresh_token)
        except RefreshError as e:
            logger.warning(f"{e}, re-authenticating")
            self._cache = None
            return False

        self._cache = TokenCache.from_tokens(tokens, self._clock())
        logger.info("Token refreshed")
        return True

    async def _exchange_refresh_token(self, refresh_token: str) -> AuthTokens:
        try:
            response = await self._http.post(
                "/auth/refresh", json={"refreshToken": refresh_token}
            )
            response.raise_for_status()
            return AuthTokens.from_dict(response.json())
        except Exception as e:
            raise RefreshError(f"Token refresh failed: {e}") from e

    def invalidate(self) -> None:
        """Drop cached tokens."""
        self._cache = None

    def _build_message(self, challenge: NonceResponse) -> SiweMessage:
        api = urlsplit(self._config.api_url)
        chain_id = challenge.chain_id
        if chain_id is None:
            chain_id = int(self._config.chain_reference)
        return SiweMessage(
            domain=challenge.domain or api.netloc,
            address=self._wallet.address,
            uri=challenge.uri or self._config.api_url,
            chain_id=chain_id,
            nonce=challenge.nonce,
            issued_at=datetime.fromtimestamp(self._clock(), tz=timezone.utc),
        )
