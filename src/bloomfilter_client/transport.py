"""
HTTP Transport

Builds the API client and, when a wallet is configured, decorates it with
x402 payment handling so 402 responses are retried with a signed payment.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from bloomfilter_client.config import HTTP_TIMEOUT, ClientConfig
from bloomfilter_client.wallet import Wallet

logger = logging.getLogger("bloomfilter.transport")


class PaymentMiddleware:
    """
    Decorates the HTTP client with automatic payment-retry behavior.

    Subclasses build an httpx.AsyncClient from the base client options.
    Raising from build() makes the transport fall back to a plain client.
    """

    def build(self, **client_kwargs: Any) -> httpx.AsyncClient:
        raise NotImplementedError


class X402PaymentMiddleware(PaymentMiddleware):
    """Settles 402 responses using the x402 exact EVM scheme."""

    def __init__(self, wallet: Wallet):
        self.wallet = wallet

    def build(self, **client_kwargs: Any) -> httpx.AsyncClient:
        # Imported here so a failed x402 import degrades to a plain client
        from x402 import x402Client
        from x402.http.clients import x402HttpxClient
        from x402.mechanisms.evm import EthAccountSigner
        from x402.mechanisms.evm.exact.register import register_exact_evm_client

        payments = x402Client()
        register_exact_evm_client(payments, EthAccountSigner(self.wallet.account))
        return x402HttpxClient(payments, **client_kwargs)


def base_client_options(
    config: ClientConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    """Options shared by the plain and the payment-enabled client."""
    options: Dict[str, Any] = {
        "base_url": config.api_url,
        "timeout": HTTP_TIMEOUT,
        "headers": {"Content-Type": "application/json"},
    }
    if transport is not None:
        options["transport"] = transport
    return options


def build_http_client(
    config: ClientConfig,
    wallet: Optional[Wallet] = None,
    payments: Optional[PaymentMiddleware] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create the API client.

    Args:
        config: Validated client configuration
        wallet: Signing identity; payment decoration requires one
        payments: Payment middleware to apply when a wallet is present
        transport: Optional httpx transport (tests, proxies)

    Returns:
        Payment-enabled client, or a plain client when there is no wallet,
        no middleware, or the middleware failed to initialize
    """
    options = base_client_options(config, transport)

    if wallet is not None and payments is not None:
        try:
            client = payments.build(**options)
            logger.info("x402 payment support enabled")
            return client
        except Exception as e:
            logger.warning(
                f"Failed to initialize x402 payment support, paid operations "
                f"will report payment-required errors: {e}"
            )

    return httpx.AsyncClient(**options)
