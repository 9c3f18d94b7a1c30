"""
Bloomfilter Client Toolkit

Async Python client for the Bloomfilter domain registration API.
Authenticates with Sign-In With Ethereum and pays with x402.
"""

__version__ = "0.1.0"

from bloomfilter_client.client import BloomfilterClient
from bloomfilter_client.config import ClientConfig, validate_config
from bloomfilter_client.errors import ClassifiedError, classify_error, format_tool_error
from bloomfilter_client.jobs import JobPoller
from bloomfilter_client.models import (
    AccountInfo,
    DnsRecord,
    DomainInfo,
    JobStatus,
    RegistrationResult,
    RenewalResult,
    SearchResponse,
    SearchResult,
    TldPricing,
    ToolResult,
)
from bloomfilter_client.session import SessionManager, SessionState, TokenCache
from bloomfilter_client.transport import (
    PaymentMiddleware,
    X402PaymentMiddleware,
    build_http_client,
)
from bloomfilter_client.wallet import Wallet
from bloomfilter_client.exceptions import (
    AuthenticationError,
    BloomfilterError,
    ConfigInvalidError,
    ErrorKind,
    JobFailedError,
    JobTimeoutError,
    RefreshError,
    WalletRequiredError,
)

__all__ = [
    # Client
    "BloomfilterClient",
    "ClientConfig",
    "validate_config",
    # Session
    "SessionManager",
    "SessionState",
    "TokenCache",
    "Wallet",
    # Transport
    "PaymentMiddleware",
    "X402PaymentMiddleware",
    "build_http_client",
    # Jobs
    "JobPoller",
    # Errors
    "ClassifiedError",
    "classify_error",
    "format_tool_error",
    # Models
    "AccountInfo",
    "DnsRecord",
    "DomainInfo",
    "JobStatus",
    "RegistrationResult",
    "RenewalResult",
    "SearchResponse",
    "SearchResult",
    "TldPricing",
    "ToolResult",
    # Exceptions
    "BloomfilterError",
    "ErrorKind",
    "ConfigInvalidError",
    "WalletRequiredError",
    "AuthenticationError",
    "RefreshError",
    "JobFailedError",
    "JobTimeoutError",
]
