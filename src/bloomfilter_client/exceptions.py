"""
Bloomfilter Client Exceptions

Custom exception hierarchy for client-side failures. Transport failures
stay httpx exceptions until the error classifier turns them into results.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Stable taxonomy of user-facing failure outcomes."""

    CONFIG_INVALID = "config_invalid"
    AUTHENTICATION_FAILED = "authentication_failed"
    REFRESH_FAILED = "refresh_failed"
    RATE_LIMITED = "rate_limited"
    PAYMENT_REQUIRED = "payment_required"
    PAYMENT_FAILED = "payment_failed"
    API_ERROR = "api_error"
    CONNECTIVITY = "connectivity"
    TIMEOUT = "timeout"
    REQUEST_FAILED = "request_failed"
    JOB_FAILED = "job_failed"
    JOB_TIMEOUT = "job_timeout"
    GENERIC = "generic"


class BloomfilterError(Exception):
    """Base Bloomfilter client exception."""

    kind = ErrorKind.GENERIC

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self):
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigInvalidError(BloomfilterError):
    """Client configuration failed validation."""

    kind = ErrorKind.CONFIG_INVALID

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field


class WalletRequiredError(ConfigInvalidError):
    """Operation needs a signing key but none was configured."""

    def __init__(
        self,
        message: str = "BLOOMFILTER_PRIVATE_KEY is required for authenticated operations",
    ):
        super().__init__(message, field="private_key")


class AuthenticationError(BloomfilterError):
    """SIWE challenge-response authentication failed."""

    kind = ErrorKind.AUTHENTICATION_FAILED

    def __init__(self, detail: str):
        super().__init__(f"Authentication failed: {detail}")
        self.detail = detail


class RefreshError(BloomfilterError):
    """Token refresh was rejected; recovered by full re-authentication."""

    kind = ErrorKind.REFRESH_FAILED


class JobFailedError(BloomfilterError):
    """Provisioning job reached the failed state."""

    kind = ErrorKind.JOB_FAILED

    def __init__(self, job_id: str, message: str = None):
        super().__init__(
            str(message) if message else f"Job {job_id} failed: domain provisioning was unsuccessful"
        )
        self.job_id = job_id


class JobTimeoutError(BloomfilterError):
    """Polling budget ran out before the job reached a terminal state."""

    kind = ErrorKind.JOB_TIMEOUT

    def __init__(self, job_id: str, timeout: float):
        super().__init__(
            f"Job {job_id} timed out after {timeout:g}s. "
            "The domain may still be provisioning - check status later with get_domain_info."
        )
        self.job_id = job_id
        self.timeout = timeout
