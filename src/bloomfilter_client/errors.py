"""
Error Classifier

Maps transport and client failures onto a stable set of user-facing
results. Response bodies are read through named field rules so each
extraction can be tested on its own.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import httpx

from bloomfilter_client.exceptions import BloomfilterError, ErrorKind
from bloomfilter_client.models import ToolResult


@dataclass(frozen=True)
class FieldRule:
    """Returns the first non-empty value among keys, in order."""
    name: str
    keys: Tuple[str, ...]

    def apply(self, data: Dict[str, Any]) -> Optional[Any]:
        for key in self.keys:
            value = data.get(key)
            if value is not None and value != "":
                return value
        return None


SERVER_MESSAGE = FieldRule("server_message", ("message", "error", "detail"))
RATE_LIMIT_MESSAGE = FieldRule("rate_limit_message", ("message",))
ERROR_CODE = FieldRule("error_code", ("code",))
OFFER_AMOUNT = FieldRule("offer_amount", ("price", "amount"))
RESOURCE_DESCRIPTION = FieldRule("resource_description", ("description",))


@dataclass(frozen=True)
class ClassifiedError:
    """A failure reduced to its kind and a human-readable message."""
    kind: ErrorKind
    message: str

    def to_result(self) -> ToolResult:
        return ToolResult.error(self.message)


def response_body(response: httpx.Response) -> Dict[str, Any]:
    """JSON object body of a response, or {} when absent or not an object."""
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def _classify_response(response: httpx.Response) -> ClassifiedError:
    status = response.status_code
    data = response_body(response)

    if status == 429:
        message = RATE_LIMIT_MESSAGE.apply(data) or "Too many requests"
        return ClassifiedError(
            ErrorKind.RATE_LIMITED,
            f"Rate limited: {message}. Please wait before retrying.",
        )

    if status == 402:
        accepts = data.get("accepts")
        if isinstance(accepts, list):
            # Offer list present: the 402 was never paid
            first = accepts[0] if accepts and isinstance(accepts[0], dict) else {}
            amount = OFFER_AMOUNT.apply(first)
            amount = "?" if amount is None else amount
            resource = data.get("resource")
            description = (
                RESOURCE_DESCRIPTION.apply(resource) if isinstance(resource, dict) else None
            )
            if description:
                detail = f"{description} requires payment of {amount} USDC"
            else:
                detail = f"Payment of {amount} USDC required"
            return ClassifiedError(
                ErrorKind.PAYMENT_REQUIRED,
                f"Payment required: {detail}. Ensure your wallet has sufficient USDC balance.",
            )

        detail = (
            SERVER_MESSAGE.apply(data)
            or "payment was attempted but could not be settled on-chain"
        )
        return ClassifiedError(
            ErrorKind.PAYMENT_FAILED,
            f"Payment failed: {detail}. Check that your wallet has sufficient USDC balance.",
        )

    code = ERROR_CODE.apply(data) or f"HTTP {status}"
    message = (
        SERVER_MESSAGE.apply(data)
        or response.reason_phrase
        or f"Request failed with status {status}"
    )
    return ClassifiedError(ErrorKind.API_ERROR, f"Error [{code}]: {message}")


def _request_url(error: httpx.HTTPError) -> Optional[str]:
    try:
        return str(error.request.url)
    except RuntimeError:
        # .request raises when the error was built without one
        return None


def classify_error(error: BaseException, api_url: Optional[str] = None) -> ClassifiedError:
    """
    Classify any failure raised by the transport or the session.

    Args:
        error: The exception to classify
        api_url: API base URL to name in connectivity errors

    Returns:
        ClassifiedError with kind and message
    """
    if isinstance(error, httpx.HTTPStatusError):
        return _classify_response(error.response)

    if isinstance(error, httpx.ConnectError):
        url = api_url or _request_url(error) or "unknown"
        return ClassifiedError(
            ErrorKind.CONNECTIVITY,
            f"Failed to connect to Bloomfilter API at {url}. "
            "Check that the API is running and BLOOMFILTER_API_URL is correct.",
        )

    if isinstance(error, httpx.TimeoutException):
        return ClassifiedError(
            ErrorKind.TIMEOUT,
            "Request timed out. The Bloomfilter API may be slow or unreachable.",
        )

    if isinstance(error, httpx.HTTPError):
        return ClassifiedError(ErrorKind.REQUEST_FAILED, f"Request failed: {error}")

    kind = error.kind if isinstance(error, BloomfilterError) else ErrorKind.GENERIC
    return ClassifiedError(kind, f"Error: {error}")


def format_tool_error(error: BaseException, api_url: Optional[str] = None) -> ToolResult:
    """Classify an error into a uniform error ToolResult."""
    return classify_error(error, api_url).to_result()
