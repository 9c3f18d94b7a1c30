"""
Client Configuration

Validates the client configuration before any network call is made.
"""

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union
from urllib.parse import urlsplit

from bloomfilter_client.exceptions import ConfigInvalidError

# Request timeout for every call to the API (seconds)
HTTP_TIMEOUT = 30.0

DEFAULT_API_URL = "https://api.bloomfilter.xyz"
DEFAULT_NETWORK = "eip155:8453"

# CAIP-2 chain id: namespace:reference
NETWORK_PATTERN = re.compile(r"^[a-z0-9]+:[a-zA-Z0-9]+$")
PRIVATE_KEY_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")


@dataclass(frozen=True)
class ClientConfig:
    """Validated, immutable client configuration."""
    api_url: str
    network: str = DEFAULT_NETWORK
    private_key: Optional[str] = None

    @property
    def has_wallet(self) -> bool:
        return self.private_key is not None

    @property
    def chain_reference(self) -> str:
        """Reference half of the network id (e.g. "8453" for "eip155:8453")."""
        return self.network.split(":", 1)[1]

    def __repr__(self):
        key = "set" if self.private_key else None
        return (
            f"ClientConfig(api_url={self.api_url!r}, network={self.network!r}, "
            f"private_key={key!r})"
        )


def _pick(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None


def validate_api_url(api_url: Any) -> str:
    if not isinstance(api_url, str) or not api_url:
        raise ConfigInvalidError("apiUrl must be a valid URL", field="api_url")
    try:
        parts = urlsplit(api_url)
    except ValueError:
        raise ConfigInvalidError("apiUrl must be a valid URL", field="api_url")
    if not parts.scheme or not parts.netloc:
        raise ConfigInvalidError("apiUrl must be a valid URL", field="api_url")
    return api_url


def validate_network(network: Any) -> str:
    if not isinstance(network, str) or not NETWORK_PATTERN.match(network):
        raise ConfigInvalidError(
            'network must be in CAIP-2 format (e.g. "eip155:8453")',
            field="network",
        )
    return network


def validate_private_key(private_key: Any) -> Optional[str]:
    if private_key is None:
        return None
    if not isinstance(private_key, str) or not PRIVATE_KEY_PATTERN.match(private_key):
        raise ConfigInvalidError(
            "privateKey must be a 0x-prefixed 32-byte hex string",
            field="private_key",
        )
    return private_key


def validate_config(raw: Union[ClientConfig, Mapping[str, Any]]) -> ClientConfig:
    """
    Validate a raw configuration.

    Args:
        raw: A ClientConfig, or a mapping with apiUrl/api_url, network and
            an optional privateKey/private_key

    Returns:
        Trusted ClientConfig

    Raises:
        ConfigInvalidError: If any field is malformed
    """
    if isinstance(raw, ClientConfig):
        raw = {
            "api_url": raw.api_url,
            "network": raw.network,
            "private_key": raw.private_key,
        }

    api_url = validate_api_url(_pick(raw, "apiUrl", "api_url"))
    network = validate_network(_pick(raw, "network"))
    private_key = validate_private_key(_pick(raw, "privateKey", "private_key"))

    return ClientConfig(api_url=api_url, network=network, private_key=private_key)
