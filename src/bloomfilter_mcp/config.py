"""
Server Configuration

Loads settings from defaults, a YAML file, the environment and CLI options.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from bloomfilter_client.config import DEFAULT_API_URL, DEFAULT_NETWORK

ENV_API_URL = "BLOOMFILTER_API_URL"
ENV_PRIVATE_KEY = "BLOOMFILTER_PRIVATE_KEY"
ENV_NETWORK = "BLOOMFILTER_NETWORK"

# Default config locations
DEFAULT_CONFIG_PATHS = [
    Path.home() / ".bloomfilter" / "config.yaml",
    Path.home() / ".bloomfilter" / "config.yml",
    Path("bloomfilter.yaml"),
]


def normalize_private_key(key: Optional[str]) -> Optional[str]:
    """Strip whitespace and add the 0x prefix if missing."""
    if key is None:
        return None
    key = key.strip()
    if not key:
        return None
    return key if key.startswith("0x") else f"0x{key}"


@dataclass(frozen=True)
class ServerSettings:
    """Settings for the MCP server and CLI."""
    api_url: str = DEFAULT_API_URL
    network: str = DEFAULT_NETWORK
    private_key: Optional[str] = None
    log_level: str = "WARNING"
    profile: str = "default"

    def to_client_config(self) -> Dict[str, Any]:
        """Raw mapping for BloomfilterClient.create (validated there)."""
        return {
            "apiUrl": self.api_url,
            "network": self.network,
            "privateKey": self.private_key,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], profile: str = "default") -> "ServerSettings":
        """
        Create settings from a config dictionary.

        Args:
            data: Configuration dictionary
            profile: Profile name to use

        Returns:
            ServerSettings instance
        """
        if "profiles" in data and profile in data["profiles"]:
            profile_data = data["profiles"][profile] or {}
        else:
            profile_data = data

        api_data = profile_data.get("api") or {}
        wallet_data = profile_data.get("wallet") or {}
        logging_data = profile_data.get("logging") or {}

        return cls(
            api_url=api_data.get("url", DEFAULT_API_URL),
            network=wallet_data.get("network", DEFAULT_NETWORK),
            private_key=normalize_private_key(wallet_data.get("private_key")),
            log_level=str(logging_data.get("level", "WARNING")).upper(),
            profile=profile,
        )

    @classmethod
    def from_file(cls, path: Path, profile: str = "default") -> "ServerSettings":
        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {}, profile)

    @classmethod
    def find_and_load(cls, profile: str = "default") -> Optional["ServerSettings"]:
        """Load from the first default location that exists."""
        for path in DEFAULT_CONFIG_PATHS:
            if path.exists():
                return cls.from_file(path, profile)
        return None

    def with_environment(self, environ: Optional[Mapping[str, str]] = None) -> "ServerSettings":
        """Overlay BLOOMFILTER_* environment variables."""
        environ = os.environ if environ is None else environ
        updates: Dict[str, Any] = {}
        if environ.get(ENV_API_URL):
            updates["api_url"] = environ[ENV_API_URL]
        if environ.get(ENV_NETWORK):
            updates["network"] = environ[ENV_NETWORK]
        if environ.get(ENV_PRIVATE_KEY):
            updates["private_key"] = normalize_private_key(environ[ENV_PRIVATE_KEY])
        return replace(self, **updates)

    def with_overrides(self, **overrides: Any) -> "ServerSettings":
        """Apply CLI options; None means not given."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        if "private_key" in updates:
            updates["private_key"] = normalize_private_key(updates["private_key"])
        return replace(self, **updates)


def load_settings(
    path: Optional[Path] = None,
    profile: str = "default",
    environ: Optional[Mapping[str, str]] = None,
) -> ServerSettings:
    """Defaults < config file < environment."""
    if path is not None:
        settings = ServerSettings.from_file(path, profile)
    else:
        settings = ServerSettings.find_and_load(profile) or ServerSettings(profile=profile)
    return settings.with_environment(environ)


def create_sample_config() -> str:
    """
    Generate sample configuration YAML.

    Returns:
        Sample config as YAML string
    """
    return f"""# Bloomfilter MCP Configuration
# Copy to ~/.bloomfilter/config.yaml
# Environment variables ({ENV_API_URL}, {ENV_PRIVATE_KEY}, {ENV_NETWORK})
# override values from this file.

api:
  url: {DEFAULT_API_URL}

wallet:
  network: {DEFAULT_NETWORK}
  # private_key: 0x...  # Prefer {ENV_PRIVATE_KEY}; never commit a key

logging:
  level: WARNING

# Multiple profiles example
profiles:
  local:
    api:
      url: http://localhost:3000
    wallet:
      network: eip155:84532
"""
