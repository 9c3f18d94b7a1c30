"""
Tests for server settings loading.
"""

import yaml

from bloomfilter_client.config import DEFAULT_API_URL, DEFAULT_NETWORK, validate_config
from bloomfilter_mcp.config import (
    ServerSettings,
    create_sample_config,
    load_settings,
    normalize_private_key,
)

from tests.conftest import TEST_KEY

CONFIG_YAML = """
api:
  url: https://api.example.test
wallet:
  network: eip155:84532
  private_key: "1111111111111111111111111111111111111111111111111111111111111111"
logging:
  level: info
profiles:
  local:
    api:
      url: http://localhost:3000
"""


class TestNormalizePrivateKey:
    """Tests for key normalization."""

    def test_adds_prefix(self):
        """Keys without 0x get one."""
        assert normalize_private_key("11" * 32) == TEST_KEY

    def test_keeps_prefix_and_strips(self):
        """Whitespace is removed, an existing prefix kept."""
        assert normalize_private_key(f"  {TEST_KEY}\n") == TEST_KEY

    def test_empty(self):
        """Empty or missing keys are None."""
        assert normalize_private_key("") is None
        assert normalize_private_key("   ") is None
        assert normalize_private_key(None) is None


class TestServerSettings:
    """Tests for ServerSettings sources."""

    def test_defaults(self):
        """Defaults point at the production API on Base."""
        settings = ServerSettings()

        assert settings.api_url == DEFAULT_API_URL == "https://api.bloomfilter.xyz"
        assert settings.network == DEFAULT_NETWORK == "eip155:8453"
        assert settings.private_key is None
        assert settings.log_level == "WARNING"

    def test_from_dict(self):
        """Sections map onto settings."""
        settings = ServerSettings.from_dict(yaml.safe_load(CONFIG_YAML))

        assert settings.api_url == "https://api.example.test"
        assert settings.network == "eip155:84532"
        assert settings.private_key == TEST_KEY
        assert settings.log_level == "INFO"

    def test_profile(self):
        """A named profile replaces the top-level sections."""
        settings = ServerSettings.from_dict(yaml.safe_load(CONFIG_YAML), profile="local")

        assert settings.api_url == "http://localhost:3000"
        assert settings.network == DEFAULT_NETWORK
        assert settings.private_key is None
        assert settings.profile == "local"

    def test_from_file(self, tmp_path):
        """Load from a YAML file."""
        path = tmp_path / "config.yaml"
        path.write_text(CONFIG_YAML)

        settings = ServerSettings.from_file(path)

        assert settings.api_url == "https://api.example.test"

    def test_empty_file(self, tmp_path):
        """An empty file yields defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert ServerSettings.from_file(path) == ServerSettings()

    def test_environment_overrides(self):
        """BLOOMFILTER_* variables override file values."""
        settings = ServerSettings(api_url="https://file.test").with_environment({
            "BLOOMFILTER_API_URL": "https://env.test",
            "BLOOMFILTER_PRIVATE_KEY": "11" * 32,
            "BLOOMFILTER_NETWORK": "eip155:1",
        })

        assert settings.api_url == "https://env.test"
        assert settings.private_key == TEST_KEY
        assert settings.network == "eip155:1"

    def test_empty_environment_ignored(self):
        """Empty variables do not clear settings."""
        settings = ServerSettings(private_key=TEST_KEY).with_environment({"BLOOMFILTER_PRIVATE_KEY": ""})

        assert settings.private_key == TEST_KEY

    def test_overrides_skip_none(self):
        """CLI options only apply when given."""
        settings = ServerSettings(api_url="https://file.test").with_overrides(
            api_url=None, network="eip155:10", private_key="11" * 32
        )

        assert settings.api_url == "https://file.test"
        assert settings.network == "eip155:10"
        assert settings.private_key == TEST_KEY

    def test_load_settings_precedence(self, tmp_path):
        """Environment beats the config file."""
        path = tmp_path / "config.yaml"
        path.write_text(CONFIG_YAML)

        settings = load_settings(path, environ={"BLOOMFILTER_API_URL": "https://env.test"})

        assert settings.api_url == "https://env.test"
        assert settings.network == "eip155:84532"

    def test_client_config_validates(self):
        """Settings produce a valid client configuration."""
        settings = ServerSettings(private_key=TEST_KEY)

        config = validate_config(settings.to_client_config())

        assert config.api_url == DEFAULT_API_URL
        assert config.private_key == TEST_KEY


class TestSampleConfig:
    """Tests for the sample configuration."""

    def test_sample_loads(self):
        """The sample parses and yields defaults."""
        data = yaml.safe_load(create_sample_config())

        assert ServerSettings.from_dict(data) == ServerSettings()
        assert ServerSettings.from_dict(data, "local").api_url == "http://localhost:3000"
