"""
Tests for the bloomfilter-mcp command line.
"""

import pytest
import yaml
from click.testing import CliRunner

from bloomfilter_client.client import PRIVATE_KEY_REQUIRED
from bloomfilter_mcp import main
from bloomfilter_mcp.main import cli, mask_key

from tests.conftest import TEST_KEY, MockApi, add_auth_routes, make_client

CLEAN_ENV = {
    "BLOOMFILTER_API_URL": "",
    "BLOOMFILTER_PRIVATE_KEY": "",
    "BLOOMFILTER_NETWORK": "",
}


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("api:\n  url: http://localhost:3000\n")
    return path


class TestConfigCommands:
    """Tests for config init and show."""

    def test_init_writes_sample(self, runner, tmp_path):
        """config init writes a loadable sample file."""
        path = tmp_path / "nested" / "config.yaml"

        result = runner.invoke(cli, ["config", "init", "--path", str(path)], env=CLEAN_ENV)

        assert result.exit_code == 0
        assert f"Created config file: {path}" in result.output
        assert yaml.safe_load(path.read_text())["api"]["url"] == "https://api.bloomfilter.xyz"

    def test_init_keeps_existing_without_confirm(self, runner, config_file):
        """Declining the overwrite prompt leaves the file alone."""
        result = runner.invoke(
            cli, ["config", "init", "--path", str(config_file)], input="n\n", env=CLEAN_ENV
        )

        assert result.exit_code == 0
        assert config_file.read_text() == "api:\n  url: http://localhost:3000\n"

    def test_show_masks_key(self, runner, config_file):
        """config show prints resolved settings with the key masked."""
        result = runner.invoke(
            cli,
            ["-c", str(config_file), "--private-key", TEST_KEY, "config", "show"],
            env=CLEAN_ENV,
        )

        assert result.exit_code == 0
        assert "http://localhost:3000" in result.output
        assert TEST_KEY not in result.output
        assert mask_key(TEST_KEY) in result.output

    def test_show_environment(self, runner, config_file):
        """Environment variables override the file."""
        env = {**CLEAN_ENV, "BLOOMFILTER_NETWORK": "eip155:84532"}

        result = runner.invoke(cli, ["-c", str(config_file), "config", "show"], env=env)

        assert "eip155:84532" in result.output
        assert "(not set)" in result.output


class TestToolCommands:
    """Tests for one-shot tool commands."""

    def test_account_without_key(self, runner, config_file):
        """Authenticated commands fail with the key message."""
        result = runner.invoke(cli, ["-c", str(config_file), "account"], env=CLEAN_ENV)

        assert result.exit_code == 1
        assert PRIVATE_KEY_REQUIRED in result.output

    def test_invalid_config(self, runner, config_file):
        """Invalid settings are reported before any call."""
        result = runner.invoke(
            cli, ["-c", str(config_file), "--network", "base", "search", "myproject"], env=CLEAN_ENV
        )

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_pricing(self, runner, config_file, monkeypatch):
        """Tool output is printed on success."""
        api = MockApi()
        api.add("GET", "/domains/pricing/io", {
            "tld": "io",
            "registration_price_usd": "39.99",
            "renewal_price_usd": "39.99",
            "transfer_price_usd": "39.99",
        })
        monkeypatch.setattr(main, "get_client", lambda ctx: make_client(api, private_key=None))

        result = runner.invoke(cli, ["-c", str(config_file), "pricing", "io"], env=CLEAN_ENV)

        assert result.exit_code == 0
        assert "Pricing for .io:" in result.output

    def test_job_status(self, runner, config_file, monkeypatch):
        """job-status prints one status check."""
        api = MockApi()
        add_auth_routes(api)
        api.add("GET", "/domains/status/job-1", {"jobId": "job-1", "status": "completed"})
        monkeypatch.setattr(main, "get_client", lambda ctx: make_client(api))

        result = runner.invoke(cli, ["-c", str(config_file), "job-status", "job-1"], env=CLEAN_ENV)

        assert result.exit_code == 0
        assert "Job job-1: completed" in result.output


class TestMaskKey:
    """Tests for key masking."""

    def test_mask(self):
        """Only the ends of the key are shown."""
        assert mask_key(TEST_KEY) == "0x1111...1111"
        assert mask_key(None) == "(not set)"
