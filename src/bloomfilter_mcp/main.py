"""
Bloomfilter MCP Entry Point

Command-line interface for running the MCP server and calling tools.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

import click

from bloomfilter_client import __version__
from bloomfilter_client.client import BloomfilterClient
from bloomfilter_client.exceptions import BloomfilterError, ConfigInvalidError
from bloomfilter_client.models import ToolResult
from bloomfilter_mcp import tools
from bloomfilter_mcp.config import ServerSettings, create_sample_config, load_settings
from bloomfilter_mcp.output import print_error, print_info, print_success
from bloomfilter_mcp.server import create_server

logger = logging.getLogger("bloomfilter.mcp")


def configure_logging(level: str) -> None:
    """Log to stderr; stdout carries the stdio JSON-RPC channel."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(name)s: %(message)s",
        stream=sys.stderr,
    )


def mask_key(key: Optional[str]) -> str:
    if not key:
        return "(not set)"
    return f"{key[:6]}...{key[-4:]}"


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group(invoke_without_command=True)
@click.option("--config", "-c", type=click.Path(exists=True), help="Config file path")
@click.option("--profile", "-p", default="default", help="Config profile to use")
@click.option("--api-url", help="Bloomfilter API base URL")
@click.option("--network", help="CAIP-2 network id (e.g. eip155:8453)")
@click.option("--private-key", help="Wallet private key (or use BLOOMFILTER_PRIVATE_KEY env)")
@click.option("--verbose", "-v", is_flag=True, help="Enable info logging")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx, config, profile, api_url, network, private_key, verbose, debug):
    """
    Bloomfilter MCP - Domain registration tools for AI agents

    Runs an MCP server on stdio when no command is given.

    \b
    Configuration:
      Use a config file at ~/.bloomfilter/config.yaml or set BLOOMFILTER_* env vars.
      Run 'bloomfilter-mcp config init' to create a sample config file.

    \b
    Examples:
      BLOOMFILTER_PRIVATE_KEY=0x... bloomfilter-mcp
      bloomfilter-mcp search myproject --tlds com,io
      bloomfilter-mcp --profile local account
    """
    settings = load_settings(Path(config) if config else None, profile)
    settings = settings.with_overrides(
        api_url=api_url, network=network, private_key=private_key
    )

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    else:
        level = settings.log_level
    configure_logging(level)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings

    if ctx.invoked_subcommand is None:
        ctx.invoke(serve)


def get_client(ctx) -> BloomfilterClient:
    """
    Build a client from the resolved settings.

    Args:
        ctx: Click context

    Returns:
        Client with validated configuration
    """
    settings: ServerSettings = ctx.obj["settings"]
    try:
        return BloomfilterClient.create(settings.to_client_config())
    except ConfigInvalidError as e:
        print_error(f"Invalid configuration: {e}")
        sys.exit(1)


def run_tool(
    ctx,
    handler: Callable[..., Awaitable[ToolResult]],
    *args: Any,
) -> None:
    """Run one tool handler and print its result; errors exit with status 1."""
    client = get_client(ctx)

    async def _run() -> ToolResult:
        async with client:
            return await handler(client, *args)

    result = asyncio.run(_run())
    if result.is_error:
        click.echo(result.text, err=True)
        sys.exit(1)
    click.echo(result.text)


# =============================================================================
# Server
# =============================================================================

@cli.command()
@click.pass_context
def serve(ctx):
    """Run the MCP server on stdio."""
    settings: ServerSettings = ctx.obj["settings"]
    client = get_client(ctx)

    logger.info(f"Bloomfilter MCP server starting (API: {settings.api_url})")
    if client.wallet is None:
        logger.warning(
            "No BLOOMFILTER_PRIVATE_KEY set - only search_domains and "
            "get_pricing are available"
        )

    create_server(client).run()


# =============================================================================
# Config Commands
# =============================================================================

@cli.group()
def config():
    """Configuration management commands."""
    pass


@config.command("init")
@click.option("--path", "-p", type=click.Path(), default="~/.bloomfilter/config.yaml", help="Config file path")
def config_init(path):
    """Create sample configuration file."""
    path = Path(path).expanduser()

    path.parent.mkdir(parents=True, exist_ok=True)

    if path.exists():
        if not click.confirm(f"{path} already exists. Overwrite?"):
            return

    path.write_text(create_sample_config())

    print_success(f"Created config file: {path}")
    print_info("Set BLOOMFILTER_PRIVATE_KEY in your environment to enable paid operations.")


@config.command("show")
@click.pass_context
def config_show(ctx):
    """Show current configuration."""
    settings: ServerSettings = ctx.obj["settings"]
    info = {
        "Profile": settings.profile,
        "API URL": settings.api_url,
        "Network": settings.network,
        "Private Key": mask_key(settings.private_key),
        "Log Level": settings.log_level,
    }
    width = max(len(k) for k in info)
    for key, value in info.items():
        click.echo(f"{key.ljust(width)}  {value}")


# =============================================================================
# Tool Commands
# =============================================================================

@cli.command()
@click.argument("query")
@click.option("--tlds", "-t", help="Comma-separated TLDs to check (e.g. com,io,xyz)")
@click.pass_context
def search(ctx, query, tlds):
    """
    Search domain availability.

    QUERY: Name to search for (e.g. myproject).
    """
    run_tool(ctx, tools.search_domains, query, tlds)


@cli.command()
@click.argument("tld", required=False)
@click.pass_context
def pricing(ctx, tld):
    """
    Show domain pricing.

    TLD: Optional single TLD (e.g. com); all TLDs when omitted.
    """
    run_tool(ctx, tools.get_pricing, tld)


@cli.command()
@click.pass_context
def account(ctx):
    """Show account information for the configured wallet."""
    run_tool(ctx, tools.get_account)


@cli.command("job-status")
@click.argument("job_id")
@click.pass_context
def job_status(ctx, job_id):
    """
    Check a provisioning job once.

    JOB_ID: Job identifier returned by a queued registration or renewal.
    """
    run_tool(ctx, tools.get_job_status, job_id)


# =============================================================================
# Entry Point
# =============================================================================

def main():
    """Main entry point."""
    try:
        cli()
    except BloomfilterError as e:
        print_error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nAborted.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
