"""
Tool Handlers

One coroutine per agent tool. Handlers never raise: failures come back as
error ToolResults built by the error classifier.
"""

import logging
from typing import Optional

from bloomfilter_client.client import BloomfilterClient
from bloomfilter_client.errors import format_tool_error
from bloomfilter_client.models import ToolResult
from bloomfilter_mcp import output

logger = logging.getLogger("bloomfilter.mcp")


def _failure(client: BloomfilterClient, error: Exception) -> ToolResult:
    logger.debug(f"Tool call failed: {error!r}")
    return format_tool_error(error, client.config.api_url)


# =============================================================================
# Free Tools
# =============================================================================

async def search_domains(
    client: BloomfilterClient, query: str, tlds: Optional[str] = None
) -> ToolResult:
    try:
        response = await client.search_domains(query, tlds)
        return ToolResult(output.format_search(query, response))
    except Exception as e:
        return _failure(client, e)


async def get_pricing(client: BloomfilterClient, tld: Optional[str] = None) -> ToolResult:
    try:
        pricing = await client.get_pricing(tld)
        if tld and pricing:
            return ToolResult(output.format_tld_pricing(pricing[0]))
        return ToolResult(output.format_pricing_table(pricing))
    except Exception as e:
        return _failure(client, e)


# =============================================================================
# Authenticated Tools
# =============================================================================

async def get_domain_info(client: BloomfilterClient, domain: str) -> ToolResult:
    key_error = client.requires_private_key()
    if key_error:
        return key_error

    try:
        info = await client.get_domain_info(domain)
        return ToolResult(output.format_domain_info(info))
    except Exception as e:
        return _failure(client, e)


async def register_domain(
    client: BloomfilterClient, domain: str, years: Optional[int] = None
) -> ToolResult:
    key_error = client.requires_private_key()
    if key_error:
        return key_error

    try:
        result = await client.register_domain(domain, years or 1)
        return ToolResult(output.format_registration(result))
    except Exception as e:
        return _failure(client, e)


async def renew_domain(
    client: BloomfilterClient, domain: str, years: Optional[int] = None
) -> ToolResult:
    key_error = client.requires_private_key()
    if key_error:
        return key_error

    try:
        result = await client.renew_domain(domain, years or 1)
        return ToolResult(output.format_renewal(result))
    except Exception as e:
        return _failure(client, e)


async def list_dns_records(client: BloomfilterClient, domain: str) -> ToolResult:
    key_error = client.requires_private_key()
    if key_error:
        return key_error

    try:
        records = await client.list_dns_records(domain)
        return ToolResult(output.format_dns_table(domain, records))
    except Exception as e:
        return _failure(client, e)


async def add_dns_record(
    client: BloomfilterClient,
    domain: str,
    type: str,
    host: str,
    value: str,
    ttl: Optional[int] = None,
    distance: Optional[int] = None,
) -> ToolResult:
    key_error = client.requires_private_key()
    if key_error:
        return key_error

    try:
        record = await client.add_dns_record(domain, type, host, value, ttl, distance)
        return ToolResult(output.format_dns_record(f"DNS record added to {domain}:", record))
    except Exception as e:
        return _failure(client, e)


async def update_dns_record(
    client: BloomfilterClient,
    domain: str,
    record_id: str,
    host: str,
    value: str,
    ttl: Optional[int] = None,
    distance: Optional[int] = None,
) -> ToolResult:
    key_error = client.requires_private_key()
    if key_error:
        return key_error

    try:
        record = await client.update_dns_record(domain, record_id, host, value, ttl, distance)
        return ToolResult(output.format_dns_record(f"DNS record updated for {domain}:", record))
    except Exception as e:
        return _failure(client, e)


async def delete_dns_record(
    client: BloomfilterClient, domain: str, record_id: str
) -> ToolResult:
    key_error = client.requires_private_key()
    if key_error:
        return key_error

    try:
        await client.delete_dns_record(domain, record_id)
        return ToolResult(f"DNS record {record_id} deleted from {domain}.")
    except Exception as e:
        return _failure(client, e)


async def get_account(client: BloomfilterClient) -> ToolResult:
    key_error = client.requires_private_key()
    if key_error:
        return key_error

    try:
        account = await client.get_account()
        return ToolResult(output.format_account(account))
    except Exception as e:
        return _failure(client, e)


async def get_job_status(client: BloomfilterClient, job_id: str) -> ToolResult:
    """One-shot status check of a provisioning job (no waiting)."""
    key_error = client.requires_private_key()
    if key_error:
        return key_error

    try:
        job = await client.poller.fetch(job_id)
        return ToolResult(output.format_job(job))
    except Exception as e:
        return _failure(client, e)
