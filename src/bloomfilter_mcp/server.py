"""
MCP Server

Registers the Bloomfilter tools on a FastMCP server.
"""

from typing import Annotated, Literal, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, TextContent
from pydantic import Field

from bloomfilter_client.client import BloomfilterClient
from bloomfilter_client.models import DNS_RECORD_TYPES, ToolResult
from bloomfilter_mcp import tools

SERVER_NAME = "bloomfilter"

DnsRecordType = Literal[DNS_RECORD_TYPES]
Domain = Annotated[str, Field(description="Fully qualified domain name (e.g., 'myproject.com')")]
Years = Annotated[
    Optional[Annotated[int, Field(ge=1, le=10)]],
    Field(description="Period in years (1-10, default: 1)"),
]
Ttl = Annotated[
    Optional[Annotated[int, Field(ge=300, le=86400)]],
    Field(description="Time-to-live in seconds (300-86400, default: 3600)"),
]
Distance = Annotated[
    Optional[Annotated[int, Field(ge=0)]],
    Field(description="MX priority / SRV weight (only for MX and SRV records)"),
]
RecordId = Annotated[str, Field(description="ID of the DNS record (from list_dns_records)")]


def to_call_result(result: ToolResult) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(type="text", text=result.text)],
        isError=result.is_error,
    )


def create_server(client: BloomfilterClient) -> FastMCP:
    """
    Build the MCP server with all ten tools bound to one client.

    Args:
        client: Shared client; its session is reused by every tool call

    Returns:
        FastMCP server ready to run
    """
    server = FastMCP(SERVER_NAME)

    @server.tool(
        name="search_domains",
        description="Search for available domain names. Returns availability and pricing for each TLD.",
    )
    async def search_domains(
        query: Annotated[str, Field(description="Domain name to search for (e.g., 'myproject', 'coolstartup')")],
        tlds: Annotated[
            Optional[str],
            Field(description="Comma-separated TLDs to check (e.g., 'com,io,xyz'). Defaults to com,net,org,io,xyz"),
        ] = None,
    ) -> CallToolResult:
        return to_call_result(await tools.search_domains(client, query, tlds))

    @server.tool(
        name="get_pricing",
        description="Get domain registration, renewal, and transfer pricing. Omit tld for all TLDs, or specify one.",
    )
    async def get_pricing(
        tld: Annotated[
            Optional[str],
            Field(description="Specific TLD to get pricing for (e.g., 'com', 'io'). Omit for all TLDs."),
        ] = None,
    ) -> CallToolResult:
        return to_call_result(await tools.get_pricing(client, tld))

    @server.tool(
        name="get_domain_info",
        description="Get detailed information about a registered domain (status, expiry, nameservers, etc.).",
    )
    async def get_domain_info(domain: Domain) -> CallToolResult:
        return to_call_result(await tools.get_domain_info(client, domain))

    @server.tool(
        name="register_domain",
        description="Register a new domain name. Requires USDC payment via x402. Handles async provisioning automatically.",
    )
    async def register_domain(domain: Domain, years: Years = None) -> CallToolResult:
        return to_call_result(await tools.register_domain(client, domain, years))

    @server.tool(
        name="renew_domain",
        description="Renew an existing domain registration. Requires USDC payment via x402.",
    )
    async def renew_domain(domain: Domain, years: Years = None) -> CallToolResult:
        return to_call_result(await tools.renew_domain(client, domain, years))

    @server.tool(
        name="list_dns_records",
        description="List all DNS records for a domain you own.",
    )
    async def list_dns_records(domain: Domain) -> CallToolResult:
        return to_call_result(await tools.list_dns_records(client, domain))

    @server.tool(
        name="add_dns_record",
        description=(
            "Add a DNS record to a domain you own. Costs $0.10 USDC per record. "
            "IMPORTANT: Always add DNS records one at a time (sequentially, not in parallel). "
            "After registering a new domain, wait at least 30 seconds before adding DNS records."
        ),
    )
    async def add_dns_record(
        domain: Domain,
        type: Annotated[DnsRecordType, Field(description="DNS record type (A, AAAA, CNAME, MX, TXT, NS, SRV, CAA, FORWARD)")],
        host: Annotated[str, Field(description="Record hostname (e.g., '@' for root, 'www', 'mail')")],
        value: Annotated[str, Field(description="Record value (e.g., IP address, CNAME target, MX server)")],
        ttl: Ttl = None,
        distance: Distance = None,
    ) -> CallToolResult:
        return to_call_result(
            await tools.add_dns_record(client, domain, type, host, value, ttl, distance)
        )

    @server.tool(
        name="update_dns_record",
        description=(
            "Update an existing DNS record. Costs $0.10 USDC. Use list_dns_records to find the record_id. "
            "IMPORTANT: Always update DNS records one at a time (sequentially, not in parallel)."
        ),
    )
    async def update_dns_record(
        domain: Domain,
        record_id: RecordId,
        host: Annotated[str, Field(description="New hostname for the record")],
        value: Annotated[str, Field(description="New value for the record")],
        ttl: Ttl = None,
        distance: Distance = None,
    ) -> CallToolResult:
        return to_call_result(
            await tools.update_dns_record(client, domain, record_id, host, value, ttl, distance)
        )

    @server.tool(
        name="delete_dns_record",
        description=(
            "Delete a DNS record from a domain you own. Costs $0.10 USDC. "
            "IMPORTANT: Always delete DNS records one at a time (sequentially, not in parallel)."
        ),
    )
    async def delete_dns_record(domain: Domain, record_id: RecordId) -> CallToolResult:
        return to_call_result(await tools.delete_dns_record(client, domain, record_id))

    @server.tool(
        name="get_account",
        description="Get account information - wallet address, domain count, total spent.",
    )
    async def get_account() -> CallToolResult:
        return to_call_result(await tools.get_account(client))

    return server
