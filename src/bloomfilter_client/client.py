"""
Bloomfilter Client

Async client for the Bloomfilter domain API with SIWE authentication and
x402 payment support.
"""

import logging
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Union
from urllib.parse import quote

import httpx

from bloomfilter_client.config import ClientConfig, validate_config
from bloomfilter_client.jobs import JobPoller
from bloomfilter_client.models import (
    AccountInfo,
    DnsRecord,
    DomainInfo,
    JobStatus,
    RegistrationResult,
    RenewalResult,
    SearchResponse,
    TldPricing,
    ToolResult,
    parse_pricing,
)
from bloomfilter_client.session import SessionManager
from bloomfilter_client.transport import X402PaymentMiddleware, build_http_client
from bloomfilter_client.wallet import Wallet

logger = logging.getLogger("bloomfilter.client")

PRIVATE_KEY_REQUIRED = (
    "Error: BLOOMFILTER_PRIVATE_KEY is required for this operation. "
    "Set it as an environment variable to enable domain registration, "
    "renewal, DNS management, and account access.\n\n"
    "Example: BLOOMFILTER_PRIVATE_KEY=0x... bloomfilter-mcp"
)


def _segment(value: str) -> str:
    return quote(value, safe="")


class BloomfilterClient:
    """
    Client for Bloomfilter domain registration operations.

    Example:
        async with BloomfilterClient.create({
            "apiUrl": "https://api.bloomfilter.xyz",
            "network": "eip155:8453",
            "privateKey": "0x...",
        }) as client:
            results = await client.search_domains("myproject")
            registration = await client.register_domain("myproject.com")
    """

    def __init__(
        self,
        config: ClientConfig,
        http: httpx.AsyncClient,
        session: SessionManager,
        poller: JobPoller,
        wallet: Optional[Wallet] = None,
    ):
        self.config = config
        self.http = http
        self.session = session
        self.poller = poller
        self.wallet = wallet

    @classmethod
    def create(
        cls,
        config: Union[ClientConfig, Mapping[str, Any]],
        transport: Optional[httpx.AsyncBaseTransport] = None,
        enable_payments: bool = True,
        session_clock: Callable[[], float] = time.time,
        **poller_options: Any,
    ) -> "BloomfilterClient":
        """
        Validate config and wire transport, session and poller.

        Args:
            config: ClientConfig or raw mapping (validated here)
            transport: Optional httpx transport
            enable_payments: Decorate the transport with x402 when a wallet exists
            session_clock: Epoch-seconds clock for token expiry; the poller clock
                is monotonic and passed separately in poller_options
            poller_options: Forwarded to JobPoller (interval, timeout, clock, sleep)

        Raises:
            ConfigInvalidError: Before any network activity
        """
        config = validate_config(config)

        wallet = None
        if config.private_key:
            wallet = Wallet.from_key(config.private_key)
            logger.info(f"Wallet: {wallet.address}")

        payments = X402PaymentMiddleware(wallet) if wallet and enable_payments else None
        http = build_http_client(config, wallet, payments=payments, transport=transport)

        session = SessionManager(http, config, wallet, clock=session_clock)
        poller = JobPoller(http, session, **poller_options)
        return cls(config, http, session, poller, wallet)

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
        return False

    # =========================================================================
    # Session
    # =========================================================================

    async def ensure_auth(self) -> None:
        """Ensure a valid access token is cached (lazy SIWE flow)."""
        await self.session.ensure_authenticated()

    def get_auth_headers(self) -> Dict[str, str]:
        return self.session.get_auth_headers()

    def requires_private_key(self) -> Optional[ToolResult]:
        """Error result when no wallet is configured, None otherwise."""
        if self.wallet is not None:
            return None
        return ToolResult.error(PRIVATE_KEY_REQUIRED)

    async def poll_job_status(self, job_id: str) -> JobStatus:
        return await self.poller.poll(job_id)

    async def _request(
        self,
        method: str,
        url: str,
        authenticated: bool = False,
        **kwargs: Any,
    ) -> httpx.Response:
        if authenticated:
            await self.session.ensure_authenticated()
            kwargs["headers"] = {**kwargs.get("headers", {}), **self.get_auth_headers()}
        response = await self.http.request(method, url, **kwargs)
        response.raise_for_status()
        return response

    # =========================================================================
    # Free Operations
    # =========================================================================

    async def search_domains(self, query: str, tlds: Optional[str] = None) -> SearchResponse:
        """Check availability and price of a name across TLDs."""
        params = {"query": query}
        if tlds:
            params["tlds"] = tlds
        response = await self._request("GET", "/domains/search", params=params)
        return SearchResponse.from_dict(response.json())

    async def get_pricing(self, tld: Optional[str] = None) -> List[TldPricing]:
        """Pricing for one TLD, or for all TLDs when tld is None."""
        if tld:
            response = await self._request("GET", f"/domains/pricing/{_segment(tld)}")
            data = response.json()
            if isinstance(data, dict) and "pricing" not in data:
                return [TldPricing.from_dict(data)]
            return parse_pricing(data)

        response = await self._request("GET", "/domains/pricing")
        return parse_pricing(response.json())

    # =========================================================================
    # Domain Operations
    # =========================================================================

    async def get_domain_info(self, domain: str) -> DomainInfo:
        response = await self._request(
            "GET", f"/domains/{_segment(domain)}", authenticated=True
        )
        return DomainInfo.from_dict(response.json())

    async def register_domain(self, domain: str, years: int = 1) -> RegistrationResult:
        """
        Register a domain. Paid via x402.

        A 202 response carries a job id; the job is polled to completion
        and its result returned.
        """
        response = await self._request(
            "POST",
            "/domains/register",
            authenticated=True,
            json={"domain": domain, "years": years},
        )
        result = RegistrationResult.from_dict(response.json())

        if response.status_code == 202 and result.job_id:
            logger.info(f"Registration queued (job {result.job_id}), polling...")
            job = await self.poll_job_status(result.job_id)
            if job.result:
                result = RegistrationResult.from_dict(job.result)
        return result

    async def renew_domain(self, domain: str, years: int = 1) -> RenewalResult:
        """Renew a domain. Paid via x402; 202 responses are polled."""
        response = await self._request(
            "POST",
            "/domains/renew",
            authenticated=True,
            json={"domain": domain, "years": years},
        )
        result = RenewalResult.from_dict(response.json())

        if response.status_code == 202 and result.job_id:
            logger.info(f"Renewal queued (job {result.job_id}), polling...")
            job = await self.poll_job_status(result.job_id)
            if job.result:
                result = RenewalResult.from_dict(job.result)
        return result

    # =========================================================================
    # DNS Operations
    # =========================================================================

    async def list_dns_records(self, domain: str) -> List[DnsRecord]:
        response = await self._request(
            "GET", f"/dns/{_segment(domain)}", authenticated=True
        )
        data = response.json()
        return [DnsRecord.from_dict(r) for r in data.get("records") or []]

    async def add_dns_record(
        self,
        domain: str,
        type: str,
        host: str,
        value: str,
        ttl: Optional[int] = None,
        distance: Optional[int] = None,
    ) -> DnsRecord:
        body: Dict[str, Any] = {"type": type, "host": host, "value": value}
        if ttl is not None:
            body["ttl"] = ttl
        if distance is not None:
            body["distance"] = distance

        response = await self._request(
            "POST", f"/dns/{_segment(domain)}", authenticated=True, json=body
        )
        return DnsRecord.from_dict(response.json())

    async def update_dns_record(
        self,
        domain: str,
        record_id: str,
        host: str,
        value: str,
        ttl: Optional[int] = None,
        distance: Optional[int] = None,
    ) -> DnsRecord:
        body: Dict[str, Any] = {"host": host, "value": value}
        if ttl is not None:
            body["ttl"] = ttl
        if distance is not None:
            body["distance"] = distance

        response = await self._request(
            "PUT",
            f"/dns/{_segment(domain)}/{_segment(record_id)}",
            authenticated=True,
            json=body,
        )
        return DnsRecord.from_dict(response.json())

    async def delete_dns_record(self, domain: str, record_id: str) -> None:
        await self._request(
            "DELETE",
            f"/dns/{_segment(domain)}/{_segment(record_id)}",
            authenticated=True,
        )

    # =========================================================================
    # Account
    # =========================================================================

    async def get_account(self) -> AccountInfo:
        response = await self._request("GET", "/account", authenticated=True)
        return AccountInfo.from_dict(response.json())
