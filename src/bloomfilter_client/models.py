"""
Bloomfilter Client Models

Data classes for API requests and responses.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


JOB_PENDING = "pending"
JOB_PROCESSING = "processing"
JOB_COMPLETED = "completed"
JOB_FAILED = "failed"

DNS_RECORD_TYPES = ("A", "AAAA", "CNAME", "MX", "TXT", "NS", "SRV", "CAA", "FORWARD")


# =============================================================================
# Tool Result
# =============================================================================

@dataclass
class ToolResult:
    """Uniform outcome of a tool call: human-readable text plus an error flag."""
    text: str
    is_error: bool = False

    @classmethod
    def error(cls, text: str) -> "ToolResult":
        return cls(text=text, is_error=True)

    def to_dict(self) -> Dict[str, Any]:
        """Render in the MCP tool-result wire shape."""
        result: Dict[str, Any] = {"content": [{"type": "text", "text": self.text}]}
        if self.is_error:
            result["isError"] = True
        return result


# =============================================================================
# Auth Models
# =============================================================================

@dataclass
class NonceResponse:
    """SIWE challenge issued by /auth/nonce."""
    nonce: str
    domain: Optional[str] = None
    uri: Optional[str] = None
    chain_id: Optional[int] = None
    version: Optional[str] = None
    expires_in: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NonceResponse":
        chain_id = data.get("chainId")
        return cls(
            nonce=data["nonce"],
            domain=data.get("domain"),
            uri=data.get("uri"),
            chain_id=int(chain_id) if chain_id is not None else None,
            version=data.get("version"),
            expires_in=data.get("expiresIn"),
        )


@dataclass
class AuthTokens:
    """Tokens returned by /auth/verify and /auth/refresh."""
    access_token: str
    refresh_token: str
    expires_in: int
    wallet_address: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuthTokens":
        return cls(
            access_token=data["accessToken"],
            refresh_token=data["refreshToken"],
            expires_in=int(data["expiresIn"]),
            wallet_address=data.get("walletAddress"),
        )


# =============================================================================
# Domain Models
# =============================================================================

@dataclass
class SearchResult:
    """Availability of a single domain."""
    domain: str
    available: bool
    premium: bool = False
    price_cents: Optional[int] = None
    price_usd: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchResult":
        return cls(
            domain=data["domain"],
            available=bool(data.get("available")),
            premium=bool(data.get("premium")),
            price_cents=data.get("priceCents"),
            price_usd=data.get("priceUsd"),
        )


@dataclass
class SearchResponse:
    """Domain search response."""
    query: str
    results: List[SearchResult] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchResponse":
        return cls(
            query=data.get("query", ""),
            results=[SearchResult.from_dict(r) for r in data.get("results") or []],
        )


@dataclass
class TldPricing:
    """Registration, renewal and transfer prices for one TLD."""
    tld: str
    registration_price_usd: str
    renewal_price_usd: str
    transfer_price_usd: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TldPricing":
        return cls(
            tld=data["tld"],
            registration_price_usd=str(data.get("registration_price_usd", "")),
            renewal_price_usd=str(data.get("renewal_price_usd", "")),
            transfer_price_usd=str(data.get("transfer_price_usd", "")),
        )


@dataclass
class DomainInfo:
    """Registered domain details."""
    domain: str
    status: str
    registered_at: Optional[str] = None
    expires_at: Optional[str] = None
    auto_renew: bool = False
    locked: bool = False
    nameservers: List[str] = field(default_factory=list)
    wallet_address: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DomainInfo":
        return cls(
            domain=data["domain"],
            status=data.get("status", ""),
            registered_at=data.get("registeredAt"),
            expires_at=data.get("expiresAt"),
            auto_renew=bool(data.get("autoRenew")),
            locked=bool(data.get("locked")),
            nameservers=list(data.get("nameservers") or []),
            wallet_address=data.get("walletAddress"),
        )


@dataclass
class PaymentInfo:
    """x402 settlement attached to a paid operation."""
    amount_usd: str
    network: str
    settled: bool = False
    tx_hash: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["PaymentInfo"]:
        if not data:
            return None
        return cls(
            amount_usd=str(data.get("amountUsd", "")),
            network=data.get("network", ""),
            settled=bool(data.get("settled")),
            tx_hash=data.get("txHash"),
        )


@dataclass
class DnsRecordSummary:
    """DNS record created alongside a registration."""
    type: str
    host: str
    value: str


@dataclass
class RegistrationResult:
    """Domain registration response (sync 201 or async 202)."""
    domain: str
    status: Optional[str] = None
    registered_at: Optional[str] = None
    expires_at: Optional[str] = None
    job_id: Optional[str] = None
    payment: Optional[PaymentInfo] = None
    dns_records: List[DnsRecordSummary] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RegistrationResult":
        return cls(
            domain=data.get("domain", ""),
            status=data.get("status"),
            registered_at=data.get("registeredAt"),
            expires_at=data.get("expiresAt"),
            job_id=data.get("jobId"),
            payment=PaymentInfo.from_dict(data.get("payment")),
            dns_records=[
                DnsRecordSummary(type=r["type"], host=r["host"], value=r["value"])
                for r in data.get("dnsRecords") or []
            ],
            warnings=list(data.get("warnings") or []),
        )


@dataclass
class RenewalResult:
    """Domain renewal response (sync 201 or async 202)."""
    domain: str
    renewed_at: Optional[str] = None
    new_expires_at: Optional[str] = None
    job_id: Optional[str] = None
    payment: Optional[PaymentInfo] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RenewalResult":
        return cls(
            domain=data.get("domain", ""),
            renewed_at=data.get("renewedAt"),
            new_expires_at=data.get("newExpiresAt"),
            job_id=data.get("jobId"),
            payment=PaymentInfo.from_dict(data.get("payment")),
        )


@dataclass
class JobStatus:
    """Server-owned provisioning job, observed through /domains/status."""
    job_id: str
    status: str
    domain: Optional[str] = None
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (JOB_COMPLETED, JOB_FAILED)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobStatus":
        return cls(
            job_id=data.get("jobId", ""),
            status=data.get("status", ""),
            domain=data.get("domain"),
            result=data.get("result"),
            error=data.get("error"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )


# =============================================================================
# DNS and Account Models
# =============================================================================

@dataclass
class DnsRecord:
    """DNS record as stored by the API."""
    record_id: str
    type: str
    host: str
    value: str
    ttl: int
    distance: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DnsRecord":
        return cls(
            record_id=str(data["recordId"]),
            type=data["type"],
            host=data["host"],
            value=data["value"],
            ttl=int(data.get("ttl", 0)),
            distance=data.get("distance"),
        )


@dataclass
class AccountInfo:
    """Account summary for the authenticated wallet."""
    wallet_address: str
    domains_registered: int = 0
    total_spent_cents: int = 0
    created_at: Optional[str] = None
    last_active_at: Optional[str] = None

    @property
    def total_spent_usd(self) -> str:
        return f"{self.total_spent_cents / 100:.2f}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AccountInfo":
        return cls(
            wallet_address=data["wallet_address"],
            domains_registered=int(data.get("domains_registered", 0)),
            total_spent_cents=int(data.get("total_spent_cents", 0)),
            created_at=data.get("created_at"),
            last_active_at=data.get("last_active_at"),
        )


def parse_pricing(data: Union[Dict[str, Any], List[Dict[str, Any]]]) -> List[TldPricing]:
    """Accept a bare list, {"pricing": [...]} or {"pricing": {...}}."""
    if isinstance(data, list):
        items = data
    else:
        items = data.get("pricing") or []
        if isinstance(items, dict):
            items = [items]
    return [TldPricing.from_dict(p) for p in items]
