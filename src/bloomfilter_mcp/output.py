"""
Tool Output Formatting

Renders API results as human-readable text for agents.
"""

from typing import List

import click

from bloomfilter_client.models import (
    AccountInfo,
    DnsRecord,
    DomainInfo,
    JobStatus,
    PaymentInfo,
    RegistrationResult,
    RenewalResult,
    SearchResponse,
    TldPricing,
)

DIVIDER_CHAR = "─"


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def format_search(query: str, response: SearchResponse) -> str:
    if not response.results:
        return f'No results found for "{query}".'

    lines = []
    for r in response.results:
        if not r.available:
            lines.append(f"  ❌ {r.domain} — unavailable")
            continue
        if r.price_usd:
            price = f"${r.price_usd}"
        elif r.price_cents:
            price = f"${r.price_cents / 100:.2f}"
        else:
            price = "price unavailable"
        premium = " (premium)" if r.premium else ""
        lines.append(f"  ✅ {r.domain} — {price}/yr{premium}")

    return f'Domain search results for "{query}":\n\n' + "\n".join(lines)


def format_tld_pricing(p: TldPricing) -> str:
    return "\n".join([
        f"Pricing for .{p.tld}:",
        f"  Registration: ${p.registration_price_usd}",
        f"  Renewal:      ${p.renewal_price_usd}",
        f"  Transfer:     ${p.transfer_price_usd}",
    ])


def format_pricing_table(pricing: List[TldPricing]) -> str:
    """
    Format pricing for many TLDs as a fixed-width table.

    Args:
        pricing: One entry per TLD

    Returns:
        Table string
    """
    if not pricing:
        return "No pricing data available."

    header = "TLD        Registration   Renewal        Transfer"
    divider = DIVIDER_CHAR * len(header)
    rows = [
        f".{p.tld}".ljust(11)
        + f"${p.registration_price_usd}".ljust(15)
        + f"${p.renewal_price_usd}".ljust(15)
        + f"${p.transfer_price_usd}"
        for p in pricing
    ]
    return f"Domain Pricing:\n\n{header}\n{divider}\n" + "\n".join(rows)


def format_domain_info(info: DomainInfo) -> str:
    nameservers = ", ".join(info.nameservers) if info.nameservers else "none"
    return "\n".join([
        f"Domain: {info.domain}",
        f"Status: {info.status}",
        f"Created: {info.registered_at}",
        f"Expires: {info.expires_at}",
        f"Auto-Renew: {_yes_no(info.auto_renew)}",
        f"Locked: {_yes_no(info.locked)}",
        f"Nameservers: {nameservers}",
        f"Owner: {info.wallet_address}",
    ])


def _payment_lines(payment: PaymentInfo) -> List[str]:
    lines = [f"Cost: ${payment.amount_usd}"]
    if payment.tx_hash:
        lines.append(f"Transaction: {payment.tx_hash}")
    lines.append(f"Network: {payment.network}")
    return lines


def format_registration(result: RegistrationResult) -> str:
    lines = [f"Domain registered: {result.domain}", f"Status: {result.status}"]

    if result.expires_at:
        lines.append(f"Expires: {result.expires_at}")
    if result.payment:
        lines.extend(_payment_lines(result.payment))
    if result.dns_records:
        lines.append("")
        lines.append("DNS Records:")
        for record in result.dns_records:
            lines.append(f"  {record.type} {record.host} → {record.value}")
    if result.warnings:
        lines.append("")
        lines.append("Warnings:")
        for warning in result.warnings:
            lines.append(f"  ⚠ {warning}")

    return "\n".join(lines)


def format_renewal(result: RenewalResult) -> str:
    lines = [f"Domain renewed: {result.domain}"]
    if result.new_expires_at:
        lines.append(f"New Expiry: {result.new_expires_at}")
    if result.payment:
        lines.extend(_payment_lines(result.payment))
    return "\n".join(lines)


def format_dns_table(domain: str, records: List[DnsRecord]) -> str:
    if not records:
        return f"No DNS records found for {domain}."

    header = "ID             Type    Host                 Value                          TTL"
    divider = DIVIDER_CHAR * len(header)
    rows = []
    for r in records:
        distance = f" (priority: {r.distance})" if r.distance is not None else ""
        rows.append(
            r.record_id.ljust(15)
            + r.type.ljust(8)
            + r.host[:20].ljust(21)
            + r.value[:30].ljust(31)
            + str(r.ttl)
            + distance
        )
    return f"DNS records for {domain}:\n\n{header}\n{divider}\n" + "\n".join(rows)


def format_dns_record(title: str, record: DnsRecord) -> str:
    lines = [
        title,
        f"  Record ID: {record.record_id}",
        f"  Type: {record.type}",
        f"  Host: {record.host}",
        f"  Value: {record.value}",
        f"  TTL: {record.ttl}",
    ]
    if record.distance is not None:
        lines.append(f"  Priority: {record.distance}")
    return "\n".join(lines)


def format_account(account: AccountInfo) -> str:
    return "\n".join([
        "Account Information:",
        f"  Wallet: {account.wallet_address}",
        f"  Domains: {account.domains_registered}",
        f"  Total Spent: ${account.total_spent_usd}",
        f"  Member Since: {account.created_at}",
        f"  Last Active: {account.last_active_at}",
    ])


def format_job(job: JobStatus) -> str:
    lines = [f"Job {job.job_id}: {job.status}"]
    if job.domain:
        lines.append(f"Domain: {job.domain}")
    if job.error:
        lines.append(f"Error: {job.error}")
    if job.updated_at:
        lines.append(f"Updated: {job.updated_at}")
    return "\n".join(lines)


def print_success(message: str) -> None:
    """Print success message."""
    click.echo(f"SUCCESS: {message}")


def print_error(message: str) -> None:
    """Print error message to stderr."""
    click.echo(f"ERROR: {message}", err=True)


def print_info(message: str) -> None:
    click.echo(f"INFO: {message}")
