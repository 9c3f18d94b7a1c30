"""
Sign-In With Ethereum (EIP-4361) message construction.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

SIWE_VERSION = "1"


def format_issued_at(moment: datetime) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class SiweMessage:
    """Fields bound by a SIWE sign-in message."""
    domain: str
    address: str
    uri: str
    chain_id: int
    nonce: str
    issued_at: datetime
    version: str = SIWE_VERSION
    statement: Optional[str] = None

    def prepare(self) -> str:
        """Render the message text exactly as it will be signed."""
        prefix = (
            f"{self.domain} wants you to sign in with your Ethereum account:\n"
            f"{self.address}"
        )
        if self.statement:
            prefix = f"{prefix}\n\n{self.statement}"
        else:
            prefix += "\n"

        suffix = "\n".join([
            f"URI: {self.uri}",
            f"Version: {self.version}",
            f"Chain ID: {self.chain_id}",
            f"Nonce: {self.nonce}",
            f"Issued At: {format_issued_at(self.issued_at)}",
        ])
        return f"{prefix}\n\n{suffix}"
