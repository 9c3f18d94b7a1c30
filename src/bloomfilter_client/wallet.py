"""
Wallet identity: local keypair used for SIWE auth and x402 payment signing.
"""

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount


class Wallet:
    """EVM wallet derived once from a private key. Immutable."""

    def __init__(self, account: LocalAccount):
        self._account = account

    @classmethod
    def from_key(cls, private_key: str) -> "Wallet":
        """Create wallet from raw private key (hex string, 0x optional)."""
        return cls(Account.from_key(private_key))

    @property
    def address(self) -> str:
        """Checksummed wallet address (0x...)."""
        return self._account.address

    @property
    def account(self) -> LocalAccount:
        return self._account

    def sign_message(self, message: str) -> str:
        """Sign a text message (EIP-191). Returns the 0x-prefixed signature."""
        signed = self._account.sign_message(encode_defunct(text=message))
        signature = signed.signature.hex()
        if not signature.startswith("0x"):
            signature = "0x" + signature
        return signature

    def __repr__(self):
        return f"Wallet({self.address})"
