"""
WalletAddress value object - Immutable EVM account address.
"""

from dataclasses import dataclass

from web3 import Web3

from comptoir.utils.validation import is_evm_address


@dataclass(frozen=True)
class WalletAddress:
    """
    Value object representing a validated EVM wallet address.

    Business rules:
    - 0x followed by 40 hexadecimal characters
    - Checksum-agnostic on input, stored in EIP-55 checksum form
    - Immutable once created
    """

    address: str

    def __post_init__(self):
        """Validate and normalize wallet address on creation."""
        if not self.address:
            raise ValueError("Wallet address cannot be empty")

        if not is_evm_address(self.address):
            raise ValueError(f"Invalid wallet address: {self.address}")

        object.__setattr__(self, "address", Web3.to_checksum_address(self.address))

    def __str__(self) -> str:
        """String representation returns full checksummed address."""
        return self.address
