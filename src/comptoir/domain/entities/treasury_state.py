"""
Treasury state entity.
"""

from dataclasses import dataclass

from comptoir.utils.units import format_units


@dataclass(frozen=True)
class TreasuryState:
    """
    Treasury payout-token holdings, read fresh from chain.

    Never cached: a stale balance risks overpaying.
    """

    token_balance: int
    decimals: int

    @property
    def formatted_balance(self) -> str:
        """Human-readable balance."""
        return format_units(self.token_balance, self.decimals)
