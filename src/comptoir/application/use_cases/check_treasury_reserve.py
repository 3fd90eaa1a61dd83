"""
Check Treasury Reserve use case.
"""

from dataclasses import dataclass
from decimal import Decimal

from comptoir.domain.entities.treasury_state import TreasuryState
from comptoir.domain.exceptions import InsufficientReserveError, InvalidAmountError
from comptoir.domain.services.i_chain_client import IChainClient
from comptoir.utils.units import format_units, to_smallest_unit


@dataclass(frozen=True)
class ReserveCheck:
    """
    Result of a passed reserve check.

    Attributes:
        required: Payout in smallest units
        treasury: Treasury state the check was made against
    """

    required: int
    treasury: TreasuryState


class CheckTreasuryReserve:
    """
    Check the treasury can cover a payout.

    Decimals and balance are both read fresh on every call; nothing
    is hard-coded or cached.
    """

    def __init__(
        self,
        chain_client: IChainClient,
        token_address: str,
        treasury_address: str,
        token_symbol: str = "MZLx",
    ):
        self.chain_client = chain_client
        self.token_address = token_address
        self.treasury_address = treasury_address
        self.token_symbol = token_symbol

    async def execute(self, payout_amount: Decimal) -> ReserveCheck:
        """
        Convert the payout to smallest units and compare to the balance.

        Args:
            payout_amount: Human-readable payout amount

        Returns:
            ReserveCheck with the integer payout amount

        Raises:
            InvalidAmountError: If payout has more decimals than the token,
                is out of uint256 range or scales to zero units
            InsufficientReserveError: If treasury balance is too low
            ChainTransportError: If the node is unreachable
        """
        decimals = await self.chain_client.get_token_decimals(self.token_address)

        try:
            required = to_smallest_unit(payout_amount, decimals)
        except ValueError as e:
            raise InvalidAmountError(self.token_symbol, str(e))
        if required <= 0:
            raise InvalidAmountError(self.token_symbol, "payout is zero token units")

        balance = await self.chain_client.get_token_balance(
            self.token_address, self.treasury_address
        )
        treasury = TreasuryState(token_balance=balance, decimals=decimals)

        if balance < required:
            raise InsufficientReserveError(
                available=treasury.formatted_balance,
                required=format_units(required, decimals),
                symbol=self.token_symbol,
            )

        return ReserveCheck(required=required, treasury=treasury)
