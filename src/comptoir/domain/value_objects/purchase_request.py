"""
PurchaseRequest value object and input validation.

Turns the untrusted request body into a typed request, or rejects it
before anything touches the chain.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from comptoir.domain.exceptions import (
    InvalidAddressError,
    InvalidAmountError,
    InvalidTransactionHashError,
)
from comptoir.domain.value_objects.wallet_address import WalletAddress
from comptoir.utils.validation import (
    is_evm_address,
    is_tx_hash,
    parse_positive_decimal,
)


@dataclass(frozen=True)
class PurchaseRequest:
    """
    Validated purchase request.

    Attributes:
        buyer_address: Wallet receiving the payout tokens
        stable_amount: Stablecoin amount the buyer claims to have paid
        payout_amount: Payout tokens requested
        proof_tx_hash: Stablecoin transfer hash (None when proof not required)
    """

    buyer_address: WalletAddress
    stable_amount: Decimal
    payout_amount: Decimal
    proof_tx_hash: Optional[str] = None


def parse_purchase_request(
    wallet_address: Any,
    stable_amount: Any,
    payout_amount: Any,
    tx_hash: Any = None,
    require_proof: bool = True,
    stable_symbol: str = "USDT",
    payout_symbol: str = "MZLx",
) -> PurchaseRequest:
    """
    Validate raw purchase fields.

    Checks run in a fixed order: address, stablecoin amount, payout
    amount, transaction hash. The first failure wins.

    Args:
        wallet_address: Raw buyer address
        stable_amount: Raw stablecoin amount
        payout_amount: Raw payout token amount
        tx_hash: Raw proof transaction hash
        require_proof: Whether a proof hash is mandatory
        stable_symbol: Stablecoin symbol used in rejection messages
        payout_symbol: Payout token symbol used in rejection messages

    Returns:
        Validated PurchaseRequest

    Raises:
        InvalidAddressError: If wallet address is malformed
        InvalidAmountError: If an amount is not a positive finite number
        InvalidTransactionHashError: If proof hash is missing or malformed
    """
    if not is_evm_address(wallet_address):
        raise InvalidAddressError(wallet_address)

    parsed_stable = parse_positive_decimal(stable_amount)
    if parsed_stable is None:
        raise InvalidAmountError(stable_symbol)

    parsed_payout = parse_positive_decimal(payout_amount)
    if parsed_payout is None:
        raise InvalidAmountError(payout_symbol)

    if tx_hash is None or tx_hash == "":
        if require_proof:
            raise InvalidTransactionHashError()
        proof = None
    elif is_tx_hash(tx_hash):
        proof = tx_hash.lower()
    else:
        raise InvalidTransactionHashError()

    return PurchaseRequest(
        buyer_address=WalletAddress(wallet_address),
        stable_amount=parsed_stable,
        payout_amount=parsed_payout,
        proof_tx_hash=proof,
    )
