"""
In-memory chain client for tests.

Holds transactions, receipts and token balances in dicts and counts
every call so tests can assert what touched the chain.
"""

import asyncio
from collections import Counter
from typing import Any, Dict, List, Mapping, Optional, Tuple

from comptoir.domain.entities.chain_transaction import (
    ChainTransaction,
    TransactionStatus,
    TransferEvent,
)
from comptoir.domain.services.i_chain_client import IChainClient

STABLECOIN = "0x55d398326f99059fF775485246999027B3197955"
PAYOUT_TOKEN = "0x49F4a728BD98480E92dBfc6a82d595DA9d1F7b83"
TREASURY = "0x1111111111111111111111111111111111111111"
BUYER = "0x2222222222222222222222222222222222222222"
STRANGER = "0x3333333333333333333333333333333333333333"

PROOF_HASH = "0x" + "11" * 32
OTHER_PROOF_HASH = "0x" + "22" * 32

DECIMALS = 18
ONE = 10**DECIMALS


def transfer_log(token: str, sender: str, recipient: str, value: int) -> dict:
    """Raw log entry that FakeChainClient decodes as Transfer."""
    return {
        "event": "Transfer",
        "address": token,
        "from": sender,
        "to": recipient,
        "value": value,
    }


def approval_log(token: str) -> dict:
    """Raw log entry that does not decode as Transfer."""
    return {"event": "Approval", "address": token}


class FakeChainClient(IChainClient):
    """IChainClient backed by dicts, with per-method call counters."""

    def __init__(self, admin_address: str = TREASURY):
        self._admin_address = admin_address
        self.transactions: Dict[str, ChainTransaction] = {}
        self.receipts: Dict[str, ChainTransaction] = {}
        self.balances: Dict[Tuple[str, str], int] = {}
        self.decimals: Dict[str, int] = {PAYOUT_TOKEN.lower(): DECIMALS}
        self.submitted: List[Tuple[str, str, int]] = []
        self.payout_status = TransactionStatus.SUCCESS
        self.errors: Dict[str, Exception] = {}
        self.calls: Counter = Counter()
        self.closed = False

    @property
    def admin_address(self) -> str:
        return self._admin_address

    # ================================================================
    # Scenario builders
    # ================================================================

    def add_payment(
        self,
        tx_hash: str = PROOF_HASH,
        to: Optional[str] = STABLECOIN,
        status: TransactionStatus = TransactionStatus.SUCCESS,
        logs: Optional[List[dict]] = None,
        payer: str = BUYER,
    ) -> None:
        """Register a proof transaction and its receipt."""
        if logs is None:
            logs = [transfer_log(STABLECOIN, payer, TREASURY, 100 * ONE)]
        self.transactions[tx_hash] = ChainTransaction(
            tx_hash=tx_hash, sender=payer, to=to
        )
        self.receipts[tx_hash] = ChainTransaction(
            tx_hash=tx_hash,
            sender=payer,
            to=to,
            status=status,
            logs=tuple(logs),
            block_number=1,
        )

    def set_balance(self, token: str, owner: str, amount: int) -> None:
        self.balances[(token.lower(), owner.lower())] = amount

    def balance_of(self, token: str, owner: str) -> int:
        return self.balances.get((token.lower(), owner.lower()), 0)

    @property
    def chain_calls(self) -> int:
        """Number of network calls made (decoding excluded)."""
        return sum(
            count for name, count in self.calls.items() if name != "decode_transfer_log"
        )

    # ================================================================
    # IChainClient
    # ================================================================

    async def get_transaction(self, tx_hash: str) -> Optional[ChainTransaction]:
        await self._enter("get_transaction")
        return self.transactions.get(tx_hash)

    async def wait_for_receipt(self, tx_hash: str) -> ChainTransaction:
        await self._enter("wait_for_receipt")
        return self.receipts[tx_hash]

    async def get_token_balance(self, token_address: str, owner: str) -> int:
        await self._enter("get_token_balance")
        return self.balance_of(token_address, owner)

    async def get_token_decimals(self, token_address: str) -> int:
        await self._enter("get_token_decimals")
        return self.decimals[token_address.lower()]

    def decode_transfer_log(self, log: Mapping[str, Any]) -> Optional[TransferEvent]:
        self.calls["decode_transfer_log"] += 1
        if log.get("event") != "Transfer":
            return None
        return TransferEvent(
            token=log["address"],
            sender=log["from"],
            recipient=log["to"],
            value=log["value"],
        )

    async def submit_token_transfer(
        self, token_address: str, recipient: str, amount: int
    ) -> str:
        await self._enter("submit_token_transfer")
        self.submitted.append((token_address, recipient, amount))

        tx_hash = "0x" + f"{len(self.submitted):064x}"
        if self.payout_status == TransactionStatus.SUCCESS:
            owner = self.admin_address
            self.set_balance(
                token_address, owner, self.balance_of(token_address, owner) - amount
            )
            self.set_balance(
                token_address,
                recipient,
                self.balance_of(token_address, recipient) + amount,
            )
        self.receipts[tx_hash] = ChainTransaction(
            tx_hash=tx_hash,
            sender=self.admin_address,
            to=token_address,
            status=self.payout_status,
            block_number=2,
        )
        return tx_hash

    async def close(self) -> None:
        self.closed = True

    async def _enter(self, operation: str) -> None:
        """Count the call, yield to the loop, raise a scripted error."""
        self.calls[operation] += 1
        await asyncio.sleep(0)
        if operation in self.errors:
            raise self.errors[operation]
