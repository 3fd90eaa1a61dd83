"""
EVM chain client implementation.

web3.py client for reading transactions and ERC-20 state and for
signing treasury payouts.
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, TypeVar

import aiohttp
from eth_abi.exceptions import DecodingError
from eth_account import Account
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from web3 import AsyncWeb3, Web3
from web3.exceptions import (
    LogTopicError,
    MismatchedABI,
    TimeExhausted,
    TransactionNotFound,
    Web3Exception,
)

from comptoir.domain.entities.chain_transaction import (
    ChainTransaction,
    TransactionStatus,
    TransferEvent,
)
from comptoir.domain.exceptions import ChainTransportError
from comptoir.domain.services.i_chain_client import IChainClient
from comptoir.infrastructure.blockchain.erc20_abi import ERC20_ABI
from comptoir.infrastructure.monitoring import metrics

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Errors worth another attempt on read-only calls
TRANSIENT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, ConnectionError)


class EvmChainClient(IChainClient):
    """
    web3.py client for an EVM JSON-RPC node.

    Read calls get a per-call timeout and retries on transport errors.
    Payout submission is never retried: nonce lookup, signing and
    broadcast run under one lock so concurrent payouts from the admin
    account get distinct, increasing nonces.
    """

    def __init__(
        self,
        rpc_url: str,
        private_key: str,
        chain_id: int,
        request_timeout: float = 15.0,
        receipt_timeout: float = 180.0,
        poll_interval: float = 2.0,
        max_retries: int = 3,
        w3: Optional[AsyncWeb3] = None,
    ):
        """
        Initialize EVM chain client.

        Args:
            rpc_url: JSON-RPC endpoint URL
            private_key: Admin signing key (hex, without 0x)
            chain_id: Chain id used for transaction signing
            request_timeout: Per-call timeout for reads in seconds
            receipt_timeout: Max wait for a transaction to be mined
            poll_interval: Receipt polling interval in seconds
            max_retries: Max attempts for read calls
            w3: Optional preconfigured AsyncWeb3 (for testing)
        """
        self.rpc_url = rpc_url
        self.chain_id = chain_id
        self.request_timeout = request_timeout
        self.receipt_timeout = receipt_timeout
        self.poll_interval = poll_interval
        self.max_retries = max_retries

        self.w3 = w3 or AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))
        self._account = Account.from_key("0x" + private_key.removeprefix("0x"))
        self._nonce_lock = asyncio.Lock()
        self._contracts: Dict[str, Any] = {}

        # Log decoding is pure ABI work, no provider needed
        self._transfer_event = Web3().eth.contract(abi=ERC20_ABI).events.Transfer()

    @property
    def admin_address(self) -> str:
        """Address of the signing account."""
        return self._account.address

    # ================================================================
    # Reads
    # ================================================================

    async def get_transaction(self, tx_hash: str) -> Optional[ChainTransaction]:
        """Fetch transaction by hash, None if the node does not know it."""

        async def fetch():
            try:
                return await self.w3.eth.get_transaction(tx_hash)
            except TransactionNotFound:
                return None

        tx = await self._call("get_transaction", fetch)
        if tx is None:
            return None

        return ChainTransaction(
            tx_hash=Web3.to_hex(tx["hash"]),
            sender=tx.get("from"),
            to=tx.get("to"),
            status=TransactionStatus.PENDING,
            block_number=tx.get("blockNumber"),
        )

    async def wait_for_receipt(self, tx_hash: str) -> ChainTransaction:
        """Wait for the transaction to be mined and return it with logs."""
        started = time.perf_counter()
        metrics.blockchain_requests_total.labels(operation="wait_for_receipt").inc()
        try:
            receipt = await self.w3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=self.receipt_timeout,
                poll_latency=self.poll_interval,
            )
        except TimeExhausted:
            metrics.blockchain_errors_total.labels(
                operation="wait_for_receipt", error_type="TimeExhausted"
            ).inc()
            raise ChainTransportError(
                "wait_for_receipt",
                f"Transaction not mined within {self.receipt_timeout:g} seconds",
            )
        except (Web3Exception, *TRANSIENT_ERRORS) as e:
            metrics.blockchain_errors_total.labels(
                operation="wait_for_receipt", error_type=type(e).__name__
            ).inc()
            raise ChainTransportError("wait_for_receipt", self._sanitize(e))
        finally:
            metrics.blockchain_request_duration_seconds.labels(
                operation="wait_for_receipt"
            ).observe(time.perf_counter() - started)

        return ChainTransaction(
            tx_hash=Web3.to_hex(receipt["transactionHash"]),
            sender=receipt.get("from"),
            to=receipt.get("to"),
            status=(
                TransactionStatus.SUCCESS
                if receipt.get("status") == 1
                else TransactionStatus.FAILED
            ),
            logs=tuple(receipt.get("logs", [])),
            block_number=receipt.get("blockNumber"),
        )

    async def get_token_balance(self, token_address: str, owner: str) -> int:
        """Read ERC-20 balanceOf(owner)."""
        contract = self._token(token_address)
        owner = Web3.to_checksum_address(owner)
        balance = await self._call(
            "balance_of",
            lambda: contract.functions.balanceOf(owner).call(),
        )
        return int(balance)

    async def get_token_decimals(self, token_address: str) -> int:
        """Read ERC-20 decimals()."""
        contract = self._token(token_address)
        decimals = await self._call(
            "decimals",
            lambda: contract.functions.decimals().call(),
        )
        return int(decimals)

    def decode_transfer_log(self, log: Mapping[str, Any]) -> Optional[TransferEvent]:
        """Decode a Transfer log; anything that does not match yields None."""
        try:
            event = self._transfer_event.process_log(log)
        except (
            MismatchedABI,
            LogTopicError,
            DecodingError,
            KeyError,
            TypeError,
            ValueError,
        ):
            return None

        args = event["args"]
        return TransferEvent(
            token=event["address"],
            sender=args["from"],
            recipient=args["to"],
            value=int(args["value"]),
        )

    # ================================================================
    # Writes
    # ================================================================

    async def submit_token_transfer(
        self,
        token_address: str,
        recipient: str,
        amount: int,
    ) -> str:
        """Sign and broadcast transfer(recipient, amount) from the admin."""
        contract = self._token(token_address)
        recipient = Web3.to_checksum_address(recipient)

        async with self._nonce_lock:
            nonce = await self._call(
                "get_transaction_count",
                lambda: self.w3.eth.get_transaction_count(
                    self.admin_address, "pending"
                ),
            )

            started = time.perf_counter()
            metrics.blockchain_requests_total.labels(operation="send_transfer").inc()
            try:
                tx = await asyncio.wait_for(
                    contract.functions.transfer(recipient, amount).build_transaction(
                        {
                            "from": self.admin_address,
                            "nonce": nonce,
                            "chainId": self.chain_id,
                        }
                    ),
                    timeout=self.request_timeout,
                )
                signed = self._account.sign_transaction(tx)
                tx_hash = await asyncio.wait_for(
                    self.w3.eth.send_raw_transaction(signed.raw_transaction),
                    timeout=self.request_timeout,
                )
            except (Web3Exception, *TRANSIENT_ERRORS) as e:
                metrics.blockchain_errors_total.labels(
                    operation="send_transfer", error_type=type(e).__name__
                ).inc()
                raise ChainTransportError("submit_token_transfer", self._sanitize(e))
            finally:
                metrics.blockchain_request_duration_seconds.labels(
                    operation="send_transfer"
                ).observe(time.perf_counter() - started)

        return Web3.to_hex(tx_hash)

    async def close(self) -> None:
        """Close provider sessions."""
        await self.w3.provider.disconnect()

    # ================================================================
    # Helpers
    # ================================================================

    def _token(self, token_address: str):
        """Get cached contract wrapper for a token."""
        address = Web3.to_checksum_address(token_address)
        if address not in self._contracts:
            self._contracts[address] = self.w3.eth.contract(
                address=address, abi=ERC20_ABI
            )
        return self._contracts[address]

    async def _call(self, operation: str, fn: Callable[[], Awaitable[T]]) -> T:
        """
        Run a read call with timeout and retries.

        Args:
            operation: Operation name for metrics and errors
            fn: Factory producing a fresh awaitable per attempt

        Raises:
            ChainTransportError: If all attempts fail or the node errors
        """
        started = time.perf_counter()
        metrics.blockchain_requests_total.labels(operation=operation).inc()
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_retries),
                wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
                retry=retry_if_exception_type(TRANSIENT_ERRORS),
                reraise=True,
            ):
                with attempt:
                    return await asyncio.wait_for(fn(), timeout=self.request_timeout)
        except (Web3Exception, *TRANSIENT_ERRORS) as e:
            metrics.blockchain_errors_total.labels(
                operation=operation, error_type=type(e).__name__
            ).inc()
            logger.warning(f"Chain call {operation} failed: {type(e).__name__}")
            raise ChainTransportError(operation, self._sanitize(e))
        finally:
            metrics.blockchain_request_duration_seconds.labels(
                operation=operation
            ).observe(time.perf_counter() - started)

    def _sanitize(self, error: BaseException) -> str:
        """Describe an error without leaking the RPC URL."""
        text = str(error).replace(self.rpc_url, "<rpc>") or "no detail"
        return f"{type(error).__name__}: {text}"
