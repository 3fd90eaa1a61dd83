"""
Blockchain infrastructure.
"""

from comptoir.infrastructure.blockchain.erc20_abi import ERC20_ABI
from comptoir.infrastructure.blockchain.evm_chain_client import EvmChainClient

__all__ = [
    "ERC20_ABI",
    "EvmChainClient",
]
