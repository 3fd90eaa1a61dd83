"""
Domain service interfaces.
"""

from comptoir.domain.services.i_chain_client import IChainClient

__all__ = ["IChainClient"]
