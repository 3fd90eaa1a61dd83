"""
Domain repository interfaces.
"""

from comptoir.domain.repositories.i_purchase_ledger import IPurchaseLedger

__all__ = ["IPurchaseLedger"]
