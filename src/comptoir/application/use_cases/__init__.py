"""
Application use cases.
"""

from comptoir.application.use_cases.check_treasury_reserve import (
    CheckTreasuryReserve,
    ReserveCheck,
)
from comptoir.application.use_cases.get_treasury_health import (
    GetTreasuryHealth,
    TreasuryHealth,
)
from comptoir.application.use_cases.settle_purchase import SettlePurchase
from comptoir.application.use_cases.verify_payment_transfer import (
    VerifiedPayment,
    VerifyPaymentTransfer,
)

__all__ = [
    "CheckTreasuryReserve",
    "ReserveCheck",
    "GetTreasuryHealth",
    "TreasuryHealth",
    "SettlePurchase",
    "VerifiedPayment",
    "VerifyPaymentTransfer",
]
