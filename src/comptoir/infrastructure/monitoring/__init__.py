"""
Monitoring and observability infrastructure.
"""

from comptoir.infrastructure.monitoring import metrics
from comptoir.infrastructure.monitoring.keep_alive import KeepAlivePinger
from comptoir.infrastructure.monitoring.logger import (
    get_request_id,
    set_request_id,
    setup_logging,
)

__all__ = [
    "metrics",
    "KeepAlivePinger",
    "get_request_id",
    "set_request_id",
    "setup_logging",
]
