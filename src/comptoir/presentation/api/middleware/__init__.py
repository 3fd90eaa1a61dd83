"""
API middleware and exception handlers.
"""

from comptoir.presentation.api.middleware.error_handler import (
    comptoir_exception_handler,
    error_response,
    status_for_code,
    unhandled_exception_handler,
    validation_exception_handler,
)
from comptoir.presentation.api.middleware.metrics_middleware import (
    MetricsMiddleware,
)
from comptoir.presentation.api.middleware.request_id_middleware import (
    RequestIDMiddleware,
)

__all__ = [
    "MetricsMiddleware",
    "RequestIDMiddleware",
    "comptoir_exception_handler",
    "error_response",
    "status_for_code",
    "unhandled_exception_handler",
    "validation_exception_handler",
]
