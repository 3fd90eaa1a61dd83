"""
Global error handling middleware.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from comptoir.domain.exceptions import ComptoirException

logger = logging.getLogger(__name__)

STATUS_CODE_MAP = {
    "INVALID_ADDRESS": status.HTTP_400_BAD_REQUEST,
    "INVALID_AMOUNT": status.HTTP_400_BAD_REQUEST,
    "INVALID_TX_HASH": status.HTTP_400_BAD_REQUEST,
    "TX_FAILED": status.HTTP_400_BAD_REQUEST,
    "NOT_STABLECOIN_TX": status.HTTP_400_BAD_REQUEST,
    "NO_QUALIFYING_TRANSFER": status.HTTP_400_BAD_REQUEST,
    "INSUFFICIENT_RESERVE": status.HTTP_400_BAD_REQUEST,
    "TX_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "PROOF_ALREADY_CONSUMED": status.HTTP_409_CONFLICT,
    "PAYOUT_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "CHAIN_UNAVAILABLE": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "BALANCE_UNAVAILABLE": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for_code(code: Optional[str]) -> int:
    """Map a domain reason code to an HTTP status (500 if unknown)."""
    return STATUS_CODE_MAP.get(code, status.HTTP_500_INTERNAL_SERVER_ERROR)


def error_response(
    message: str,
    code: Optional[str],
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """
    Build the JSON error response for a reason code.

    Client errors inline their context fields next to ``error`` and
    ``code``; server errors nest them under ``details``.
    """
    status_code = status_for_code(code)
    content: Dict[str, Any] = {"error": message, "code": code}

    if status_code >= 500:
        if details:
            content["details"] = details
    elif details:
        content.update(details)

    return JSONResponse(status_code=status_code, content=content)


async def comptoir_exception_handler(
    request: Request, exc: ComptoirException
) -> JSONResponse:
    """
    Handle Comptoir domain exceptions.

    Converts domain exceptions to appropriate HTTP responses.
    """
    return error_response(exc.message, exc.code, exc.details)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies are client errors, not 422s."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body", "code": "INVALID_REQUEST"},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for unexpected errors."""
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "details": type(exc).__name__},
    )
