"""
Base domain exceptions.
"""

from typing import Any, Dict, Optional


class ComptoirException(Exception):
    """Base exception for all Comptoir domain errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)
