"""
API route modules.
"""

from comptoir.presentation.api.routes import health, purchase

__all__ = ["health", "purchase"]
