"""
Comptoir - stablecoin-for-token purchase service.
"""

__version__ = "0.1.0"
