"""
Infrastructure layer: chain access, ledger storage and monitoring.
"""
