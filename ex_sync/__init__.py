"""
ex-sync - one-way task reconciliation from Exchange to a peer task store.
"""

__version__ = "0.1.0"
