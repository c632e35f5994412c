"""
Wallet Ledger - Source Package

An in-process wallet ledger: accounts keyed by phone number, deposits,
categorised payments, refunds, repeats and favourite payments.

DESIGN PRINCIPLES:
1. Balances are integer minor units and never go negative
2. Fail early, fail visibly
3. No global state - everything lives on a LedgerService instance
4. Every mutation is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Wallet Ledger Team"
