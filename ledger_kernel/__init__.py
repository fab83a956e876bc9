"""
Ledger Kernel

Balance ledger between clients and contractors with:
- Atomic job payments (debit, credit, mark paid)
- Deposits capped at a fraction of outstanding obligations
- Ownership-scoped contract and job views
- Earnings reports over paid jobs
"""

__version__ = "0.1.0"
