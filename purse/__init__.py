"""
Purse - Personal Finance Ledger

A small single-user ledger that records signed transactions and turns them
into budget, savings and category reports.

DESIGN PRINCIPLES:
1. The ledger file is the only state
2. Aggregations are pure functions of (transactions, parameters)
3. Storage failures are loud, never silently replaced with empty data
4. Every ledger mutation is auditable
5. Rendering belongs to the caller
"""

__version__ = "1.0.0"
__author__ = "Purse Team"
