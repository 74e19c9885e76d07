"""
Payments Kernel - in-memory account ledger engine.

Tallies a stream of client transactions into per-client account states:
- Deposits and withdrawals against available funds
- Dispute lifecycle (dispute, resolve, chargeback) on stored deposits
- Permanent account locking on chargeback
- Exact decimal arithmetic, never binary floating point
"""

__version__ = "0.1.0"
