"""
Settlement package.

- ledger: in-memory lamport ledger with atomic blocks
- engine: SettlementEngine decoding, validating and applying instructions
"""

from distributor.services.settlement.engine import SettlementEngine, plan_transfers
from distributor.services.settlement.ledger import Ledger

__all__ = [
    "Ledger",
    "SettlementEngine",
    "plan_transfers",
]
