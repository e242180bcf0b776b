"""Mini README: Ingestion boundary for raw trip records.

Exposes the helpers that validate JSON-shaped participant and transaction
records and convert them into the immutable ledger types the settlement
engine consumes.
"""

from .normaliser import (
    InvalidTransactionError,
    TripSnapshot,
    normalise_participants,
    normalise_snapshot,
    normalise_transaction,
    normalise_transactions,
)

__all__ = [
    "InvalidTransactionError",
    "TripSnapshot",
    "normalise_participants",
    "normalise_snapshot",
    "normalise_transaction",
    "normalise_transactions",
]
