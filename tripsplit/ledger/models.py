"""Mini README: Immutable value types describing a trip ledger.

Structure:
    * Participant - traveller taking part in the trip.
    * TransactionKind - enum tagging expenses versus manual settlements.
    * Expense - one participant fronts an amount shared evenly by a group.
    * Settlement - one participant already paid another back.
    * Transaction - union of the two transaction shapes.

Objects are frozen snapshots handed to the settlement engine. Validation of
user input happens in ``tripsplit.ingestion``; these classes only describe
shape and offer ``as_dict`` exports for JSON responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional, Tuple, Union


class TransactionKind(str, Enum):
    """Enumerate the two transaction shapes stored in a trip ledger."""

    EXPENSE = "expense"
    SETTLEMENT = "settlement"

    @classmethod
    def from_str(cls, value: Optional[str]) -> "TransactionKind":
        """Coerce arbitrary casing into a kind; missing tags mean expense."""

        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.EXPENSE
        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported transaction type: {value}") from error


@dataclass(frozen=True, slots=True)
class Participant:
    """A traveller identified by an opaque id."""

    participant_id: str
    name: str

    def as_dict(self) -> Dict[str, str]:
        return {"id": self.participant_id, "name": self.name}


@dataclass(frozen=True, slots=True)
class Expense:
    """Cost fronted by ``paid_by`` and split evenly across ``split_with``."""

    transaction_id: str
    description: str
    amount: Decimal
    currency: str
    occurred_on: date
    paid_by: str
    split_with: Tuple[str, ...]

    kind = TransactionKind.EXPENSE

    def as_dict(self) -> Dict[str, object]:
        """Export the expense with serialisable values."""

        return {
            "id": self.transaction_id,
            "type": self.kind.value,
            "description": self.description,
            "amount": float(self.amount),
            "currency": self.currency,
            "date": self.occurred_on.isoformat(),
            "paid_by": self.paid_by,
            "split_with": list(self.split_with),
        }


@dataclass(frozen=True, slots=True)
class Settlement:
    """Money ``payer_id`` already handed to ``receiver_id`` outside the split."""

    transaction_id: str
    amount: Decimal
    currency: str
    occurred_on: date
    payer_id: str
    receiver_id: str

    kind = TransactionKind.SETTLEMENT

    def as_dict(self) -> Dict[str, object]:
        """Export the settlement with serialisable values."""

        return {
            "id": self.transaction_id,
            "type": self.kind.value,
            "amount": float(self.amount),
            "currency": self.currency,
            "date": self.occurred_on.isoformat(),
            "payer_id": self.payer_id,
            "receiver_id": self.receiver_id,
        }


Transaction = Union[Expense, Settlement]
