"""Mini README: Validate raw ledger records and convert them to typed values.

Structure:
    * InvalidTransactionError - raised for records the entry forms would reject.
    * TripSnapshot - participants and transactions ready for the engine.
    * normalise_participants / normalise_transaction(s) / normalise_snapshot.

Records arrive as plain mappings, either from JSON request bodies or from
exported trip files. Both camelCase keys (``paidBy``, ``splitWith``,
``payerId``, ``receiverId``) and snake_case keys are understood. Older
records carry no ``type`` and are treated as expenses. Currency codes are
only normalised here, not checked: the engine ignores codes outside its
configured table.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..ledger.models import Expense, Participant, Settlement, Transaction, TransactionKind
from ..ledger.money import MAX_AMOUNT_DIGITS, to_decimal
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

_KEY_ALIASES = {
    "paidBy": "paid_by",
    "splitWith": "split_with",
    "payerId": "payer_id",
    "receiverId": "receiver_id",
    "transaction_id": "id",
    "occurred_on": "date",
}


class InvalidTransactionError(ValueError):
    """A ledger record failed validation at the ingestion boundary."""


@dataclass(frozen=True, slots=True)
class TripSnapshot:
    """Consistent view of a trip's participants and transactions."""

    participants: Tuple[Participant, ...]
    transactions: Tuple[Transaction, ...]

    @property
    def names(self) -> Dict[str, str]:
        return {participant.participant_id: participant.name for participant in self.participants}


def _canonical_keys(record: Mapping[str, Any]) -> Dict[str, Any]:
    return {_KEY_ALIASES.get(key, key): value for key, value in record.items()}


def _parse_date(value: object) -> date:
    """Parse ISO formatted strings or date objects safely."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip())
    raise ValueError("Dates must be provided as ISO strings or date/datetime instances.")


def _require_text(fields: Mapping[str, Any], key: str, label: str) -> str:
    value = fields.get(key)
    if value is None or not str(value).strip():
        raise InvalidTransactionError(f"{label}: field '{key}' is required.")
    return str(value).strip()


def _positive_amount(fields: Mapping[str, Any], label: str) -> Decimal:
    if fields.get("amount") is None:
        raise InvalidTransactionError(f"{label}: field 'amount' is required.")
    try:
        amount = to_decimal(fields["amount"])
    except ValueError as error:
        raise InvalidTransactionError(f"{label}: {error}") from error
    if not amount.is_finite() or amount <= 0:
        raise InvalidTransactionError(f"{label}: amount must be a positive number.")
    if amount.normalize().as_tuple().exponent < -2:
        raise InvalidTransactionError(f"{label}: amount cannot have more than two decimal places.")
    if amount.adjusted() >= MAX_AMOUNT_DIGITS:
        raise InvalidTransactionError(f"{label}: amount is too large.")
    return amount


def _occurred_on(fields: Mapping[str, Any], label: str) -> date:
    if fields.get("date") is None:
        raise InvalidTransactionError(f"{label}: field 'date' is required.")
    try:
        return _parse_date(fields["date"])
    except ValueError as error:
        raise InvalidTransactionError(f"{label}: invalid date {fields['date']!r}.") from error


def normalise_participants(records: Iterable[Mapping[str, Any]]) -> List[Participant]:
    """Convert participant mappings, rejecting blank names and duplicate ids."""

    participants: List[Participant] = []
    seen: set = set()
    for index, record in enumerate(records):
        label = f"Participant #{index + 1}"
        if not isinstance(record, Mapping):
            raise InvalidTransactionError(f"{label}: expected an object with 'id' and 'name'.")
        participant_id = _require_text(record, "id", label)
        name = _require_text(record, "name", label)
        if participant_id in seen:
            raise InvalidTransactionError(f"{label}: duplicate participant id '{participant_id}'.")
        seen.add(participant_id)
        participants.append(Participant(participant_id=participant_id, name=name))
    return participants


def normalise_transaction(
    record: Mapping[str, Any], *, default_id: Optional[str] = None
) -> Transaction:
    """Validate one raw record and return an ``Expense`` or ``Settlement``."""

    if not isinstance(record, Mapping):
        raise InvalidTransactionError(
            f"Transaction {default_id or '<unnamed>'}: expected an object, got {record!r}."
        )
    fields = _canonical_keys(record)
    transaction_id = str(fields.get("id") or default_id or "").strip()
    label = f"Transaction {transaction_id or '<unnamed>'}"
    if not transaction_id:
        raise InvalidTransactionError(f"{label}: field 'id' is required.")

    try:
        kind = TransactionKind.from_str(fields.get("type"))
    except ValueError as error:
        raise InvalidTransactionError(f"{label}: {error}") from error

    amount = _positive_amount(fields, label)
    currency = _require_text(fields, "currency", label).upper()
    occurred_on = _occurred_on(fields, label)

    if kind is TransactionKind.SETTLEMENT:
        payer_id = _require_text(fields, "payer_id", label)
        receiver_id = _require_text(fields, "receiver_id", label)
        if payer_id == receiver_id:
            raise InvalidTransactionError(f"{label}: payer and receiver must be different people.")
        return Settlement(
            transaction_id=transaction_id,
            amount=amount,
            currency=currency,
            occurred_on=occurred_on,
            payer_id=payer_id,
            receiver_id=receiver_id,
        )

    split_with = fields.get("split_with")
    if not isinstance(split_with, (list, tuple)):
        raise InvalidTransactionError(f"{label}: 'split_with' must be a list of participant ids.")
    split_ids = tuple(str(participant_id).strip() for participant_id in split_with)
    if not split_ids:
        raise InvalidTransactionError(f"{label}: select at least one participant to split with.")
    if len(set(split_ids)) != len(split_ids):
        raise InvalidTransactionError(f"{label}: 'split_with' contains duplicate participants.")

    return Expense(
        transaction_id=transaction_id,
        description=str(fields.get("description") or "").strip(),
        amount=amount,
        currency=currency,
        occurred_on=occurred_on,
        paid_by=_require_text(fields, "paid_by", label),
        split_with=split_ids,
    )


def normalise_transactions(records: Iterable[Mapping[str, Any]]) -> List[Transaction]:
    """Normalise every record, numbering records that arrive without an id."""

    transactions = [
        normalise_transaction(record, default_id=f"txn_{index:04d}")
        for index, record in enumerate(records, start=1)
    ]
    LOGGER.debug("Normalised %s transactions", len(transactions))
    return transactions


def normalise_snapshot(
    participants: Iterable[Mapping[str, Any]],
    transactions: Iterable[Mapping[str, Any]],
) -> TripSnapshot:
    """Build a ``TripSnapshot`` from raw participant and transaction records."""

    return TripSnapshot(
        participants=tuple(normalise_participants(participants)),
        transactions=tuple(normalise_transactions(transactions)),
    )
