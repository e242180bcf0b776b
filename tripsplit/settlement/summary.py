"""Mini README: One-call trip summary combining balances and payments.

Structure:
    * TripSummary - balance sheet, settlement plan and active currencies.
    * summarise_trip - run aggregation and simplification for a snapshot.

A currency is active when its expenses total more than one cent or at least
one manual settlement was recorded in it. Inactive currencies still appear
on the sheet with zero figures, so callers decide what to display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..ledger.currencies import CurrencyTable
from ..ledger.models import Participant, Settlement, Transaction
from ..ledger.money import SETTLED_TOLERANCE
from .aggregator import BalanceAggregator, BalanceSheet
from .simplifier import DebtSimplifier, SettlementPlan, plan_as_dict


@dataclass(frozen=True, slots=True)
class TripSummary:
    sheet: BalanceSheet
    plan: SettlementPlan
    active_currencies: List[str]

    def as_dict(self, names: Optional[Mapping[str, str]] = None) -> Dict[str, object]:
        """Export the summary, attaching participant names when provided."""

        names = names or {}
        payload = self.sheet.as_dict()
        payload["participants"] = [
            {"id": participant_id, "name": names.get(participant_id, participant_id)}
            for participant_id in self.sheet.per_participant
        ]
        payload["settlements"] = plan_as_dict(self.plan)
        for transfers in payload["settlements"].values():
            for transfer in transfers:
                transfer["from_name"] = names.get(transfer["from"], transfer["from"])
                transfer["to_name"] = names.get(transfer["to"], transfer["to"])
        payload["active_currencies"] = list(self.active_currencies)
        return payload


def _active_currencies(
    sheet: BalanceSheet, transactions: Sequence[Transaction]
) -> List[str]:
    settled_codes = {
        transaction.currency for transaction in transactions if isinstance(transaction, Settlement)
    }
    return [
        code
        for code in sheet.currency_codes
        if sheet.total_expense_by_currency[code] > SETTLED_TOLERANCE or code in settled_codes
    ]


def summarise_trip(
    participants: Sequence[Participant],
    transactions: Iterable[Transaction],
    currencies: Optional[CurrencyTable] = None,
) -> TripSummary:
    """Compute balances and recommended payments for a trip snapshot."""

    transactions = list(transactions)
    sheet = BalanceAggregator(currencies).aggregate(participants, transactions)
    plan = DebtSimplifier().plan(sheet)
    return TripSummary(
        sheet=sheet,
        plan=plan,
        active_currencies=_active_currencies(sheet, transactions),
    )
