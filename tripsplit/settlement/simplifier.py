"""Mini README: Turn net balances into a short list of settling payments.

Structure:
    * Transfer - one recommended payment between two participants.
    * SettlementPlan - transfers per currency code.
    * DebtSimplifier - greedy largest-debtor to largest-creditor matching.
    * simplify_debts / build_settlement_plan - functional shortcuts.

The greedy pairing produces at most ``owers + owees - 1`` transfers. It is not
a search for the absolute minimum number of payments, which is a subset
partition problem; for trip-sized groups the greedy result is what people
expect to see. Equal amounts are ordered by participant id so the same input
always yields the same payments.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Mapping

from ..ledger.money import SETTLED_TOLERANCE, round_amount
from ..logging_utils import get_logger
from .aggregator import BalanceSheet

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Transfer:
    """Payment of ``amount`` from ``from_id`` to ``to_id``."""

    from_id: str
    to_id: str
    amount: Decimal

    def as_dict(self) -> Dict[str, object]:
        return {"from": self.from_id, "to": self.to_id, "amount": float(self.amount)}


SettlementPlan = Dict[str, List[Transfer]]


class _Party:
    """Outstanding amount of one ower or owee while matching."""

    __slots__ = ("participant_id", "amount")

    def __init__(self, participant_id: str, amount: Decimal) -> None:
        self.participant_id = participant_id
        self.amount = amount


def _ranked(parties: List[_Party]) -> List[_Party]:
    """Sort by amount descending, then participant id ascending."""

    return sorted(parties, key=lambda party: (-party.amount, str(party.participant_id)))


class DebtSimplifier:
    """Recommend payments that bring every balance back to zero."""

    def simplify(self, balances: Mapping[str, Decimal]) -> List[Transfer]:
        """Return transfers settling ``balances`` for a single currency."""

        owers: List[_Party] = []
        owees: List[_Party] = []
        for participant_id, balance in balances.items():
            if isinstance(balance, Decimal) and not balance.is_finite():
                continue
            rounded = round_amount(balance)
            if rounded < -SETTLED_TOLERANCE:
                owers.append(_Party(participant_id, -rounded))
            elif rounded > SETTLED_TOLERANCE:
                owees.append(_Party(participant_id, rounded))

        debtors = _ranked(owers)
        creditors = _ranked(owees)

        transfers: List[Transfer] = []
        ower_index = owee_index = 0
        while ower_index < len(debtors) and owee_index < len(creditors):
            ower = debtors[ower_index]
            owee = creditors[owee_index]
            amount = min(round_amount(ower.amount), round_amount(owee.amount))
            transfers.append(
                Transfer(from_id=ower.participant_id, to_id=owee.participant_id, amount=amount)
            )

            ower.amount = round_amount(ower.amount - amount)
            owee.amount = round_amount(owee.amount - amount)
            if ower.amount < SETTLED_TOLERANCE:
                ower_index += 1
            if owee.amount < SETTLED_TOLERANCE:
                owee_index += 1

        LOGGER.debug(
            "Simplified %s owers and %s owees into %s transfers",
            len(debtors),
            len(creditors),
            len(transfers),
        )
        return transfers

    def plan(self, sheet: BalanceSheet) -> SettlementPlan:
        """Run :meth:`simplify` for every currency on the sheet."""

        return {code: self.simplify(sheet.balances_for(code)) for code in sheet.currency_codes}


def simplify_debts(balances: Mapping[str, Decimal]) -> List[Transfer]:
    """Return transfers settling ``balances`` for a single currency."""

    return DebtSimplifier().simplify(balances)


def build_settlement_plan(sheet: BalanceSheet) -> SettlementPlan:
    """Return transfers per currency for ``sheet``."""

    return DebtSimplifier().plan(sheet)


def plan_as_dict(plan: SettlementPlan) -> Dict[str, List[Dict[str, object]]]:
    """Export a settlement plan with serialisable values."""

    return {code: [transfer.as_dict() for transfer in transfers] for code, transfers in plan.items()}
