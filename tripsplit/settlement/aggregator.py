"""Mini README: Fold a trip's transactions into a per-currency balance sheet.

Structure:
    * CurrencyBalance - paid, share and net balance for one participant.
    * BalanceSheet - balances for every participant plus expense totals.
    * BalanceAggregator - walks expenses, then settlements, then rounds.
    * aggregate_balances - functional shortcut used by the summary helpers.

Shares are accumulated as exact fractions and everything is rounded to cents
once, when the sheet is produced. Records the engine cannot use (unknown
participants, unsupported currencies, non-positive amounts) are skipped and
logged at DEBUG level rather than raised, so stale data never breaks a
summary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from fractions import Fraction
from typing import Dict, Iterable, List, Optional, Sequence

from ..ledger.currencies import CurrencyTable
from ..ledger.models import Expense, Participant, Settlement, Transaction
from ..ledger.money import is_positive_amount, round_amount, to_decimal
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CurrencyBalance:
    """Reported figures for one participant in one currency."""

    paid: Decimal
    share: Decimal
    balance: Decimal

    def as_dict(self) -> Dict[str, float]:
        return {
            "paid": float(self.paid),
            "share": float(self.share),
            "balance": float(self.balance),
        }


@dataclass(frozen=True, slots=True)
class BalanceSheet:
    """Balances keyed by participant id, then by currency code."""

    per_participant: Dict[str, Dict[str, CurrencyBalance]]
    total_expense_by_currency: Dict[str, Decimal]
    currency_codes: List[str] = field(default_factory=list)

    def balances_for(self, code: str) -> Dict[str, Decimal]:
        """Return the net balance of every participant in ``code``."""

        return {
            participant_id: per_currency[code].balance
            for participant_id, per_currency in self.per_participant.items()
            if code in per_currency
        }

    def as_dict(self) -> Dict[str, object]:
        """Export the sheet with serialisable values."""

        return {
            "balances": {
                participant_id: {
                    code: figures.as_dict() for code, figures in per_currency.items()
                }
                for participant_id, per_currency in self.per_participant.items()
            },
            "total_expense_by_currency": {
                code: float(total) for code, total in self.total_expense_by_currency.items()
            },
        }


class _Accumulator:
    """Exact running totals for one participant in one currency."""

    __slots__ = ("paid", "share", "balance")

    def __init__(self) -> None:
        self.paid = Fraction(0)
        self.share = Fraction(0)
        self.balance = Fraction(0)

    def report(self) -> CurrencyBalance:
        return CurrencyBalance(
            paid=round_amount(self.paid),
            share=round_amount(self.share),
            balance=round_amount(self.balance),
        )


class BalanceAggregator:
    """Compute paid, share and net balance per participant and currency."""

    def __init__(self, currencies: Optional[CurrencyTable] = None) -> None:
        self._currencies = currencies if currencies is not None else CurrencyTable()

    @property
    def currencies(self) -> CurrencyTable:
        return self._currencies

    def aggregate(
        self,
        participants: Sequence[Participant],
        transactions: Iterable[Transaction],
    ) -> BalanceSheet:
        """Fold ``transactions`` into a rounded balance sheet."""

        codes = self._currencies.codes
        totals: Dict[str, Dict[str, _Accumulator]] = {
            participant.participant_id: {code: _Accumulator() for code in codes}
            for participant in participants
        }
        expense_totals: Dict[str, Fraction] = {code: Fraction(0) for code in codes}

        expenses: List[Expense] = []
        settlements: List[Settlement] = []
        for transaction in transactions:
            if isinstance(transaction, Expense):
                expenses.append(transaction)
            elif isinstance(transaction, Settlement):
                settlements.append(transaction)
            else:
                LOGGER.debug("Ignoring unrecognised transaction %r", transaction)

        for expense in expenses:
            self._apply_expense(expense, totals, expense_totals)

        for per_currency in totals.values():
            for accumulator in per_currency.values():
                accumulator.balance = accumulator.paid - accumulator.share

        for settlement in settlements:
            self._apply_settlement(settlement, totals)

        LOGGER.debug(
            "Aggregated %s expenses and %s settlements for %s participants",
            len(expenses),
            len(settlements),
            len(totals),
        )
        return BalanceSheet(
            per_participant={
                participant_id: {code: accumulator.report() for code, accumulator in per_currency.items()}
                for participant_id, per_currency in totals.items()
            },
            total_expense_by_currency={
                code: round_amount(total) for code, total in expense_totals.items()
            },
            currency_codes=codes,
        )

    def _apply_expense(
        self,
        expense: Expense,
        totals: Dict[str, Dict[str, _Accumulator]],
        expense_totals: Dict[str, Fraction],
    ) -> None:
        if expense.currency not in self._currencies:
            LOGGER.debug(
                "Skipping expense %s in unsupported currency %s",
                expense.transaction_id,
                expense.currency,
            )
            return
        if not is_positive_amount(expense.amount) or not expense.split_with:
            LOGGER.debug("Skipping malformed expense %s", expense.transaction_id)
            return

        amount = Fraction(to_decimal(expense.amount))
        expense_totals[expense.currency] += amount

        if expense.paid_by in totals:
            totals[expense.paid_by][expense.currency].paid += amount
        else:
            LOGGER.debug(
                "Expense %s paid by unknown participant %s",
                expense.transaction_id,
                expense.paid_by,
            )

        share_per_person = amount / len(expense.split_with)
        for participant_id in expense.split_with:
            if participant_id in totals:
                totals[participant_id][expense.currency].share += share_per_person
            else:
                LOGGER.debug(
                    "Expense %s split with unknown participant %s",
                    expense.transaction_id,
                    participant_id,
                )

    def _apply_settlement(
        self,
        settlement: Settlement,
        totals: Dict[str, Dict[str, _Accumulator]],
    ) -> None:
        if settlement.currency not in self._currencies:
            LOGGER.debug(
                "Skipping settlement %s in unsupported currency %s",
                settlement.transaction_id,
                settlement.currency,
            )
            return
        if (
            not is_positive_amount(settlement.amount)
            or settlement.payer_id == settlement.receiver_id
        ):
            LOGGER.debug("Skipping malformed settlement %s", settlement.transaction_id)
            return
        if settlement.payer_id not in totals or settlement.receiver_id not in totals:
            LOGGER.debug(
                "Settlement %s references an unknown participant", settlement.transaction_id
            )
            return

        amount = Fraction(to_decimal(settlement.amount))
        totals[settlement.payer_id][settlement.currency].balance += amount
        totals[settlement.receiver_id][settlement.currency].balance -= amount


def aggregate_balances(
    participants: Sequence[Participant],
    transactions: Iterable[Transaction],
    currencies: Optional[CurrencyTable] = None,
) -> BalanceSheet:
    """Return the balance sheet for ``participants`` and ``transactions``."""

    return BalanceAggregator(currencies).aggregate(participants, transactions)
