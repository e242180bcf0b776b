"""Mini README: Ledger value types, currency table and rounding helpers.

This package groups the plain data the settlement engine works on:
participants, the two transaction shapes, the configurable currency table
and the money helpers that keep rounding in one place.
"""

from .currencies import DEFAULT_CURRENCIES, Currency, CurrencyTable
from .models import Expense, Participant, Settlement, Transaction, TransactionKind
from .money import CENT, SETTLED_TOLERANCE, round_amount, to_decimal

__all__ = [
    "CENT",
    "Currency",
    "CurrencyTable",
    "DEFAULT_CURRENCIES",
    "Expense",
    "Participant",
    "SETTLED_TOLERANCE",
    "Settlement",
    "Transaction",
    "TransactionKind",
    "round_amount",
    "to_decimal",
]
