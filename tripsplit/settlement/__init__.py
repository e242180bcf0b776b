"""Mini README: Balance aggregation and debt settlement engine.

``aggregator`` folds transactions into per-currency balances, ``simplifier``
recommends payments that zero them, and ``summary`` runs both for a trip
snapshot. Every function here is pure: inputs are immutable snapshots and
results are recomputed from scratch on each call.
"""

from .aggregator import BalanceAggregator, BalanceSheet, CurrencyBalance, aggregate_balances
from .simplifier import (
    DebtSimplifier,
    SettlementPlan,
    Transfer,
    build_settlement_plan,
    plan_as_dict,
    simplify_debts,
)
from .summary import TripSummary, summarise_trip

__all__ = [
    "BalanceAggregator",
    "BalanceSheet",
    "CurrencyBalance",
    "DebtSimplifier",
    "SettlementPlan",
    "Transfer",
    "TripSummary",
    "aggregate_balances",
    "build_settlement_plan",
    "plan_as_dict",
    "simplify_debts",
    "summarise_trip",
]
