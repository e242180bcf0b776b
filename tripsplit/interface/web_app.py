"""Mini README: FastAPI service exposing the settlement engine as JSON.

Structure:
    * SnapshotPayload - request body carrying participants and transactions.
    * create_application - application factory wiring routes.

The service is stateless: every request posts a full trip snapshot, which is
validated at the ingestion boundary and then summarised from scratch.
Validation failures are reported as HTTP 400 with the offending record named
in the message.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..configuration import get_currency_table
from ..ingestion import InvalidTransactionError, TripSnapshot, normalise_snapshot
from ..ledger.currencies import CurrencyTable
from ..logging_utils import get_logger
from ..settlement import BalanceAggregator, DebtSimplifier, plan_as_dict, summarise_trip

LOGGER = get_logger(__name__)


class SnapshotPayload(BaseModel):
    """Participants and transactions of one trip."""

    participants: List[Dict[str, Any]] = Field(..., description="Records with 'id' and 'name'.")
    transactions: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Expense or settlement records; untyped records are expenses.",
    )


def _load_snapshot(payload: SnapshotPayload) -> TripSnapshot:
    try:
        return normalise_snapshot(payload.participants, payload.transactions)
    except InvalidTransactionError as error:
        LOGGER.info("Rejected trip snapshot: %s", error)
        raise HTTPException(status_code=400, detail=str(error)) from error


def create_application(currencies: Optional[CurrencyTable] = None) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    app = FastAPI(title="Tripsplit Settlement API", version="0.1.0")
    currency_table = currencies if currencies is not None else get_currency_table()
    aggregator = BalanceAggregator(currency_table)
    simplifier = DebtSimplifier()

    @app.get("/currencies")
    async def list_currencies() -> JSONResponse:
        """Return the configured currency table."""

        return JSONResponse({"currencies": currency_table.as_list()})

    @app.post("/balances")
    async def balances(payload: SnapshotPayload) -> JSONResponse:
        """Return paid, share and net balance per participant and currency."""

        snapshot = _load_snapshot(payload)
        sheet = aggregator.aggregate(snapshot.participants, snapshot.transactions)
        LOGGER.info(
            "Computed balances for %s participants and %s transactions",
            len(snapshot.participants),
            len(snapshot.transactions),
        )
        return JSONResponse(sheet.as_dict())

    @app.post("/settlement-plan")
    async def settlement_plan(payload: SnapshotPayload) -> JSONResponse:
        """Return recommended payments per currency."""

        snapshot = _load_snapshot(payload)
        sheet = aggregator.aggregate(snapshot.participants, snapshot.transactions)
        plan = simplifier.plan(sheet)
        LOGGER.info(
            "Generated %s recommended payments",
            sum(len(transfers) for transfers in plan.values()),
        )
        return JSONResponse({"settlements": plan_as_dict(plan)})

    @app.post("/summary")
    async def summary(payload: SnapshotPayload) -> JSONResponse:
        """Return balances, payments and active currencies with names attached."""

        snapshot = _load_snapshot(payload)
        trip_summary = summarise_trip(snapshot.participants, snapshot.transactions, currency_table)
        LOGGER.debug("Active currencies: %s", trip_summary.active_currencies)
        return JSONResponse(trip_summary.as_dict(snapshot.names))

    return app
