"""Mini README: Tests for folding transactions into per-currency balances.

Covers the two-person and three-person reference scenarios, conservation of
money per currency, settlement neutrality, the report-time rounding policy
and the skip rules for unknown participants and unsupported currencies.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from tripsplit.ledger import Currency, CurrencyTable, Expense, Participant, Settlement
from tripsplit.settlement import BalanceAggregator, aggregate_balances

DAY = date(2024, 3, 1)


def test_single_shared_expense_splits_evenly() -> None:
    """Two travellers sharing a 100 USD bill end at +50 / -50."""

    sheet = aggregate_balances(
        [Participant("A", "Ana"), Participant("B", "Bruno")],
        [Expense("e1", "Dinner", Decimal("100"), "USD", DAY, "A", ("A", "B"))],
    )

    assert sheet.balances_for("USD") == {"A": Decimal("50.00"), "B": Decimal("-50.00")}
    assert sheet.per_participant["A"]["USD"].paid == Decimal("100.00")
    assert sheet.per_participant["B"]["USD"].share == Decimal("50.00")
    assert sheet.total_expense_by_currency["USD"] == Decimal("100.00")


def test_settlement_adjusts_balances_after_expenses() -> None:
    """A manual repayment moves both parties' balances but adds no share."""

    sheet = aggregate_balances(
        [Participant("A", "Ana"), Participant("B", "Bruno"), Participant("C", "Carla")],
        [
            Expense("e1", "Hotel", Decimal("90"), "USD", DAY, "A", ("A", "B", "C")),
            Settlement("s1", Decimal("30"), "USD", DAY, "B", "A"),
        ],
    )

    assert sheet.balances_for("USD") == {
        "A": Decimal("30.00"),
        "B": Decimal("0.00"),
        "C": Decimal("-30.00"),
    }
    assert sheet.per_participant["B"]["USD"].share == Decimal("30.00")
    assert sheet.per_participant["B"]["USD"].paid == Decimal("0.00")
    assert sheet.total_expense_by_currency["USD"] == Decimal("90.00")


def test_unsupported_currency_contributes_nothing() -> None:
    """Transactions in a currency outside the table are ignored entirely."""

    sheet = aggregate_balances(
        [Participant("A", "Ana"), Participant("B", "Bruno")],
        [
            Expense("e1", "Souvenir", Decimal("80"), "XYZ", DAY, "A", ("A", "B")),
            Settlement("s1", Decimal("10"), "XYZ", DAY, "B", "A"),
        ],
    )

    assert "XYZ" not in sheet.total_expense_by_currency
    for per_currency in sheet.per_participant.values():
        assert "XYZ" not in per_currency
        for figures in per_currency.values():
            assert figures.paid == figures.share == figures.balance == Decimal("0")


def test_balances_are_conserved_per_currency(participants, trip_transactions) -> None:
    """Every currency's balances sum to zero and paid equals share."""

    sheet = aggregate_balances(participants, trip_transactions)

    for code in sheet.currency_codes:
        assert sum(sheet.balances_for(code).values()) == Decimal("0")
        paid = sum(per_currency[code].paid for per_currency in sheet.per_participant.values())
        share = sum(per_currency[code].share for per_currency in sheet.per_participant.values())
        assert paid == share == sheet.total_expense_by_currency[code]


def test_mixed_ledger_balances(participants, trip_transactions) -> None:
    """Each currency is accounted for independently."""

    sheet = aggregate_balances(participants, trip_transactions)

    assert sheet.balances_for("USD") == {
        "a": Decimal("67.50"),
        "b": Decimal("-2.50"),
        "c": Decimal("-32.50"),
        "d": Decimal("-32.50"),
    }
    assert sheet.balances_for("EUR") == {
        "a": Decimal("-15.00"),
        "b": Decimal("-15.00"),
        "c": Decimal("-15.00"),
        "d": Decimal("45.00"),
    }
    assert sheet.total_expense_by_currency["USD"] == Decimal("190.00")
    assert sheet.total_expense_by_currency["COP"] == Decimal("0.00")


def test_settlement_is_neutral(participants, trip_transactions) -> None:
    """Removing the settlement changes only the two parties, by equal amounts."""

    with_settlement = aggregate_balances(participants, trip_transactions).balances_for("USD")
    without_settlement = aggregate_balances(participants, trip_transactions[:-1]).balances_for("USD")

    assert with_settlement["c"] - without_settlement["c"] == Decimal("20.00")
    assert with_settlement["a"] - without_settlement["a"] == Decimal("-20.00")
    assert with_settlement["b"] == without_settlement["b"]
    assert sum(with_settlement.values()) == sum(without_settlement.values())


def test_shares_are_rounded_only_when_reported() -> None:
    """Thirds accumulate exactly; three 10 USD splits total exactly 10 each."""

    people = [Participant("A", "Ana"), Participant("B", "Bruno"), Participant("C", "Carla")]
    expenses = [
        Expense(f"e{index}", "Coffee", Decimal("10"), "USD", DAY, "A", ("A", "B", "C"))
        for index in range(3)
    ]

    sheet = aggregate_balances(people, expenses)

    assert sheet.per_participant["B"]["USD"].share == Decimal("10.00")
    assert sheet.balances_for("USD") == {
        "A": Decimal("20.00"),
        "B": Decimal("-10.00"),
        "C": Decimal("-10.00"),
    }


def test_uneven_split_rounds_half_up() -> None:
    """A 100 USD bill over three people reports shares of 33.33."""

    people = [Participant("A", "Ana"), Participant("B", "Bruno"), Participant("C", "Carla")]
    sheet = aggregate_balances(
        people, [Expense("e1", "Tour", Decimal("100"), "USD", DAY, "A", ("A", "B", "C"))]
    )

    assert sheet.per_participant["A"]["USD"].balance == Decimal("66.67")
    assert sheet.per_participant["B"]["USD"].balance == Decimal("-33.33")
    assert sheet.per_participant["C"]["USD"].share == Decimal("33.33")


def test_unknown_participants_are_skipped() -> None:
    """Dangling ids drop out of their sub-update; the rest still counts."""

    people = [Participant("A", "Ana"), Participant("B", "Bruno")]
    sheet = aggregate_balances(
        people,
        [
            Expense("e1", "Taxi", Decimal("30"), "USD", DAY, "ghost", ("A", "B", "ghost")),
            Settlement("s1", Decimal("5"), "USD", DAY, "ghost", "A"),
        ],
    )

    assert sheet.per_participant["A"]["USD"].paid == Decimal("0.00")
    assert sheet.balances_for("USD") == {"A": Decimal("-10.00"), "B": Decimal("-10.00")}
    assert sheet.total_expense_by_currency["USD"] == Decimal("30.00")
    assert "ghost" not in sheet.per_participant


def test_malformed_records_are_excluded() -> None:
    """Non-positive or non-finite amounts, empty splits and self payments are ignored."""

    people = [Participant("A", "Ana"), Participant("B", "Bruno")]
    sheet = aggregate_balances(
        people,
        [
            Expense("e1", "Refund", Decimal("-10"), "USD", DAY, "A", ("A", "B")),
            Expense("e2", "Nobody", Decimal("10"), "USD", DAY, "A", ()),
            Settlement("s1", Decimal("5"), "USD", DAY, "A", "A"),
            Settlement("s2", Decimal("0"), "USD", DAY, "A", "B"),
            Expense("e3", "Glitch", Decimal("NaN"), "USD", DAY, "A", ("A", "B")),
            Expense("e4", "Overflow", Decimal("Infinity"), "USD", DAY, "B", ("A", "B")),
            Settlement("s3", Decimal("NaN"), "USD", DAY, "B", "A"),
            Settlement("s4", Decimal("-Infinity"), "USD", DAY, "A", "B"),
        ],
    )

    assert sheet.balances_for("USD") == {"A": Decimal("0"), "B": Decimal("0")}
    assert sheet.total_expense_by_currency["USD"] == Decimal("0")


def test_configured_currency_table_drives_the_sheet() -> None:
    """Only currencies from the supplied table appear on the sheet."""

    table = CurrencyTable([Currency("GBP", "£", "Pound Sterling")])
    aggregator = BalanceAggregator(table)

    sheet = aggregator.aggregate(
        [Participant("A", "Ana"), Participant("B", "Bruno")],
        [
            Expense("e1", "Tea", Decimal("8"), "GBP", DAY, "B", ("A", "B")),
            Expense("e2", "Lunch", Decimal("20"), "USD", DAY, "A", ("A", "B")),
        ],
    )

    assert sheet.currency_codes == ["GBP"]
    assert sheet.balances_for("GBP") == {"A": Decimal("-4.00"), "B": Decimal("4.00")}
    assert sheet.as_dict()["total_expense_by_currency"] == {"GBP": 8.0}


def test_repeated_aggregation_is_deterministic(participants, trip_transactions) -> None:
    first = aggregate_balances(participants, trip_transactions)
    second = aggregate_balances(participants, trip_transactions)

    assert first == second


def test_large_amounts_keep_full_precision() -> None:
    """Amounts beyond the default decimal precision still round to cents."""

    sheet = aggregate_balances(
        [Participant("A", "Ana"), Participant("B", "Bruno")],
        [Expense("e1", "Yacht", Decimal("1e27"), "VND", DAY, "A", ("A", "B"))],
    )

    assert sheet.balances_for("VND") == {
        "A": Decimal("5e26"),
        "B": Decimal("-5e26"),
    }
    assert sheet.total_expense_by_currency["VND"].as_tuple().exponent == -2
