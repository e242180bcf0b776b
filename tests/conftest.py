"""Mini README: Shared fixtures for the Tripsplit test-suite.

Structure:
    * participants - four travellers used across balance and plan tests.
    * trip_transactions - mixed USD/EUR ledger with one manual settlement.
    * clear_settings_cache - keeps cached settings from leaking between tests.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List

import pytest

from tripsplit.configuration import get_settings
from tripsplit.ledger import Expense, Participant, Settlement, Transaction


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def participants() -> List[Participant]:
    return [
        Participant("a", "Ana"),
        Participant("b", "Bruno"),
        Participant("c", "Carla"),
        Participant("d", "Dario"),
    ]


@pytest.fixture
def trip_transactions() -> List[Transaction]:
    """Four expenses across two currencies and one settlement.

    USD net after the settlement: a +67.50, b -2.50, c -32.50, d -32.50.
    EUR net: a -15, b -15, c -15, d +45.
    """

    return [
        Expense("e1", "Hostel", Decimal("120"), "USD", date(2024, 3, 1), "a", ("a", "b", "c", "d")),
        Expense("e2", "Dinner", Decimal("60"), "USD", date(2024, 3, 1), "b", ("b", "c")),
        Expense("e3", "Snacks", Decimal("10"), "USD", date(2024, 3, 2), "c", ("a", "b", "c", "d")),
        Expense("e4", "Ferry", Decimal("45"), "EUR", date(2024, 3, 3), "d", ("a", "b", "c")),
        Settlement("s1", Decimal("20"), "USD", date(2024, 3, 4), "c", "a"),
    ]
