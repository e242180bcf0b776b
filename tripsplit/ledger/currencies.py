"""Mini README: Supported currency table and display formatting.

Structure:
    * Currency - code, symbol, display name and number of decimal places.
    * CurrencyTable - ordered, read-only lookup keyed by currency code.
    * DEFAULT_CURRENCIES - the currencies offered when nothing is configured.

The table is handed to the balance aggregator as configuration, so adding a
currency never touches the settlement arithmetic. Each currency is settled
on its own; there is no exchange-rate logic anywhere in the package.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .money import to_decimal


@dataclass(frozen=True, slots=True)
class Currency:
    """Metadata describing one supported currency."""

    code: str
    symbol: str
    name: str
    decimal_places: int = 2

    def format(self, amount: object) -> str:
        """Render ``amount`` with the currency symbol, e.g. ``-$1,234.50``."""

        quantum = Decimal(1).scaleb(-self.decimal_places)
        value = to_decimal(amount).quantize(quantum, rounding=ROUND_HALF_UP)
        sign = "-" if value < 0 else ""
        return f"{sign}{self.symbol}{abs(value):,.{self.decimal_places}f}"

    def as_dict(self) -> Dict[str, object]:
        """Export the currency with serialisable values."""

        return {
            "code": self.code,
            "symbol": self.symbol,
            "name": self.name,
            "decimal_places": self.decimal_places,
        }


DEFAULT_CURRENCIES: Tuple[Currency, ...] = (
    Currency("USD", "$", "US Dollar"),
    Currency("COP", "$", "Colombian Peso"),
    Currency("EUR", "€", "Euro"),
    Currency("VND", "₫", "Vietnamese Dong"),
    Currency("THB", "฿", "Thai Baht"),
)


class CurrencyTable:
    """Closed set of currencies the ledger accepts, in display order."""

    def __init__(self, currencies: Optional[Iterable[Currency]] = None) -> None:
        if currencies is None:
            currencies = DEFAULT_CURRENCIES
        self._currencies: Dict[str, Currency] = {}
        for currency in currencies:
            if currency.code in self._currencies:
                raise ValueError(f"Currency {currency.code} is defined twice.")
            self._currencies[currency.code] = currency

    def __contains__(self, code: object) -> bool:
        return code in self._currencies

    def __iter__(self) -> Iterator[Currency]:
        return iter(self._currencies.values())

    def __len__(self) -> int:
        return len(self._currencies)

    @property
    def codes(self) -> List[str]:
        """Currency codes in display order."""

        return list(self._currencies)

    def get(self, code: str) -> Currency:
        """Return the currency for ``code``, raising ``KeyError`` when unknown."""

        if code not in self._currencies:
            raise KeyError(f"Currency {code} is not supported")
        return self._currencies[code]

    def format(self, amount: object, code: str) -> str:
        """Format ``amount`` in ``code``, falling back to the bare code."""

        if code in self._currencies:
            return self._currencies[code].format(amount)
        return f"{to_decimal(amount):,.2f} {code}"

    def as_list(self) -> List[Dict[str, object]]:
        """Export every currency for JSON responses."""

        return [currency.as_dict() for currency in self]
