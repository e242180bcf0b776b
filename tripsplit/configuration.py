"""Mini README: Centralised configuration models and helpers for Tripsplit.

Structure:
    * CurrencySetting - one configurable entry of the currency table.
    * TripsplitSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.
    * get_currency_table - build the engine's ``CurrencyTable`` from settings.

Usage:
    Environment variables use the ``TRIPSPLIT_`` prefix. The currency table
    can be replaced with a JSON list, for example
    ``TRIPSPLIT_CURRENCIES='[{"code": "GBP", "symbol": "£", "name": "Pound"}]'``.
    The configuration is cached so validation runs once per process.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import BaseModel, Field, validator
from pydantic_settings import BaseSettings

from .ledger.currencies import DEFAULT_CURRENCIES, Currency, CurrencyTable


class CurrencySetting(BaseModel):
    """Currency entry as written in configuration."""

    code: str = Field(..., min_length=1, description="ISO style currency code, e.g. USD.")
    symbol: str = Field(..., description="Symbol shown in front of amounts.")
    name: str = Field(..., description="Human readable currency name.")
    decimal_places: int = Field(2, ge=0, le=4, description="Digits shown after the separator.")

    @validator("code", pre=True)
    def _normalise_code(cls, value: str) -> str:
        return str(value).strip().upper()

    def to_currency(self) -> Currency:
        return Currency(
            code=self.code,
            symbol=self.symbol,
            name=self.name,
            decimal_places=self.decimal_places,
        )


def _default_currency_settings() -> List[CurrencySetting]:
    return [CurrencySetting(**currency.as_dict()) for currency in DEFAULT_CURRENCIES]


class TripsplitSettings(BaseSettings):
    """Runtime configuration for Tripsplit."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level used by the CLI and web service.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the web API to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the web API exposes.",
        ge=1,
        le=65535,
    )
    currencies: List[CurrencySetting] = Field(
        default_factory=_default_currency_settings,
        description="Supported currencies in display order. Each is settled independently.",
    )

    class Config:
        env_prefix = "TRIPSPLIT_"
        env_file = ".env"
        case_sensitive = False

    @validator("log_level", pre=True)
    def _normalise_level(cls, value: str) -> str:
        return str(value).strip().upper()

    @validator("currencies")
    def _unique_codes(cls, value: List[CurrencySetting]) -> List[CurrencySetting]:
        """Reject configurations that list the same currency twice."""

        codes = [currency.code for currency in value]
        duplicates = sorted({code for code in codes if codes.count(code) > 1})
        if duplicates:
            raise ValueError(f"Duplicate currency codes: {', '.join(duplicates)}")
        if not codes:
            raise ValueError("At least one currency must be configured.")
        return value

    def currency_table(self) -> CurrencyTable:
        return CurrencyTable(currency.to_currency() for currency in self.currencies)


@lru_cache()
def get_settings() -> TripsplitSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return TripsplitSettings()


def get_currency_table() -> CurrencyTable:
    """Return the currency table described by the active settings."""

    return get_settings().currency_table()
