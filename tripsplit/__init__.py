"""Mini README: Core package initializer for Tripsplit.

Tripsplit turns a shared trip ledger (who paid, who shares, who already paid
whom back) into per-currency balances and a short list of payments that
settles everyone up. This module exposes the logging helper so callers can
obtain consistently configured loggers without knowing the package layout.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
