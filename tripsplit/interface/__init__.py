"""Mini README: Interfaces (web/CLI) for Tripsplit.

Exports the FastAPI application factory that serves balances and settlement
plans. The command line entry point lives in ``settle_up.py`` at the
repository root and reuses this factory for its ``serve`` command.
"""

from .web_app import create_application

__all__ = ["create_application"]
