"""
SQL driver interface shared by the local and remote databases.

A driver runs SQL and returns rows positionally. It knows nothing about
tables; `core.db` and the feature repositories map columns back to names.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from .config import Settings
from .d1 import D1HttpDriver, QueryResult, StatementRequest
from .local import LocalSQLiteDriver, find_local_database


class SQLDriver(Protocol):
    async def query(self, sql: str, params: Sequence[Any], method: str) -> QueryResult: ...

    async def batch(self, requests: Sequence[StatementRequest]) -> list[QueryResult]: ...

    async def close(self) -> None: ...


def open_driver(settings: Settings) -> SQLDriver:
    """
    Pick the database target for `settings`: D1 over HTTP in production,
    otherwise the local SQLite file.
    """
    if settings.is_production:
        return D1HttpDriver(
            settings.d1_credentials(),
            base_url=settings.d1_base_url,
            timeout_s=settings.d1_timeout_s,
        )

    path = settings.local_database_path or find_local_database(settings.local_state_dir)
    return LocalSQLiteDriver(path)
