"""
Async database access helpers (raw SQL) over a pluggable SQL driver.

This module owns the process-wide driver. FastAPI installs it on startup and
closes it on shutdown (see `cinegoose/main.py`); the seed command does the
same around its run.

SQL parameter style:
- SQLite / D1 use positional placeholders: ?, ?, ?, ...

Drivers return rows as positional lists. Callers pass the column names of
their SELECT / RETURNING clause so rows can be turned back into dicts.
"""

from __future__ import annotations

from typing import Any, Sequence

from .d1 import QueryResult, StatementRequest
from .driver import SQLDriver

_driver: SQLDriver | None = None


def init_driver(new_driver: SQLDriver) -> None:
    global _driver
    _driver = new_driver


async def close_driver() -> None:
    global _driver
    if _driver is None:
        return None
    await _driver.close()
    _driver = None


def driver() -> SQLDriver:
    if _driver is None:
        raise RuntimeError("DB driver is not initialized. Call init_driver() on startup.")
    return _driver


def _row_to_dict(row: Sequence[Any], columns: Sequence[str]) -> dict[str, Any]:
    if len(row) != len(columns):
        raise RuntimeError(f"Row has {len(row)} values but {len(columns)} columns were expected.")
    return dict(zip(columns, row))


async def fetch_one(sql: str, *args: Any, columns: Sequence[str]) -> dict[str, Any] | None:
    """
    Run a query and return the first row as a dict (or None).
    """
    result = await driver().query(sql, args, "get")
    if not result.rows:
        return None
    return _row_to_dict(result.rows[0], columns)


async def fetch_all(sql: str, *args: Any, columns: Sequence[str]) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    result = await driver().query(sql, args, "all")
    return [_row_to_dict(r, columns) for r in result.rows]


async def execute(sql: str, *args: Any) -> None:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
    """
    await driver().query(sql, args, "run")


async def execute_batch(statements: Sequence[StatementRequest]) -> list[QueryResult]:
    """
    Run statements in order; each one sees the effects of the ones before it.
    """
    return await driver().batch(statements)
