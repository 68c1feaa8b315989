"""
Local SQLite driver (development).

`wrangler dev` keeps its D1 emulation as `.sqlite` files somewhere under
`.wrangler/`. The most recently modified one is the live database.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Sequence

import aiosqlite

from .d1 import QueryResult, StatementRequest

SQLITE_SUFFIX = ".sqlite"

logger = logging.getLogger(__name__)


class LocalDatabaseNotFound(RuntimeError):
    pass


def find_local_database(state_dir: str | Path) -> Path:
    """
    Return the newest `.sqlite` file below `state_dir`.
    """
    base = Path(state_dir).resolve()
    if not base.is_dir():
        raise LocalDatabaseNotFound(
            f"Local D1 database not found: {base} does not exist. "
            "Try running `npm run db:touch` to create one."
        )

    candidates = [p for p in base.rglob(f"*{SQLITE_SUFFIX}") if p.is_file()]
    if not candidates:
        raise LocalDatabaseNotFound(
            f"Local D1 database not found: no {SQLITE_SUFFIX} file in {base}. "
            "Try running `npm run db:touch` to create one."
        )

    candidates.sort(key=lambda p: p.stat().st_mtime, reverse=True)
    return candidates[0]


class LocalSQLiteDriver:
    """
    SQL driver for a SQLite file, using one lazily opened aiosqlite connection.

    The connection is shared, so a statement (or a whole batch) holds the lock
    until it has committed or rolled back.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._conn: aiosqlite.Connection | None = None
        self._lock = asyncio.Lock()

    async def _connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            self._conn = await aiosqlite.connect(self.path)
            await self._conn.execute("PRAGMA foreign_keys = ON")
            logger.info("local_db_opened path=%s", self.path)
        return self._conn

    async def _run(self, conn: aiosqlite.Connection, sql: str, params: Sequence[Any]) -> QueryResult:
        async with conn.execute(sql, tuple(params)) as cursor:
            rows = await cursor.fetchall()
        return QueryResult(rows=[list(row) for row in rows])

    async def query(self, sql: str, params: Sequence[Any], method: str) -> QueryResult:
        async with self._lock:
            conn = await self._connection()
            try:
                result = await self._run(conn, sql, params)
            except Exception:
                await conn.rollback()
                raise
            await conn.commit()
            return result

    async def batch(self, requests: Sequence[StatementRequest]) -> list[QueryResult]:
        """
        Run statements in order inside one explicit transaction.

        DDL is included: a failure rolls back every earlier statement of the
        batch, `CREATE TABLE` too.
        """
        async with self._lock:
            conn = await self._connection()
            results: list[QueryResult] = []
            await conn.execute("BEGIN")
            try:
                for request in requests:
                    results.append(await self._run(conn, request.sql, request.params))
            except Exception:
                await conn.rollback()
                raise
            await conn.commit()
            return results

    async def close(self) -> None:
        if self._conn is None:
            return None
        await self._conn.close()
        self._conn = None
