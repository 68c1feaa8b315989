"""Tests for local SQLite discovery and the aiosqlite driver."""

from __future__ import annotations

import asyncio
import os
import sqlite3
from pathlib import Path

import pytest

from cinegoose.core.d1 import StatementRequest
from cinegoose.core.local import LocalDatabaseNotFound, LocalSQLiteDriver, find_local_database


def _touch(path: Path, mtime: float) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    os.utime(path, (mtime, mtime))
    return path


def test_find_local_database_picks_newest(tmp_path: Path) -> None:
    state = tmp_path / ".wrangler"
    _touch(state / "state" / "v3" / "d1" / "old.sqlite", 1_000_000)
    newest = _touch(state / "state" / "v3" / "d1" / "nested" / "new.sqlite", 2_000_000)
    _touch(state / "state" / "v3" / "d1" / "ignored.sqlite-wal", 3_000_000)

    assert find_local_database(state) == newest.resolve()


def test_find_local_database_missing_dir(tmp_path: Path) -> None:
    with pytest.raises(LocalDatabaseNotFound, match="db:touch"):
        find_local_database(tmp_path / "nope")


def test_find_local_database_no_sqlite_files(tmp_path: Path) -> None:
    (tmp_path / "notes.txt").write_text("honk", encoding="utf-8")

    with pytest.raises(LocalDatabaseNotFound):
        find_local_database(tmp_path)


@pytest.mark.asyncio
async def test_query_returns_positional_rows(tmp_path: Path) -> None:
    driver = LocalSQLiteDriver(tmp_path / "local.sqlite")
    try:
        await driver.query("CREATE TABLE t (id INTEGER PRIMARY KEY, name TEXT)", [], "run")
        inserted = await driver.query(
            "INSERT INTO t (name) VALUES (?) RETURNING id, name", ["Honkleone"], "all"
        )
        selected = await driver.query("SELECT id, name FROM t WHERE id = ?", [1], "get")
    finally:
        await driver.close()

    assert inserted.rows == [[1, "Honkleone"]]
    assert selected.rows == [[1, "Honkleone"]]


@pytest.mark.asyncio
async def test_batch_sees_earlier_statements(tmp_path: Path) -> None:
    driver = LocalSQLiteDriver(tmp_path / "local.sqlite")
    try:
        results = await driver.batch(
            [
                StatementRequest(sql="CREATE TABLE t (id INTEGER PRIMARY KEY, n INTEGER)", method="run"),
                StatementRequest(sql="INSERT INTO t (n) VALUES (?)", params=(7,), method="run"),
                StatementRequest(sql="SELECT n FROM t", method="all"),
            ]
        )
    finally:
        await driver.close()

    assert [r.rows for r in results] == [[], [], [[7]]]


@pytest.mark.asyncio
async def test_batch_failure_rolls_back(tmp_path: Path) -> None:
    path = tmp_path / "local.sqlite"
    driver = LocalSQLiteDriver(path)
    try:
        await driver.query("CREATE TABLE t (id INTEGER PRIMARY KEY, n INTEGER NOT NULL)", [], "run")
        with pytest.raises(sqlite3.IntegrityError):
            await driver.batch(
                [
                    StatementRequest(sql="INSERT INTO t (n) VALUES (?)", params=(1,), method="run"),
                    StatementRequest(sql="INSERT INTO t (n) VALUES (?)", params=(None,), method="run"),
                ]
            )
        remaining = await driver.query("SELECT COUNT(*) FROM t", [], "get")
    finally:
        await driver.close()

    assert remaining.rows == [[0]]


@pytest.mark.asyncio
async def test_foreign_keys_are_enforced(tmp_path: Path) -> None:
    driver = LocalSQLiteDriver(tmp_path / "local.sqlite")
    try:
        await driver.query("CREATE TABLE p (id INTEGER PRIMARY KEY)", [], "run")
        await driver.query("CREATE TABLE c (id INTEGER PRIMARY KEY, p_id INTEGER REFERENCES p(id))", [], "run")
        with pytest.raises(sqlite3.IntegrityError):
            await driver.query("INSERT INTO c (p_id) VALUES (?)", [99], "run")
    finally:
        await driver.close()


@pytest.mark.asyncio
async def test_batch_rolls_back_leading_ddl(tmp_path: Path) -> None:
    driver = LocalSQLiteDriver(tmp_path / "local.sqlite")
    try:
        with pytest.raises(sqlite3.OperationalError):
            await driver.batch(
                [
                    StatementRequest(sql="CREATE TABLE t (id INTEGER PRIMARY KEY)", method="run"),
                    StatementRequest(sql="INSERT INTO missing (id) VALUES (1)", method="run"),
                ]
            )
        tables = await driver.query(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 't'", [], "all"
        )
    finally:
        await driver.close()

    assert tables.rows == []


@pytest.mark.asyncio
async def test_failing_query_does_not_break_concurrent_batch(tmp_path: Path) -> None:
    driver = LocalSQLiteDriver(tmp_path / "local.sqlite")
    try:
        await driver.query("CREATE TABLE t (id INTEGER PRIMARY KEY, n INTEGER NOT NULL)", [], "run")
        inserts = [
            StatementRequest(sql="INSERT INTO t (n) VALUES (?)", params=(i,), method="run")
            for i in range(50)
        ]

        batch_result, query_result = await asyncio.gather(
            driver.batch(inserts),
            driver.query("INSERT INTO t (n) VALUES (?)", [None], "run"),
            return_exceptions=True,
        )
        count = await driver.query("SELECT COUNT(*) FROM t", [], "get")
    finally:
        await driver.close()

    assert isinstance(query_result, sqlite3.IntegrityError)
    assert isinstance(batch_result, list) and len(batch_result) == 50
    assert count.rows == [[50]]
