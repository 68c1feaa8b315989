"""
Sample-data seeding.

Generates deterministic fake records with Faker and inserts them through the
active SQL driver. Parents are inserted first; children reference the ids
returned by `INSERT ... RETURNING id`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Sequence

from faker import Faker

from cinegoose.core import db
from cinegoose.core.d1 import StatementRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedReport:
    users: int
    movies: int
    geese: int
    quotes: int


def _insert(table: str, columns: Sequence[str], values: Sequence[Any]) -> StatementRequest:
    placeholders = ", ".join("?" for _ in columns)
    return StatementRequest(
        sql=f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders}) RETURNING id",
        params=tuple(values),
        method="all",
    )


async def _insert_all(
    table: str,
    columns: Sequence[str],
    rows: Sequence[Sequence[Any]],
) -> list[int]:
    if not rows:
        return []
    results = await db.execute_batch([_insert(table, columns, row) for row in rows])
    ids = [int(result.rows[0][0]) for result in results]
    logger.info("seed_inserted table=%s count=%s", table, len(ids))
    return ids


def _timestamp(fake: Faker) -> str:
    hours = fake.random_int(min=0, max=2)
    minutes = fake.random_int(min=0, max=59)
    seconds = fake.random_int(min=0, max=59)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def _maybe(fake: Faker, value: str) -> str | None:
    return value if fake.boolean(chance_of_getting_true=80) else None


async def seed_database(*, count: int = 10, seed: int = 0) -> SeedReport:
    """
    Insert `count` users, movies, famous geese and goose quotes.

    The same `seed` always produces the same data.
    """
    if count < 0:
        raise ValueError("count must be >= 0.")

    fake = Faker()
    fake.seed_instance(seed)

    users = [(fake.name(), fake.email()) for _ in range(count)]
    await _insert_all("users", ("name", "email"), users)

    movies = [
        (
            f"The {fake.word().title()}father",
            fake.name(),
            fake.date_between(start_date=date(1950, 1, 1), end_date=date(2024, 12, 31)).isoformat(),
        )
        for _ in range(count)
    ]
    movie_ids = await _insert_all("movies", ("title", "director", "release_date"), movies)

    geese = [
        (
            f"{fake.first_name()} Honk",
            fake.random_element(movie_ids),
            fake.name(),
            _maybe(fake, fake.sentence()),
        )
        for _ in range(count)
    ] if movie_ids else []
    goose_ids = await _insert_all("famous_geese", ("name", "movie_id", "character", "description"), geese)

    quotes = [
        (
            fake.random_element(goose_ids),
            fake.sentence(nb_words=10),
            _maybe(fake, fake.sentence()),
            _maybe(fake, _timestamp(fake)),
        )
        for _ in range(count)
    ] if goose_ids else []
    quote_ids = await _insert_all("goose_quotes", ("goose_id", "quote", "context", "timestamp"), quotes)

    return SeedReport(
        users=len(users),
        movies=len(movie_ids),
        geese=len(goose_ids),
        quotes=len(quote_ids),
    )
