"""
Command-line entry point.

    cinegoose seed [--count N] [--seed S] [--env-file .prod.vars]
    cinegoose serve [--host HOST] [--port PORT] [--env-file .prod.vars]

`ENVIRONMENT=production` targets the remote D1 database (credentials from
the environment or the env file); anything else targets the newest local
SQLite file under `.wrangler/`.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Sequence

from cinegoose.core import db, schema
from cinegoose.core.config import DEFAULT_ENV_FILE, ConfigError, Settings, load_settings
from cinegoose.core.d1 import D1Error
from cinegoose.core.driver import open_driver
from cinegoose.core.local import LocalDatabaseNotFound
from cinegoose.seed import SeedReport, seed_database

logger = logging.getLogger("cinegoose.cli")


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--env-file",
        default=DEFAULT_ENV_FILE,
        help=f"dotenv file with production credentials (default: {DEFAULT_ENV_FILE})",
    )

    parser = argparse.ArgumentParser(prog="cinegoose", description="Cinegoose API tools.")
    sub = parser.add_subparsers(dest="command", required=True)

    seed_parser = sub.add_parser("seed", parents=[common], help="Populate the database with sample data.")
    seed_parser.add_argument("--count", type=int, default=10, help="records per table")
    seed_parser.add_argument("--seed", type=int, default=0, help="random seed for generated data")

    serve_parser = sub.add_parser("serve", parents=[common], help="Run the HTTP API.")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8787)
    return parser


async def _run_seed(settings: Settings, *, count: int, seed: int) -> SeedReport:
    db.init_driver(open_driver(settings))
    try:
        await schema.ensure_schema()
        return await seed_database(count=count, seed=seed)
    finally:
        await db.close_driver()


def seed_command(settings: Settings, *, count: int, seed: int) -> int:
    if settings.is_production:
        logger.warning("Seeding production database")

    try:
        report = asyncio.run(_run_seed(settings, count=count, seed=seed))
    except ConfigError as exc:
        print(f"Database seed failed: {exc}", file=sys.stderr)
        return 1
    except LocalDatabaseNotFound as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except D1Error as exc:
        logger.error("seed_failed reason=%s status=%s body=%s", exc.reason, exc.status, exc.body)
        print(f"Error seeding database: {exc}", file=sys.stderr)
        return 1
    except Exception as exc:
        logger.exception("seed_failed")
        print(f"Error seeding database: {exc}", file=sys.stderr)
        return 1

    print(
        "Database seeded successfully! "
        f"(users={report.users} movies={report.movies} geese={report.geese} quotes={report.quotes})"
    )
    return 0


def serve_command(settings: Settings, *, host: str, port: int) -> int:
    import uvicorn

    from cinegoose.main import create_app

    uvicorn.run(create_app(settings), host=host, port=port, log_level=settings.log_level.lower())
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = load_settings(env_file=args.env_file)
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    if args.command == "seed":
        return seed_command(settings, count=args.count, seed=args.seed)
    return serve_command(settings, host=args.host, port=args.port)


if __name__ == "__main__":
    sys.exit(main())
