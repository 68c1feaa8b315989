"""
Runtime settings.

Settings are read once at the edges (CLI, app factory) and passed down
explicitly. Adapters in `core/` never read the process environment.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from dotenv import dotenv_values

from .d1 import DEFAULT_BASE_URL, D1Credentials

PRODUCTION = "production"
DEFAULT_STATE_DIR = ".wrangler"
DEFAULT_ENV_FILE = ".prod.vars"

# Only credentials are taken from the env file; the target is chosen by the
# real environment.
CREDENTIAL_KEYS = ("CLOUDFLARE_ACCOUNT_ID", "CLOUDFLARE_DATABASE_ID", "CLOUDFLARE_D1_TOKEN")


class ConfigError(RuntimeError):
    pass


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = (environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = (environ.get(name) or "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def _env_str(environ: Mapping[str, str], name: str, default: str = "") -> str:
    return (environ.get(name) or "").strip() or default


def _env_log_level(environ: Mapping[str, str], name: str, default: str = "INFO") -> str:
    raw = _env_str(environ, name, default).upper()
    if not isinstance(logging.getLevelName(raw), int):
        return default
    return raw


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    d1_account_id: str = ""
    d1_database_id: str = ""
    d1_api_token: str = field(default="", repr=False)
    d1_base_url: str = DEFAULT_BASE_URL
    d1_timeout_s: float = 30.0
    local_state_dir: Path = Path(DEFAULT_STATE_DIR)
    local_database_path: Path | None = None
    create_schema: bool = True
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment == PRODUCTION

    def d1_credentials(self) -> D1Credentials:
        missing = [
            name
            for name, value in (
                ("CLOUDFLARE_ACCOUNT_ID", self.d1_account_id),
                ("CLOUDFLARE_DATABASE_ID", self.d1_database_id),
                ("CLOUDFLARE_D1_TOKEN", self.d1_api_token),
            )
            if not value
        ]
        if missing:
            raise ConfigError(
                "Production environment variables not set "
                f"(missing {', '.join(missing)}; make sure you have a {DEFAULT_ENV_FILE} file)."
            )
        return D1Credentials(
            account_id=self.d1_account_id,
            database_id=self.d1_database_id,
            api_token=self.d1_api_token,
        )


def load_settings(
    environ: Mapping[str, str] | None = None,
    *,
    env_file: str | Path | None = None,
) -> Settings:
    """
    Build settings from environment variables.

    `env_file` (dotenv syntax) may only supply the D1 credentials, as
    fallbacks; the real environment wins. Everything else, `ENVIRONMENT`
    included, comes from the environment alone.
    """
    values: dict[str, str] = {}
    if env_file is not None and Path(env_file).is_file():
        file_values = dotenv_values(env_file)
        for key in CREDENTIAL_KEYS:
            if file_values.get(key) is not None:
                values[key] = str(file_values[key])
    values.update(os.environ if environ is None else environ)

    local_db = _env_str(values, "LOCAL_DATABASE_PATH")
    return Settings(
        environment=_env_str(values, "ENVIRONMENT", "development").lower(),
        d1_account_id=_env_str(values, "CLOUDFLARE_ACCOUNT_ID"),
        d1_database_id=_env_str(values, "CLOUDFLARE_DATABASE_ID"),
        d1_api_token=_env_str(values, "CLOUDFLARE_D1_TOKEN"),
        d1_base_url=_env_str(values, "CLOUDFLARE_D1_API_URL", DEFAULT_BASE_URL),
        d1_timeout_s=_env_float(values, "D1_TIMEOUT_S", 30.0),
        local_state_dir=Path(_env_str(values, "LOCAL_STATE_DIR", DEFAULT_STATE_DIR)),
        local_database_path=Path(local_db) if local_db else None,
        create_schema=_env_bool(values, "CINEGOOSE_CREATE_SCHEMA", True),
        log_level=_env_log_level(values, "LOG_LEVEL"),
    )
