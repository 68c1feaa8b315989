from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from cinegoose.core.config import Settings
from cinegoose.core.d1 import D1Credentials


def d1_body(rows: list[dict[str, Any]] | None = None, *, success: bool = True) -> dict[str, Any]:
    return {
        "success": True,
        "errors": [],
        "messages": [],
        "result": [{"success": success, "results": rows or [], "meta": {}}],
    }


@pytest.fixture()
def credentials() -> D1Credentials:
    return D1Credentials(account_id="acct-1", database_id="db-1", api_token="secret-token")


@pytest.fixture()
def local_settings(tmp_path: Path) -> Settings:
    return Settings(
        environment="development",
        local_database_path=tmp_path / "cinegoose.sqlite",
    )
