"""
Cloudflare D1 HTTP query client.

Used endpoint:
- POST /accounts/{account_id}/d1/database/{database_id}/query
    body:     {"sql": "...", "params": [...], "method": "..."}
    response: {"success": bool, "errors": [...], "result": [{"success": bool, "results": [{...}, ...]}]}

Every call sends exactly one statement, so the remote service answers with
exactly one entry in `result`; only `result[0]` is read.
Rows come back as column-name -> value objects and are flattened to
positional lists in the order the service produced them. Column names are
dropped here; callers map columns from the statement they sent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

import httpx
from pydantic import BaseModel, Field, StrictBool, ValidationError

DEFAULT_BASE_URL = "https://api.cloudflare.com/client/v4"

logger = logging.getLogger(__name__)


# D1 failures are explicit and separable from other runtime errors.
class D1Error(RuntimeError):
    def __init__(
        self,
        message: str,
        *,
        reason: str,
        status: int | None = None,
        status_text: str | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.status = status
        self.status_text = status_text
        self.body = body


@dataclass(frozen=True)
class D1Credentials:
    account_id: str
    database_id: str
    api_token: str = field(repr=False)

    def query_path(self) -> str:
        return f"/accounts/{self.account_id}/d1/database/{self.database_id}/query"


@dataclass(frozen=True)
class StatementRequest:
    sql: str
    params: Sequence[Any] = ()
    method: str = "all"


@dataclass(frozen=True)
class QueryResult:
    rows: list[list[Any]]


class D1StatementResult(BaseModel):
    success: StrictBool
    results: list[dict[str, Any]] = Field(default_factory=list)
    meta: dict[str, Any] | None = None


class D1Response(BaseModel):
    success: StrictBool
    errors: list[Any]
    messages: list[Any] = Field(default_factory=list)
    result: list[D1StatementResult] | None = None


def _decode_response(resp: httpx.Response) -> D1Response:
    try:
        return D1Response.model_validate_json(resp.content)
    except ValidationError as exc:
        raise D1Error(
            f"D1 returned a malformed response: {resp.text[:500]}",
            reason="malformed_response",
            status=resp.status_code,
            body=resp.text,
        ) from exc


async def execute_query(
    credentials: D1Credentials,
    sql: str,
    params: Sequence[Any],
    method: str,
    *,
    base_url: str = DEFAULT_BASE_URL,
    timeout_s: float = 30.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> QueryResult:
    """
    Run one SQL statement against D1 and return its rows positionally.
    """
    payload = {"sql": sql, "params": list(params), "method": method}
    headers = {
        "Authorization": f"Bearer {credentials.api_token}",
        "Content-Type": "application/json",
    }
    logger.debug("d1_query method=%s sql=%s", method, sql)

    try:
        async with httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout_s,
            transport=transport,
        ) as client:
            resp = await client.post(credentials.query_path(), json=payload, headers=headers)
    except httpx.HTTPError as exc:
        raise D1Error(f"D1 request failed: {exc}", reason="transport") from exc

    if resp.status_code != 200:
        logger.warning("d1_http_error status=%s", resp.status_code)
        raise D1Error(
            f"Error from D1 query API: {resp.status_code} {resp.reason_phrase}\n{resp.text[:500]}",
            reason="http_status",
            status=resp.status_code,
            status_text=resp.reason_phrase,
            body=resp.text,
        )

    data = _decode_response(resp)
    body = data.model_dump(mode="json")

    if data.errors or not data.success:
        logger.warning("d1_application_error errors=%s", data.errors)
        raise D1Error(
            f"Error from D1 query API: {data.errors}",
            reason="application_error",
            status=resp.status_code,
            body=body,
        )

    entry = data.result[0] if data.result else None
    if entry is None or not entry.success:
        logger.warning("d1_statement_failed sql=%s", sql)
        raise D1Error(
            "D1 statement failed.",
            reason="statement_failed",
            status=resp.status_code,
            body=body,
        )

    return QueryResult(rows=[list(row.values()) for row in entry.results])


async def execute_batch(
    credentials: D1Credentials,
    requests: Sequence[StatementRequest],
    *,
    base_url: str = DEFAULT_BASE_URL,
    timeout_s: float = 30.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[QueryResult]:
    """
    Run statements one after another, in order.

    Later statements may depend on the effects of earlier ones, so each call
    waits for the previous response. The first failure propagates and the
    remaining statements are never sent.
    """
    results: list[QueryResult] = []
    for request in requests:
        result = await execute_query(
            credentials,
            request.sql,
            request.params,
            request.method,
            base_url=base_url,
            timeout_s=timeout_s,
            transport=transport,
        )
        results.append(result)
    return results


class D1HttpDriver:
    """
    SQL driver backed by the D1 HTTP API.

    Owns the credentials for its whole lifetime. Holds no connection: each
    statement is one stateless HTTP request.
    """

    def __init__(
        self,
        credentials: D1Credentials,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout_s: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._credentials = credentials
        self._base_url = base_url
        self._timeout_s = timeout_s
        self._transport = transport

    @property
    def credentials(self) -> D1Credentials:
        return self._credentials

    async def query(self, sql: str, params: Sequence[Any], method: str) -> QueryResult:
        return await execute_query(
            self._credentials,
            sql,
            params,
            method,
            base_url=self._base_url,
            timeout_s=self._timeout_s,
            transport=self._transport,
        )

    async def batch(self, requests: Sequence[StatementRequest]) -> list[QueryResult]:
        return await execute_batch(
            self._credentials,
            requests,
            base_url=self._base_url,
            timeout_s=self._timeout_s,
            transport=self._transport,
        )

    async def close(self) -> None:
        return None
