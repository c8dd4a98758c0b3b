"""Hosted table API client (PostgREST, as exposed by Supabase) with retry logic"""

import asyncio
import httpx
from typing import Any, Dict, List, Optional, Sequence, Tuple
from radicados_gateway.config import settings
from radicados_gateway.domain.exceptions import RecordStoreError
from radicados_gateway.infrastructure.observability.metrics import store_failure_counter, store_request_latency_histogram

Filter = Tuple[str, str]  # (column, "op.value"), e.g. ("fecha", "gte.2025-01-01")


class PostgRESTClient:
    """Client for the generic table query API of the hosted backend"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        schema: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.supabase_url).rstrip("/") + "/rest/v1"
        self.api_key = api_key if api_key is not None else settings.supabase_anon_key
        self.schema = schema or settings.supabase_schema
        self.timeout = timeout or settings.http_timeout_seconds
        self.max_retries = max(settings.http_max_retries, 1)
        self.backoff_base = settings.http_backoff_base
        self.transport = transport

    def _headers(self, write: bool) -> Dict[str, str]:
        headers = {"Accept-Profile": self.schema}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        if write:
            headers["Content-Profile"] = self.schema
            headers["Prefer"] = "return=representation"
        return headers

    async def _request(
        self,
        method: str,
        table: str,
        params: Sequence[Filter] = (),
        json: Any = None,
    ) -> List[Dict[str, Any]]:
        """
        Send one table request.

        Retry strategy:
        - Exponential backoff: base, 2x base, 4x base ... (base * 2^(attempt-1))
        - Retries on 5xx errors and network failures, except for inserts,
          which are not idempotent

        Raises:
            RecordStoreError: On timeout, HTTP errors, or invalid response
        """
        retry = method != "POST"
        attempt = 0
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            while True:
                try:
                    with store_request_latency_histogram.labels(method=method).time():
                        response = await client.request(
                            method,
                            f"{self.base_url}/{table}",
                            params=list(params),
                            json=json,
                            headers=self._headers(write=method != "GET"),
                        )
                    response.raise_for_status()
                    return response.json() if response.content else []

                except (httpx.HTTPStatusError, httpx.RequestError) as e:
                    attempt += 1
                    store_failure_counter.inc()

                    transient = isinstance(e, httpx.RequestError) or e.response.status_code >= 500
                    if not (retry and transient) or attempt >= self.max_retries:
                        if isinstance(e, httpx.HTTPStatusError):
                            raise RecordStoreError(
                                f"{method} {table} failed: {e.response.status_code} {e.response.text}"
                            ) from e
                        raise RecordStoreError(f"{method} {table} failed: {e}") from e

                    backoff = self.backoff_base * (2 ** (attempt - 1))
                    await asyncio.sleep(backoff)

                except ValueError as e:
                    raise RecordStoreError(f"Invalid response from {table}: {e}") from e

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Sequence[Filter] = (),
        order: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        params: List[Filter] = [("select", columns), *filters]
        if order:
            params.append(("order", order))
        if limit is not None:
            params.append(("limit", str(limit)))
        return await self._request("GET", table, params)

    async def insert(self, table: str, row: Dict[str, Any]) -> List[Dict[str, Any]]:
        return await self._request("POST", table, json=row)

    async def update(self, table: str, values: Dict[str, Any], filters: Sequence[Filter]) -> List[Dict[str, Any]]:
        if not filters:
            # Never patch a whole table
            raise ValueError("update requires at least one filter")
        return await self._request("PATCH", table, filters, json=values)


def in_filter(values: Sequence[str]) -> str:
    quoted = ",".join(f'"{v}"' for v in values)
    return f"in.({quoted})"
