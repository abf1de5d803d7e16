"""HuduClient — async gateway to the Hudu REST API.

Every public method issues exactly one HTTP request. There are no retries
and no caching; failures surface as :mod:`hudu_mcp.gateway.errors` types.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from hudu_mcp.gateway.endpoints import Endpoint, endpoint
from hudu_mcp.gateway.errors import (
    ApiError,
    NetworkError,
    UnsupportedOperationError,
    error_for_status,
)
from hudu_mcp.config import HuduConfig

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class HuduClient:
    """Async context manager wrapping a shared :class:`httpx.AsyncClient`.

    Usage::

        async with HuduClient(config) as hudu:
            articles = await hudu.list("articles", search="vpn")
            article = await hudu.get("articles", 42)

    The underlying connection pool is safe to share between concurrently
    running requests.
    """

    def __init__(
        self,
        config: HuduConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> HuduClient:
        await self.open()
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    async def open(self) -> None:
        """Create the HTTP client; idempotent."""
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            base_url=self._config.api_root,
            headers={
                "x-api-key": self._config.api_key,
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=self._config.timeout,
            transport=self._transport,
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "HuduClient must be opened (use it as an async context manager)"
            raise RuntimeError(msg)
        return self._client

    # ------------------------------------------------------------------
    # Collection operations
    # ------------------------------------------------------------------

    async def list(self, collection: str, **filters: Any) -> list[Record]:
        """``GET /{collection}`` — an empty result is ``[]``, never an error."""
        ep = endpoint(collection)
        body = await self._request("GET", f"/{ep.collection}", params=filters)
        return _unwrap_list(body, ep.plural)

    async def get(self, collection: str, record_id: int) -> Record:
        """``GET /{collection}/{id}``."""
        ep = endpoint(collection)
        body = await self._request("GET", f"/{ep.collection}/{record_id}")
        return _unwrap_one(body, ep.singular)

    async def create(self, collection: str, fields: Record) -> Record:
        """``POST /{collection}`` with ``{<singular>: fields}``."""
        ep = endpoint(collection)
        body = await self._request("POST", f"/{ep.collection}", json={ep.singular: fields})
        return _unwrap_one(body, ep.singular)

    async def update(self, collection: str, record_id: int, fields: Record) -> Record:
        """``PUT /{collection}/{id}`` with ``{<singular>: fields}``."""
        ep = endpoint(collection)
        body = await self._request(
            "PUT", f"/{ep.collection}/{record_id}", json={ep.singular: fields}
        )
        return _unwrap_one(body, ep.singular)

    async def delete(self, collection: str, record_id: int) -> None:
        """``DELETE /{collection}/{id}``."""
        ep = endpoint(collection)
        if not ep.deletable:
            raise UnsupportedOperationError(collection, "delete")
        await self._request("DELETE", f"/{ep.collection}/{record_id}")

    async def archive(self, collection: str, record_id: int) -> Record:
        """``PUT /{collection}/{id}/archive``."""
        return await self._put_action(self._archivable(collection, "archive"), record_id, "archive")

    async def unarchive(self, collection: str, record_id: int) -> Record:
        """``PUT /{collection}/{id}/unarchive``."""
        return await self._put_action(
            self._archivable(collection, "unarchive"), record_id, "unarchive"
        )

    async def transition(self, collection: str, record_id: int, action: str) -> Record:
        """``PUT /{collection}/{id}/{action}`` for workflow actions such as ``kickoff``."""
        ep = endpoint(collection)
        if action not in ep.transitions:
            raise UnsupportedOperationError(collection, action)
        return await self._put_action(ep, record_id, action)

    # ------------------------------------------------------------------
    # Administrative and navigation endpoints
    # ------------------------------------------------------------------

    async def api_info(self) -> Record:
        """``GET /api_info`` — returns ``{"version", "date"}`` unwrapped."""
        body = await self._request("GET", "/api_info")
        return body if isinstance(body, dict) else {}

    async def activity_logs(self, **filters: Any) -> list[Record]:
        body = await self._request("GET", "/activity_logs", params=filters)
        return _unwrap_list(body, "activity_logs")

    async def delete_activity_logs(
        self, datetime: str, *, delete_unassigned_logs: bool = False
    ) -> None:
        await self._request(
            "DELETE",
            "/activity_logs",
            params={"datetime": datetime, "delete_unassigned_logs": delete_unassigned_logs},
        )

    async def expirations(self, **filters: Any) -> list[Record]:
        body = await self._request("GET", "/expirations", params=filters)
        return _unwrap_list(body, "expirations")

    async def exports(self, **filters: Any) -> list[Record]:
        body = await self._request("GET", "/exports", params=filters)
        return _unwrap_list(body, "exports")

    async def s3_exports(self, **filters: Any) -> list[Record]:
        body = await self._request("GET", "/s3_exports", params=filters)
        return _unwrap_list(body, "s3_exports")

    async def card_jump(self, name: str, company_id: int | None = None) -> list[Record]:
        body = await self._request(
            "GET", "/cards/jump", params={"name": name, "company_id": company_id}
        )
        return _unwrap_list(body, "cards")

    async def card_lookup(self, name: str, company_id: int | None = None) -> list[Record]:
        body = await self._request(
            "GET", "/cards/lookup", params={"name": name, "company_id": company_id}
        )
        return _unwrap_list(body, "cards")

    async def company_jump(self, name: str) -> list[Record]:
        body = await self._request("GET", "/companies/jump", params={"name": name})
        return _unwrap_list(body, "companies")

    # ------------------------------------------------------------------
    # Company-scoped assets
    # ------------------------------------------------------------------

    async def company_assets(self, company_id: int, **filters: Any) -> list[Record]:
        """``GET /companies/{company_id}/assets``."""
        body = await self._request("GET", f"/companies/{company_id}/assets", params=filters)
        return _unwrap_list(body, "assets")

    async def company_asset(self, company_id: int, asset_id: int) -> Record:
        """``GET /companies/{company_id}/assets/{asset_id}``."""
        body = await self._request("GET", f"/companies/{company_id}/assets/{asset_id}")
        return _unwrap_one(body, "asset")

    async def archive_company_asset(self, company_id: int, asset_id: int) -> Record:
        body = await self._request("PUT", f"/companies/{company_id}/assets/{asset_id}/archive")
        return _unwrap_one(body, "asset")

    async def unarchive_company_asset(self, company_id: int, asset_id: int) -> Record:
        body = await self._request("PUT", f"/companies/{company_id}/assets/{asset_id}/unarchive")
        return _unwrap_one(body, "asset")

    async def move_company_asset_layout(
        self, company_id: int, asset_id: int, asset_layout_id: int
    ) -> Record:
        """``PUT .../move_layout`` with ``{"asset": {"asset_layout_id": ...}}``."""
        body = await self._request(
            "PUT",
            f"/companies/{company_id}/assets/{asset_id}/move_layout",
            json={"asset": {"asset_layout_id": asset_layout_id}},
        )
        return _unwrap_one(body, "asset")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _archivable(collection: str, operation: str) -> Endpoint:
        ep = endpoint(collection)
        if not ep.archivable:
            raise UnsupportedOperationError(collection, operation)
        return ep

    async def _put_action(self, ep: Endpoint, record_id: int, action: str) -> Record:
        body = await self._request("PUT", f"/{ep.collection}/{record_id}/{action}")
        return _unwrap_one(body, ep.singular)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send one request and decode the JSON body (``None`` when empty)."""
        query = {k: v for k, v in (params or {}).items() if v is not None}
        logger.debug("Hudu %s %s params=%s", method, path, sorted(query))
        try:
            response = await self._http().request(method, path, params=query or None, json=json)
        except httpx.TransportError as exc:
            detail = str(exc) or exc.__class__.__name__
            raise NetworkError(f"{method} {path} failed: {detail}") from exc

        if not response.is_success:
            raise error_for_status(response.status_code, _error_message(response))
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(response.status_code, "Response body is not valid JSON") from exc


def _error_message(response: httpx.Response) -> str:
    """Extract the backend's error text, falling back to the reason phrase."""
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text[:500] if text else response.reason_phrase
    if isinstance(body, dict):
        for key in ("error", "message", "errors"):
            value = body.get(key)
            if value:
                return value if isinstance(value, str) else str(value)
    return response.reason_phrase


def _unwrap_list(body: Any, key: str) -> list[Record]:
    if isinstance(body, list):
        return body
    if isinstance(body, dict):
        value = body.get(key)
        if isinstance(value, list):
            return value
    return []


def _unwrap_one(body: Any, key: str) -> Record:
    if isinstance(body, dict):
        value = body.get(key)
        if isinstance(value, dict):
            return value
        return body
    return {}
