"""
GraphQL transport for the content API.

The endpoint comes from `ApiConfig` and is injected at construction time.
Every failure (network, non-2xx status, GraphQL `errors`, malformed body)
is raised as `UpstreamError`; the resolution pipeline does not catch it.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Protocol

import httpx

from ..config import ApiConfig, get_endpoint
from ..errors import UpstreamError
from ..utils.logging import get_logger, log_event
from .queries import PAGE_QUERY, REVISION_QUERY, USER_QUERY, aliases_query


class ContentSource(Protocol):
    """What the resolver needs from the API.

    Each method returns the raw `uuid` payload, or None when the API has no
    entity for the lookup.
    """

    async def fetch_by_alias(self, alias: str, instance: str) -> dict[str, Any] | None: ...

    async def fetch_revision(self, revision_id: int) -> dict[str, Any] | None: ...

    async def fetch_user(self, path: str, instance: str) -> dict[str, Any] | None: ...

    async def fetch_aliases(self, ids: list[int]) -> dict[int, str]: ...


class GraphQLClient:
    """Async GraphQL client backed by one shared `httpx.AsyncClient`.

    Attributes:
        endpoint: The GraphQL endpoint URL
        retries: Retry attempts for transport errors (0 disables retrying)
    """

    def __init__(
        self,
        cfg: ApiConfig,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger | None = None,
    ):
        self.endpoint = get_endpoint(cfg)
        self.retries = max(0, cfg.retries)
        self.logger = logger or get_logger("fetch")
        self._http = httpx.AsyncClient(
            timeout=cfg.timeout_seconds,
            headers={
                "User-Agent": cfg.user_agent,
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            trust_env=cfg.trust_env,
            transport=transport,
        )

    async def __aenter__(self) -> GraphQLClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def execute(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """POST one GraphQL document and return its `data` object.

        Raises:
            UpstreamError: On transport failure, non-2xx status, GraphQL errors
                or a body that is not a JSON object with `data`
        """
        payload = {"query": query, "variables": variables or {}}
        last_error: Exception | None = None

        for attempt in range(self.retries + 1):
            try:
                resp = await self._http.post(self.endpoint, json=payload)
            except httpx.TransportError as exc:
                last_error = exc
                log_event(
                    self.logger,
                    "GraphQL transport error",
                    level=logging.WARNING,
                    event="graphql_transport_error",
                    attempt=attempt,
                    error=f"{type(exc).__name__}: {exc}",
                )
                if attempt < self.retries:
                    await asyncio.sleep(0.5 * (attempt + 1))
                continue
            return self._unwrap(resp)

        raise UpstreamError(f"GraphQL request failed: {type(last_error).__name__}: {last_error}")

    def _unwrap(self, resp: httpx.Response) -> dict[str, Any]:
        if resp.status_code < 200 or resp.status_code >= 300:
            raise UpstreamError(
                f"GraphQL HTTP error: {resp.status_code} {resp.text[:200]}",
                status_code=resp.status_code,
            )
        try:
            body = resp.json()
        except json.JSONDecodeError as exc:
            raise UpstreamError(f"Malformed GraphQL response: {exc}", status_code=resp.status_code) from exc

        if not isinstance(body, dict):
            raise UpstreamError("Malformed GraphQL response: body is not an object", status_code=resp.status_code)
        errors = body.get("errors")
        if errors:
            messages = "; ".join(str(err.get("message", err)) for err in errors if isinstance(err, dict))
            raise UpstreamError(f"GraphQL errors: {messages or errors}", status_code=resp.status_code)
        data = body.get("data")
        if not isinstance(data, dict):
            raise UpstreamError("Malformed GraphQL response: missing data", status_code=resp.status_code)
        return data

    async def fetch_by_alias(self, alias: str, instance: str) -> dict[str, Any] | None:
        data = await self.execute(PAGE_QUERY, {"alias": {"instance": instance, "path": alias}})
        log_event(self.logger, "Fetched alias", level=logging.DEBUG, event="fetch_alias", alias=alias, instance=instance)
        return data.get("uuid")

    async def fetch_by_id(self, entity_id: int, instance: str) -> dict[str, Any] | None:
        """Every entity is reachable under the alias `/{id}`."""
        return await self.fetch_by_alias(f"/{int(entity_id)}", instance)

    async def fetch_revision(self, revision_id: int) -> dict[str, Any] | None:
        data = await self.execute(REVISION_QUERY, {"id": revision_id})
        return data.get("uuid")

    async def fetch_user(self, path: str, instance: str) -> dict[str, Any] | None:
        data = await self.execute(USER_QUERY, {"path": path, "instance": instance})
        return data.get("uuid")

    async def fetch_aliases(self, ids: list[int]) -> dict[int, str]:
        """Resolve ids to aliases; ids without an alias are left out."""
        if not ids:
            return {}
        data = await self.execute(aliases_query(ids))
        aliases: dict[int, str] = {}
        for item in data.values():
            if isinstance(item, dict) and item.get("alias") and item.get("id") is not None:
                aliases[int(item["id"])] = item["alias"]
        return aliases
