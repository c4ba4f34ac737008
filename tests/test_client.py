"""Tests for the GraphQL transport, driven through httpx.MockTransport."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from content_resolver.config import ApiConfig
from content_resolver.errors import UpstreamError
from content_resolver.fetch import GraphQLClient

ENDPOINT = "https://api.example.org/graphql"


def _client(handler, **cfg) -> GraphQLClient:
    return GraphQLClient(ApiConfig(endpoint=ENDPOINT, **cfg), transport=httpx.MockTransport(handler))


def _run(client: GraphQLClient, method: str, *args):
    async def main():
        async with client:
            return await getattr(client, method)(*args)

    return asyncio.run(main())


def test_fetch_by_alias_posts_query_and_variables():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"data": {"uuid": {"__typename": "Article", "id": 1}}})

    uuid = _run(_client(handler), "fetch_by_alias", "/mathe", "de")

    assert uuid == {"__typename": "Article", "id": 1}
    assert seen["url"] == ENDPOINT
    assert seen["body"]["variables"] == {"alias": {"instance": "de", "path": "/mathe"}}
    assert "uuid(alias: $alias)" in seen["body"]["query"]


def test_null_uuid_is_none():
    uuid = _run(_client(lambda request: httpx.Response(200, json={"data": {"uuid": None}})), "fetch_revision", 5)

    assert uuid is None


def test_graphql_errors_raise():
    def handler(request):
        return httpx.Response(200, json={"errors": [{"message": "bad alias"}], "data": None})

    with pytest.raises(UpstreamError, match="bad alias"):
        _run(_client(handler), "fetch_by_alias", "/x", "de")


def test_http_status_raises_with_code():
    with pytest.raises(UpstreamError) as excinfo:
        _run(_client(lambda request: httpx.Response(502, text="bad gateway")), "fetch_user", "/user/x", "de")

    assert excinfo.value.status_code == 502


def test_malformed_body_raises():
    with pytest.raises(UpstreamError):
        _run(_client(lambda request: httpx.Response(200, text="<html>")), "fetch_by_alias", "/x", "de")


def test_transport_errors_are_retried_then_raised(monkeypatch):
    attempts = []

    def handler(request):
        attempts.append(request)
        raise httpx.ConnectError("refused", request=request)

    async def no_sleep(_seconds):
        return None

    monkeypatch.setattr(asyncio, "sleep", no_sleep)

    with pytest.raises(UpstreamError, match="ConnectError"):
        _run(_client(handler, retries=2), "fetch_by_alias", "/x", "de")

    assert len(attempts) == 3


def test_fetch_aliases_batches_ids():
    def handler(request):
        query = json.loads(request.content)["query"]
        assert "uuid5: uuid(id: 5)" in query
        assert "uuid7: uuid(id: 7)" in query
        return httpx.Response(
            200,
            json={"data": {"uuid5": {"id": 5, "alias": "/mathe/fuenf"}, "uuid7": None}},
        )

    assert _run(_client(handler), "fetch_aliases", [5, 7]) == {5: "/mathe/fuenf"}
