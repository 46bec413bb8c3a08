"""Tests for the httpx transport."""

from __future__ import annotations

import asyncio

import httpx
import pytest
from pydantic import TypeAdapter

from managed_git.domain.ports.transport import EndpointContext
from managed_git.domain.traversal import (
    TraversalBinaryContent,
    TraversalHtmlContent,
    TraversalJsonContent,
    TraversalTextContent,
)
from managed_git.infrastructure.gitlab_schema import gitlab_repo_tags_guard
from managed_git.infrastructure.http_transport import HttpxTransport, classify_response

_URL = "https://example.com/resource"


def _response(**kwargs) -> httpx.Response:  # type: ignore[no-untyped-def]
    return httpx.Response(200, request=httpx.Request("GET", _URL), **kwargs)


# ── Classification ──────────────────────────────────────────────────────────


def test_classify_json() -> None:
    result = classify_response(_response(json={"a": 1}))
    assert isinstance(result, TraversalJsonContent)
    assert result.json_instance == {"a": 1}
    assert result.request_url == _URL


def test_classify_vendor_json() -> None:
    result = classify_response(
        _response(content=b"[1]", headers={"content-type": "application/vnd.api+json"})
    )
    assert isinstance(result, TraversalJsonContent)
    assert result.json_instance == [1]


def test_classify_malformed_json_falls_back_to_text() -> None:
    result = classify_response(
        _response(content=b"{oops", headers={"content-type": "application/json"})
    )
    assert type(result) is TraversalTextContent
    assert result.body_text == "{oops"


def test_classify_text() -> None:
    result = classify_response(_response(text="hello"))
    assert type(result) is TraversalTextContent
    assert result.body_text == "hello"


def test_classify_html() -> None:
    result = classify_response(_response(html="<p>hi</p>"))
    assert isinstance(result, TraversalHtmlContent)
    assert isinstance(result, TraversalTextContent)


def test_classify_binary() -> None:
    result = classify_response(
        _response(content=b"\x00\x01", headers={"content-type": "application/octet-stream"})
    )
    assert isinstance(result, TraversalBinaryContent)
    assert result.body == b"\x00\x01"


def test_classify_without_content_type_is_binary() -> None:
    assert isinstance(classify_response(_response(content=b"abc")), TraversalBinaryContent)


# ── Requests ────────────────────────────────────────────────────────────────


def test_fetch_json_validates_with_guard(serve) -> None:  # type: ignore[no-untyped-def]
    server = serve(lambda request: httpx.Response(200, json=[{"name": "v2"}, {"name": "v1"}]))

    tags = asyncio.run(server.transport().fetch_json(EndpointContext(_URL), gitlab_repo_tags_guard))

    assert tags is not None
    assert [tag.name for tag in tags] == ["v2", "v1"]


@pytest.mark.parametrize(
    "body",
    [
        {"name": "v1"},
        [{"name": "v1"}, {"title": "v0"}],
        [{"name": ""}],
        [{"name": 3}],
        ["v1"],
    ],
)
def test_fetch_json_rejects_bad_shapes(serve, body) -> None:  # type: ignore[no-untyped-def]
    server = serve(lambda request: httpx.Response(200, json=body))

    result = asyncio.run(server.transport().fetch_json(EndpointContext(_URL), gitlab_repo_tags_guard))

    assert result is None


def test_fetch_json_non_json_body_is_none(serve) -> None:  # type: ignore[no-untyped-def]
    server = serve(lambda request: httpx.Response(200, text="not json"))

    guard: TypeAdapter[list[int]] = TypeAdapter(list[int])
    assert asyncio.run(server.transport().fetch_json(EndpointContext(_URL), guard)) is None


@pytest.mark.parametrize("status", [401, 404, 500])
def test_error_status_is_none(serve, status: int) -> None:  # type: ignore[no-untyped-def]
    server = serve(lambda request: httpx.Response(status, json=[{"name": "v1"}]))
    transport = server.transport()

    assert asyncio.run(transport.fetch_json(EndpointContext(_URL), gitlab_repo_tags_guard)) is None
    assert asyncio.run(transport.traverse(EndpointContext(_URL))) is None


def test_network_error_is_none(serve) -> None:  # type: ignore[no-untyped-def]
    def _fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = serve(_fail).transport()

    assert asyncio.run(transport.traverse(EndpointContext(_URL))) is None


def test_headers_and_user_agent_are_sent(serve) -> None:  # type: ignore[no-untyped-def]
    server = serve(lambda request: httpx.Response(200, text="ok"))

    asyncio.run(server.transport().traverse(EndpointContext(_URL, headers={"PRIVATE-TOKEN": "t"})))

    (request,) = server.requests
    assert request.headers["PRIVATE-TOKEN"] == "t"
    assert request.headers["User-Agent"] == "managed-git/1.0"


def test_endpoint_context_repr_hides_header_values() -> None:
    ctx = EndpointContext(_URL, headers={"PRIVATE-TOKEN": "glpat-secret"})
    assert "glpat-secret" not in repr(ctx)
    assert "PRIVATE-TOKEN" in repr(ctx)


def test_query_params_are_encoded_by_the_client(serve) -> None:  # type: ignore[no-untyped-def]
    server = serve(lambda request: httpx.Response(200, text="ok"))

    asyncio.run(server.transport().traverse(EndpointContext(_URL, params={"ref": "feature/x"})))

    (request,) = server.requests
    assert request.url.params["ref"] == "feature/x"
    assert request.url.path == "/resource"


def test_fetch_json_ignores_types_of_unread_fields(serve) -> None:  # type: ignore[no-untyped-def]
    server = serve(
        lambda request: httpx.Response(
            200, json=[{"name": "v1", "protected": "yes", "message": 42, "target": None}]
        )
    )

    tags = asyncio.run(server.transport().fetch_json(EndpointContext(_URL), gitlab_repo_tags_guard))

    assert tags is not None
    assert [tag.name for tag in tags] == ["v1"]
