"""httpx transport: implements the Transport port.

Every failure (network error, non-2xx status, body that does not match the
expected shape) is logged and reported as ``None``.  Nothing is retried.
"""

from __future__ import annotations

import logging
from typing import TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from managed_git.domain.ports.transport import EndpointContext
from managed_git.domain.traversal import (
    TraversalBinaryContent,
    TraversalHtmlContent,
    TraversalJsonContent,
    TraversalResult,
    TraversalTextContent,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TEXTUAL_APPLICATION_TYPES = frozenset(
    {
        "application/javascript",
        "application/xml",
        "application/x-yaml",
        "application/yaml",
        "application/toml",
    }
)


def _media_type(response: httpx.Response) -> str:
    return response.headers.get("content-type", "").split(";")[0].strip().lower()


def is_json_response(response: httpx.Response) -> bool:
    media_type = _media_type(response)
    return media_type == "application/json" or media_type.endswith("+json")


def is_html_response(response: httpx.Response) -> bool:
    return _media_type(response) in ("text/html", "application/xhtml+xml")


def is_text_response(response: httpx.Response) -> bool:
    media_type = _media_type(response)
    return media_type.startswith("text/") or media_type in _TEXTUAL_APPLICATION_TYPES


def classify_response(response: httpx.Response) -> TraversalResult:
    """Turn a successful response into the matching traversal result."""
    if is_json_response(response):
        try:
            return TraversalJsonContent(response=response, json_instance=response.json())
        except ValueError:
            logger.debug("Body of %s is labelled JSON but does not parse; keeping text", response.url)
            return TraversalTextContent(response=response, body_text=response.text)
    if is_html_response(response):
        return TraversalHtmlContent(response=response, body_text=response.text)
    if is_text_response(response):
        return TraversalTextContent(response=response, body_text=response.text)
    return TraversalBinaryContent(response=response, body=response.content)


class HttpxTransport:
    """Concrete ``Transport`` backed by a shared :class:`httpx.AsyncClient`."""

    def __init__(self, client: httpx.AsyncClient, user_agent: str = "managed-git/1.0") -> None:
        self._client = client
        self._user_agent = user_agent

    async def fetch_json(self, ctx: EndpointContext, guard: TypeAdapter[T]) -> T | None:
        """GET *ctx* and validate the JSON body against *guard*."""
        resp = await self._get(ctx)
        if resp is None:
            return None

        try:
            data = resp.json()
        except ValueError:
            logger.warning("Expected JSON from %s but the body does not parse", ctx.request)
            return None

        try:
            return guard.validate_python(data)
        except ValidationError as exc:
            logger.info(
                "Response from %s failed shape validation (%d error(s))",
                ctx.request,
                exc.error_count(),
            )
            return None

    async def traverse(self, ctx: EndpointContext) -> TraversalResult | None:
        """GET *ctx* and classify the body by content type."""
        resp = await self._get(ctx)
        if resp is None:
            return None
        return classify_response(resp)

    async def _get(self, ctx: EndpointContext) -> httpx.Response | None:
        headers = {"User-Agent": self._user_agent, **ctx.headers}
        logger.debug("GET %s %s", ctx.request, dict(ctx.params))
        try:
            resp = await self._client.get(ctx.request, headers=headers, params=dict(ctx.params))
        except httpx.HTTPError as exc:
            logger.warning("Network error fetching %s: %s", ctx.request, exc)
            return None

        if resp.is_success:
            return resp

        logger.warning("GET %s returned HTTP %d", ctx.request, resp.status_code)
        return None
