"""Low-level transport results, classified by content type.

A traversal result is what the transport hands back for a single GET.  It is a
closed union; HTML is a specialised kind of text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

import httpx


@dataclass(frozen=True, slots=True)
class TraversalJsonContent:
    """A response whose body was already decoded as JSON by the transport."""

    response: httpx.Response
    json_instance: Any

    @property
    def request_url(self) -> str:
        return str(self.response.request.url)


@dataclass(frozen=True, slots=True)
class TraversalTextContent:
    """A response whose body is text."""

    response: httpx.Response
    body_text: str

    @property
    def request_url(self) -> str:
        return str(self.response.request.url)


@dataclass(frozen=True, slots=True)
class TraversalHtmlContent(TraversalTextContent):
    """A ``text/html`` response."""


@dataclass(frozen=True, slots=True)
class TraversalBinaryContent:
    """Anything the transport could not classify as JSON or text."""

    response: httpx.Response
    body: bytes

    @property
    def request_url(self) -> str:
        return str(self.response.request.url)


TraversalResult = Union[
    TraversalJsonContent,
    TraversalTextContent,
    TraversalHtmlContent,
    TraversalBinaryContent,
]
