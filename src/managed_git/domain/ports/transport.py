"""Port: HTTP transport, defined by the domain and implemented by infrastructure."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol, TypeVar

from pydantic import TypeAdapter

from managed_git.domain.traversal import TraversalResult

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class EndpointContext:
    """A single GET: the URL, the headers it must carry and its query parameters."""

    request: str
    headers: Mapping[str, str] = field(default_factory=dict)
    params: Mapping[str, str] = field(default_factory=dict)

    def __repr__(self) -> str:
        # header values may carry credentials
        return (
            f"EndpointContext(request={self.request!r}, "
            f"headers=[{', '.join(self.headers)}], params={dict(self.params)!r})"
        )


class Transport(Protocol):
    """Abstract contract for issuing one GET and reporting the outcome."""

    async def fetch_json(self, ctx: EndpointContext, guard: TypeAdapter[T]) -> T | None:
        """Return the decoded body if it validates against *guard*, else ``None``."""
        ...

    async def traverse(self, ctx: EndpointContext) -> TraversalResult | None:
        """Return the classified body of a successful response, else ``None``."""
        ...
