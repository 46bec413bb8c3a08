"""Shared fixtures: a recording fake HTTP server behind httpx.MockTransport."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest
from pydantic import SecretStr

from managed_git.infrastructure.config import GitLabServer, GitLabServerAuthn
from managed_git.infrastructure.http_transport import HttpxTransport

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingServer:
    """Routes requests to a handler and remembers every request it saw."""

    def __init__(self, handler: Handler) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def transport(self) -> HttpxTransport:
        client = httpx.AsyncClient(transport=httpx.MockTransport(self))
        return HttpxTransport(client)


@pytest.fixture
def serve() -> Callable[[Handler], RecordingServer]:
    """Build a :class:`RecordingServer` around a handler."""
    return RecordingServer


@pytest.fixture
def gitlab_server() -> GitLabServer:
    return GitLabServer(
        host="gitlab.example.com",
        authn=GitLabServerAuthn(user_name="bot", access_token=SecretStr("glpat-secret")),
    )
