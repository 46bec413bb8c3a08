"""FastAPI dependency injection wiring."""

from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache

import httpx
from fastapi import Depends

from managed_git.domain.ports.transport import Transport
from managed_git.infrastructure.config import EnvironmentVault, Settings, get_settings
from managed_git.infrastructure.github_adapter import GitHub
from managed_git.infrastructure.gitlab_adapter import GitLab
from managed_git.infrastructure.http_transport import HttpxTransport

_http_client: httpx.AsyncClient | None = None


async def startup() -> None:
    """Initialise shared resources; called from the lifespan context manager."""
    global _http_client  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout))


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None


@lru_cache(maxsize=1)
def _settings() -> Settings:
    return get_settings()


def get_vault() -> EnvironmentVault:
    return EnvironmentVault()


def get_transport() -> Transport:
    assert _http_client is not None, "startup() was not called"
    return HttpxTransport(_http_client, user_agent=_settings().user_agent)


def get_github(transport: Transport = Depends(get_transport)) -> GitHub:
    return GitHub(transport)


def get_gitlab_factory(
    vault: EnvironmentVault = Depends(get_vault),
    transport: Transport = Depends(get_transport),
) -> Callable[[str], GitLab]:
    """Return a callable that builds a :class:`GitLab` manager for a host id."""
    default_ref = _settings().default_ref

    def _factory(host_id: str) -> GitLab:
        return GitLab(vault.require_server(host_id), transport, default_ref=default_ref)

    return _factory
