"""Application configuration and the environment-backed credential vault."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from managed_git.domain.exceptions import ServerConfigUnavailableError

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_prefix="MANAGED_GIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    http_timeout: float = 30.0
    default_ref: str = "master"
    user_agent: str = "managed-git/1.0"
    host: str = "0.0.0.0"
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()


# ── Credentials ─────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class GitLabServerAuthn:
    user_name: str
    access_token: SecretStr


@dataclass(frozen=True, slots=True)
class GitLabServer:
    """A GitLab host plus the credentials used to call its API."""

    host: str
    authn: GitLabServerAuthn


class EnvironmentVault:
    """Resolves per-host credentials from ``<HOSTID>_HOST/_USER/_TOKEN`` entries.

    *environ* defaults to ``os.environ``; any mapping works, which keeps tests
    free of process-wide state.  Tokens are wrapped in :class:`SecretStr` as
    soon as they are read.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ if environ is not None else os.environ

    def host_name(self, host_id: str, default_host: str | None = None) -> str | None:
        return self._environ.get(f"{host_id}_HOST", default_host) or None

    def user_name(self, host_id: str, default_user: str | None = None) -> str | None:
        return self._environ.get(f"{host_id}_USER", default_user) or None

    def access_token(self, host_id: str, default_token: str | None = None) -> SecretStr | None:
        token = self._environ.get(f"{host_id}_TOKEN", default_token)
        return SecretStr(token) if token else None

    def is_server_config_available(self, host_id: str, default_host: str | None = None) -> bool:
        return self.server(host_id, default_host) is not None

    def server(self, host_id: str, default_host: str | None = None) -> GitLabServer | None:
        """Return the server for *host_id*, or ``None`` if any of the triple is missing."""
        host = self.host_name(host_id, default_host)
        user = self.user_name(host_id)
        token = self.access_token(host_id)
        if host and user and token:
            return GitLabServer(host=host, authn=GitLabServerAuthn(user_name=user, access_token=token))
        logger.debug("Incomplete server configuration for %s", host_id)
        return None

    def require_server(self, host_id: str, default_host: str | None = None) -> GitLabServer:
        server = self.server(host_id, default_host)
        if server is None:
            raise ServerConfigUnavailableError(host_id)
        return server
