"""GitHub REST API adapter: implements the ManagedGitRepo port for github.com."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from managed_git.domain.content import ContentEnhancer, ManagedGitContent
from managed_git.domain.entities import GitHubRepoIdentity, GitTag, GitTags
from managed_git.domain.exceptions import CapabilityNotImplementedError
from managed_git.domain.ports.managed_repo import ManagedGitRepoHandler
from managed_git.domain.ports.transport import EndpointContext, Transport
from managed_git.infrastructure.api_url import api_url

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_GITHUB_WEB = "https://github.com"


class GitHubRepoTag(BaseModel):
    """An entry of ``GET /repos/{owner}/{repo}/tags``."""

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str = Field(min_length=1)


github_repo_tags_guard: TypeAdapter[list[GitHubRepoTag]] = TypeAdapter(list[GitHubRepoTag])


class GitHub:
    """Hands out :class:`GitHubRepo` handles that share one transport."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def repo(self, identity: GitHubRepoIdentity) -> GitHubRepo:
        return GitHubRepo(identity, self._transport)

    async def repos(self, handler: ManagedGitRepoHandler[GitHubRepo]) -> None:
        raise CapabilityNotImplementedError("GitHub", "repos")


class GitHubRepo:
    """Concrete ``ManagedGitRepo`` backed by the GitHub v3 REST API.

    Requests are unauthenticated.
    """

    def __init__(self, identity: GitHubRepoIdentity, transport: Transport) -> None:
        self._identity = identity
        self._transport = transport

    @property
    def identity(self) -> GitHubRepoIdentity:
        return self._identity

    def url(self) -> str:
        return f"{_GITHUB_WEB}/{self._identity.org}/{self._identity.repo}"

    def api_url(self, path: str) -> str:
        return api_url(
            _GITHUB_API,
            f"repos/:org/:repo/{path}",
            {"org": self._identity.org, "repo": self._identity.repo},
        )

    async def repo_tags(self) -> GitTags | None:
        """GET /repos/{org}/{repo}/tags → GitTags, in GitHub's order."""
        ctx = EndpointContext(
            request=self.api_url("tags"),
            headers={"Accept": "application/vnd.github.v3+json"},
        )
        gh_tags = await self._transport.fetch_json(ctx, github_repo_tags_guard)
        if gh_tags is None:
            logger.debug("No tags available for %s", self._identity.full_name)
            return None
        return GitTags.from_names(tag.name for tag in gh_tags)

    async def repo_latest_tag(self) -> GitTag | None:
        tags = await self.repo_tags()
        return tags.latest if tags else None

    async def content(
        self,
        path: str,
        *,
        branch_or_tag: str | None = None,
        enrich_content: ContentEnhancer | None = None,
    ) -> ManagedGitContent | None:
        raise CapabilityNotImplementedError("GitHub", "content")
