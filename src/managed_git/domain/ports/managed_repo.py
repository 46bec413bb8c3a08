"""Port: managed git repositories and their managers.

Adapters satisfy these contracts structurally; none of them inherits from a
protocol here.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeVar, runtime_checkable

from managed_git.domain.content import ContentEnhancer, ManagedGitContent
from managed_git.domain.entities import GitTag, GitTags
from managed_git.domain.structure import GitManagerStructure

R = TypeVar("R", bound="ManagedGitRepo")

ManagedGitRepoHandler = Callable[[R], Awaitable[None]]


@runtime_checkable
class ManagedGitRepo(Protocol):
    """A repository hosted by a git manager such as GitHub or GitLab."""

    @property
    def identity(self) -> Any:
        """Provider-specific identity (org + repo, group + repo, ...)."""
        ...

    def url(self) -> str:
        """Return the repository's browser URL; pure, no I/O."""
        ...

    async def repo_tags(self) -> GitTags | None:
        """Return the tags in provider order, or ``None`` when nothing could be fetched."""
        ...

    async def repo_latest_tag(self) -> GitTag | None:
        """Return the first tag reported by the provider, or ``None``."""
        ...

    async def content(
        self,
        path: str,
        *,
        branch_or_tag: str | None = None,
        enrich_content: ContentEnhancer | None = None,
    ) -> ManagedGitContent | None:
        """Fetch and classify the file at *path*."""
        ...


@runtime_checkable
class GitRepoManager(Protocol):
    """Anything that can hand out repository handles."""

    def repo(self, identity: Any) -> ManagedGitRepo:
        ...


@runtime_checkable
class GitManager(GitRepoManager, Protocol):
    """A git manager whose organisational structure can be discovered."""

    async def structure(self) -> GitManagerStructure:
        ...

    async def repos(self, handler: ManagedGitRepoHandler[Any]) -> None:
        ...
