"""Domain entities: pure data structures with no I/O."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GitHubRepoIdentity:
    """A GitHub repository, addressed by organisation (or user) and name."""

    org: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.org}/{self.repo}"


@dataclass(frozen=True, slots=True)
class GitLabRepoIdentity:
    """A GitLab project.

    *group* is the full namespace path and may contain slashes for nested
    sub-groups, e.g. ``"platform/backend"``.
    """

    group: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.group}/{self.repo}"


@dataclass(frozen=True, slots=True)
class GitTag:
    """An immutable named pointer to a commit."""

    identity: str


@dataclass(frozen=True, slots=True)
class GitTags:
    """Tags in provider order; index 0 is the most recent by convention."""

    tags: tuple[GitTag, ...] = ()

    def __len__(self) -> int:
        return len(self.tags)

    def __iter__(self) -> Iterator[GitTag]:
        return iter(self.tags)

    def __getitem__(self, index: int) -> GitTag:
        return self.tags[index]

    @property
    def latest(self) -> GitTag | None:
        return self.tags[0] if self.tags else None

    @classmethod
    def from_names(cls, names: Iterable[str]) -> GitTags:
        return cls(tags=tuple(GitTag(identity=name) for name in names))
