"""Managed git content: the typed wrappers a provider returns for a file.

Content is a tagged union of :class:`ManagedGitTextFile` and
:class:`ManagedGitJsonFile`; absence is ``None``.  Callers can dispatch with
``match`` or, when they only care about one capability, with the boolean
markers through :func:`is_managed_git_file` and friends.  A JSON file is also
a file, so the markers are not mutually exclusive the way the classes are.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeGuard, TypeVar, Union

from managed_git.domain.traversal import (
    TraversalJsonContent,
    TraversalTextContent,
)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ManagedGitTextFile:
    """A plain-text file; :meth:`content` returns the body unmodified."""

    path: str
    traversal: TraversalTextContent

    is_managed_git_content = True
    is_managed_git_file = True
    is_managed_git_text_file = True
    is_managed_git_json_file = False

    def content(self) -> str:
        return self.traversal.body_text


@dataclass(frozen=True, slots=True)
class ManagedGitJsonFile(Generic[T]):
    """A JSON file.

    The value comes from *decode*, which is either a constant accessor over a
    body the transport already decoded, or a parser over raw text that only
    runs when :meth:`content` is called.
    """

    path: str
    traversal: TraversalJsonContent | TraversalTextContent
    decode: Callable[[], T]

    is_managed_git_content = True
    is_managed_git_file = True
    is_managed_git_text_file = False
    is_managed_git_json_file = True

    def content(self) -> T:
        return self.decode()


ManagedGitContent = Union[ManagedGitTextFile, ManagedGitJsonFile[Any]]


# ── Capability guards ───────────────────────────────────────────────────────


def is_managed_git_content(o: object) -> TypeGuard[ManagedGitContent]:
    return getattr(o, "is_managed_git_content", False) is True


def is_managed_git_file(o: object) -> TypeGuard[ManagedGitContent]:
    return is_managed_git_content(o) and getattr(o, "is_managed_git_file", False) is True


def is_managed_git_text_file(o: object) -> TypeGuard[ManagedGitTextFile]:
    return is_managed_git_content(o) and getattr(o, "is_managed_git_text_file", False) is True


def is_managed_git_json_file(o: object) -> TypeGuard[ManagedGitJsonFile[Any]]:
    return is_managed_git_content(o) and getattr(o, "is_managed_git_json_file", False) is True


# ── Request context ─────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ContentContext:
    """What the caller asked for: a path, an optional ref and an optional enhancer."""

    path: str
    branch_or_tag: str | None = None
    enrich_content: ContentEnhancer | None = None


ContentEnhancer = Callable[[ContentContext, ManagedGitContent], ManagedGitContent]
"""Pure transform applied to classified content; must return a new value."""
