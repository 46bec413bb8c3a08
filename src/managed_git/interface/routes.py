"""API routes: thin controllers that delegate to the provider adapters."""

from __future__ import annotations

import json
from collections.abc import Callable

from fastapi import APIRouter, Depends, Query

from managed_git.domain.content import (
    ManagedGitContent,
    ManagedGitJsonFile,
    ManagedGitTextFile,
)
from managed_git.domain.entities import GitHubRepoIdentity, GitLabRepoIdentity
from managed_git.domain.exceptions import ContentDecodeError, ContentNotFoundError
from managed_git.domain.structure import GitManagerStructComponent
from managed_git.infrastructure.github_adapter import GitHub
from managed_git.infrastructure.gitlab_adapter import GitLab
from managed_git.interface.dependencies import get_github, get_gitlab_factory
from managed_git.interface.schemas import (
    ContentResponse,
    ErrorResponse,
    GroupNode,
    LatestTagResponse,
    StructureResponse,
    TagsResponse,
)

router = APIRouter()

_NOT_FOUND = {
    404: {"model": ErrorResponse, "description": "Nothing could be fetched from the provider"}
}


def _group_node(node: GitManagerStructComponent) -> GroupNode:
    return GroupNode(
        name=node.name,
        level=node.level,
        is_top_level=node.is_top_level,
        has_children=node.has_children,
        components=[_group_node(child) for child in node.components],
    )


def _content_response(content: ManagedGitContent) -> ContentResponse:
    match content:
        case ManagedGitJsonFile():
            try:
                value = content.content()
            except json.JSONDecodeError as exc:
                raise ContentDecodeError(f"{content.path} is not valid JSON: {exc}") from exc
            return ContentResponse(path=content.path, kind="json", content=value)
        case ManagedGitTextFile():
            return ContentResponse(path=content.path, kind="text", content=content.content())


# ── GitHub ──────────────────────────────────────────────────────────────────


@router.get("/github/{org}/{repo}/tags", response_model=TagsResponse, responses=_NOT_FOUND)
async def github_tags(org: str, repo: str, github: GitHub = Depends(get_github)) -> TagsResponse:
    """List a GitHub repository's tags."""
    tags = await github.repo(GitHubRepoIdentity(org=org, repo=repo)).repo_tags()
    if tags is None:
        raise ContentNotFoundError(f"No tags for {org}/{repo}.")
    return TagsResponse(tags=[tag.identity for tag in tags])


@router.get(
    "/github/{org}/{repo}/tags/latest", response_model=LatestTagResponse, responses=_NOT_FOUND
)
async def github_latest_tag(
    org: str, repo: str, github: GitHub = Depends(get_github)
) -> LatestTagResponse:
    tag = await github.repo(GitHubRepoIdentity(org=org, repo=repo)).repo_latest_tag()
    if tag is None:
        raise ContentNotFoundError(f"No tags for {org}/{repo}.")
    return LatestTagResponse(tag=tag.identity)


# ── GitLab ──────────────────────────────────────────────────────────────────


@router.get(
    "/gitlab/{host_id}/groups",
    response_model=StructureResponse,
    responses={404: {"model": ErrorResponse, "description": "Unknown GitLab host id"}},
)
async def gitlab_groups(
    host_id: str, gitlab_for: Callable[[str], GitLab] = Depends(get_gitlab_factory)
) -> StructureResponse:
    """Top-level groups of the GitLab server configured under *host_id*."""
    structure = await gitlab_for(host_id).structure()
    return StructureResponse(
        state=structure.state.value,
        components=[_group_node(node) for node in structure.components],
    )


@router.get("/gitlab/{host_id}/tags", response_model=TagsResponse, responses=_NOT_FOUND)
async def gitlab_tags(
    host_id: str,
    group: str = Query(..., min_length=1),
    repo: str = Query(..., min_length=1),
    gitlab_for: Callable[[str], GitLab] = Depends(get_gitlab_factory),
) -> TagsResponse:
    tags = await gitlab_for(host_id).repo(GitLabRepoIdentity(group=group, repo=repo)).repo_tags()
    if tags is None:
        raise ContentNotFoundError(f"No tags for {group}/{repo}.")
    return TagsResponse(tags=[tag.identity for tag in tags])


@router.get(
    "/gitlab/{host_id}/tags/latest", response_model=LatestTagResponse, responses=_NOT_FOUND
)
async def gitlab_latest_tag(
    host_id: str,
    group: str = Query(..., min_length=1),
    repo: str = Query(..., min_length=1),
    gitlab_for: Callable[[str], GitLab] = Depends(get_gitlab_factory),
) -> LatestTagResponse:
    identity = GitLabRepoIdentity(group=group, repo=repo)
    tag = await gitlab_for(host_id).repo(identity).repo_latest_tag()
    if tag is None:
        raise ContentNotFoundError(f"No tags for {group}/{repo}.")
    return LatestTagResponse(tag=tag.identity)


@router.get(
    "/gitlab/{host_id}/content",
    response_model=ContentResponse,
    responses={
        **_NOT_FOUND,
        422: {"model": ErrorResponse, "description": "A .json file that does not parse"},
    },
)
async def gitlab_content(
    host_id: str,
    group: str = Query(..., min_length=1),
    repo: str = Query(..., min_length=1),
    path: str = Query(..., min_length=1),
    ref: str | None = Query(None),
    gitlab_for: Callable[[str], GitLab] = Depends(get_gitlab_factory),
) -> ContentResponse:
    """Fetch one file and return it classified as text or JSON."""
    identity = GitLabRepoIdentity(group=group, repo=repo)
    content = await gitlab_for(host_id).repo(identity).content(path, branch_or_tag=ref)
    if content is None:
        raise ContentNotFoundError(f"No content for {path} in {group}/{repo}.")
    return _content_response(content)
