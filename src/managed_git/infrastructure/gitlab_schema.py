"""Shapes of the GitLab v4 REST responses this package consumes.

Only ``name`` is validated; everything else GitLab sends is kept untyped as
extra data on the model.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class GitLabGroup(BaseModel):
    """An entry of ``GET /groups``."""

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str = Field(min_length=1)


class GitLabRepoTag(BaseModel):
    """An entry of ``GET /projects/:id/repository/tags``."""

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str = Field(min_length=1)


GitLabGroups = list[GitLabGroup]
GitLabRepoTags = list[GitLabRepoTag]

gitlab_groups_guard: TypeAdapter[GitLabGroups] = TypeAdapter(GitLabGroups)
gitlab_repo_tags_guard: TypeAdapter[GitLabRepoTags] = TypeAdapter(GitLabRepoTags)
