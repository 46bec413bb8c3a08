"""GitLab v4 REST API adapter: the GitLab manager and its repositories."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from managed_git.domain.content import ContentContext, ContentEnhancer, ManagedGitContent
from managed_git.domain.entities import GitLabRepoIdentity, GitTag, GitTags
from managed_git.domain.exceptions import CapabilityNotImplementedError
from managed_git.domain.ports.managed_repo import ManagedGitRepoHandler
from managed_git.domain.ports.transport import EndpointContext, Transport
from managed_git.domain.structure import GitManagerStructComponent, GitManagerStructure
from managed_git.infrastructure.api_url import ParamValue, api_url
from managed_git.infrastructure.config import GitLabServer
from managed_git.infrastructure.gitlab_populator import GroupFilter, gitlab_groups_populator
from managed_git.infrastructure.gitlab_schema import gitlab_repo_tags_guard
from managed_git.services.content_resolver import (
    enrich_managed_git_content,
    prepare_managed_git_content,
)
from managed_git.services.structure_populator import StructurePopulator, run_populators

logger = logging.getLogger(__name__)

DEFAULT_REF = "master"


class GitLab:
    """A GitLab server reachable with the credentials in *server*.

    Parameters
    ----------
    server:
        Host plus user/token pair, usually from :class:`EnvironmentVault`.
    transport:
        Transport used for every request this manager and its repos issue.
    default_ref:
        Branch read by :meth:`GitLabRepo.content` when no ref is given.  The
        project's actual default branch is not looked up.
    """

    def __init__(
        self,
        server: GitLabServer,
        transport: Transport,
        default_ref: str = DEFAULT_REF,
    ) -> None:
        self.server = server
        self.transport = transport
        self.default_ref = default_ref

    def api_request_headers(self) -> dict[str, str]:
        return {"PRIVATE-TOKEN": self.server.authn.access_token.get_secret_value()}

    def api_client_context(
        self, request: str, params: Mapping[str, str] | None = None
    ) -> EndpointContext:
        return EndpointContext(
            request=request, headers=self.api_request_headers(), params=params or {}
        )

    def manager_api_url(
        self, path_template: str, segments: dict[str, ParamValue] | None = None
    ) -> str:
        return api_url(f"https://{self.server.host}/api/v4", path_template, segments)

    async def structure(
        self,
        *populators: StructurePopulator,
        filter_groups: GroupFilter | None = None,
    ) -> GitManagerStructure:
        """Discover the server's structure.

        Without explicit *populators* only the top-level groups are fetched,
        optionally narrowed by *filter_groups*.
        """
        pipeline = populators or (gitlab_groups_populator(self, filter_groups),)
        return await run_populators(GitManagerStructure(), *pipeline)

    async def populate_subgroups(
        self, structure: GitManagerStructure, node: GitManagerStructComponent
    ) -> GitManagerStructure:
        raise CapabilityNotImplementedError("GitLab", "populate_subgroups")

    def repo(self, identity: GitLabRepoIdentity) -> GitLabRepo:
        return GitLabRepo(self, identity)

    async def repos(self, handler: ManagedGitRepoHandler[GitLabRepo]) -> None:
        raise CapabilityNotImplementedError("GitLab", "repos")


class GitLabRepo:
    """Concrete ``ManagedGitRepo`` for a project on a :class:`GitLab` server."""

    def __init__(self, manager: GitLab, identity: GitLabRepoIdentity) -> None:
        self._manager = manager
        self._identity = identity

    @property
    def identity(self) -> GitLabRepoIdentity:
        return self._identity

    def url(self) -> str:
        return f"https://{self._manager.server.host}/{self._identity.group}/{self._identity.repo}"

    def group_repo_api_url(
        self, path_template: str, segments: dict[str, ParamValue] | None = None
    ) -> str:
        # GitLab wants group/sub-group/repo as a single URL-encoded segment
        return self._manager.manager_api_url(
            path_template,
            {**(segments or {}), "encodedGroupRepo": self._identity.full_name},
        )

    async def repo_tags(self) -> GitTags | None:
        """GET /projects/:id/repository/tags → GitTags, in GitLab's order."""
        ctx = self._manager.api_client_context(
            self.group_repo_api_url("projects/:encodedGroupRepo/repository/tags")
        )
        gl_tags = await self._manager.transport.fetch_json(ctx, gitlab_repo_tags_guard)
        if gl_tags is None:
            logger.debug("No tags available for %s", self._identity.full_name)
            return None
        return GitTags.from_names(tag.name for tag in gl_tags)

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
        """GET /projects/:id/repository/files/:path/raw and classify the body."""
        content_ctx = ContentContext(
            path=path, branch_or_tag=branch_or_tag, enrich_content=enrich_content
        )
        ctx = self._manager.api_client_context(
            self.group_repo_api_url(
                "projects/:encodedGroupRepo/repository/files/:filePath/raw",
                {"filePath": path},
            ),
            {"ref": branch_or_tag or self._manager.default_ref},
        )
        traversal = await self._manager.transport.traverse(ctx)
        content = prepare_managed_git_content(content_ctx, traversal)
        return enrich_managed_git_content(content_ctx, content)
