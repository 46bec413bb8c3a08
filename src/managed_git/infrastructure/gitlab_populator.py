"""Populator that discovers the top-level groups of a GitLab server."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from managed_git.domain.structure import GitLabGroupPopulateOptions, GitManagerStructure
from managed_git.infrastructure.gitlab_schema import GitLabGroup, gitlab_groups_guard
from managed_git.services.structure_populator import StructurePopulator

if TYPE_CHECKING:
    from managed_git.infrastructure.gitlab_adapter import GitLab

logger = logging.getLogger(__name__)

GroupFilter = Callable[[GitLabGroup], GitLabGroupPopulateOptions | bool | None]
"""Decides whether a group is kept; a falsy result drops it."""


def gitlab_groups_populator(
    manager: GitLab, filter_groups: GroupFilter | None = None
) -> StructurePopulator:
    """Populator that adds the server's top-level groups as level-0 components.

    Only one level is populated.  Options returned by *filter_groups* are
    stored on each node; descendants they ask for are left for
    :meth:`GitManagerStructure.pending_population`.
    """

    async def _populate(structure: GitManagerStructure) -> GitManagerStructure:
        ctx = manager.api_client_context(
            manager.manager_api_url("groups"), {"top_level_only": "true"}
        )
        groups = await manager.transport.fetch_json(ctx, gitlab_groups_guard)
        if groups is None:
            logger.info("No top-level groups retrieved from %s", manager.server.host)
            return structure

        for group in groups:
            options: GitLabGroupPopulateOptions | None = None
            if filter_groups is not None:
                decision = filter_groups(group)
                if not decision:
                    continue
                if isinstance(decision, GitLabGroupPopulateOptions):
                    options = decision
            structure.add_component(group.name, payload=group, populate_options=options)

        deferred = structure.pending_population()
        if deferred:
            logger.debug(
                "%d group(s) on %s requested sub-group population, which is not performed",
                len(deferred),
                manager.server.host,
            )
        return structure

    return _populate
