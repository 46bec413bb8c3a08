"""Hierarchical structure of a git manager (GitLab groups, for example).

The structure owns every node through a node table keyed by id.  Nodes own
their children; the way back up is a ``parent_id`` that the structure
resolves, so no node ever holds a reference to its parent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PopulationState(str, Enum):
    """Lifecycle of a :class:`GitManagerStructure`."""

    UNPOPULATED = "unpopulated"
    POPULATING = "populating"
    POPULATED = "populated"


@dataclass(frozen=True, slots=True)
class GitLabGroupPopulateOptions:
    """What a group filter asked to populate for an accepted group.

    Descendant and label population are not executed yet; the options are kept
    on the node so a later pass can act on them.
    """

    populate_group: bool = True
    populate_labels: bool = False


@dataclass(slots=True)
class GitManagerStructComponent:
    """One organisational unit in the provider's hierarchy."""

    node_id: int
    name: str
    level: int = 0
    parent_id: int | None = None
    payload: Any = None
    populate_options: GitLabGroupPopulateOptions | None = None
    components: list[GitManagerStructComponent] = field(default_factory=list)

    @property
    def is_top_level(self) -> bool:
        return self.level == 0

    @property
    def has_children(self) -> bool:
        return len(self.components) > 0


class GitManagerStructure:
    """Root of a provider's hierarchy: top-level components plus the node table."""

    def __init__(self) -> None:
        self.state = PopulationState.UNPOPULATED
        self._components: list[GitManagerStructComponent] = []
        self._nodes: dict[int, GitManagerStructComponent] = {}

    @property
    def components(self) -> list[GitManagerStructComponent]:
        return self._components

    def add_component(
        self,
        name: str,
        *,
        parent: GitManagerStructComponent | None = None,
        payload: Any = None,
        populate_options: GitLabGroupPopulateOptions | None = None,
    ) -> GitManagerStructComponent:
        """Create a node, register it, and append it under *parent* (or the root)."""
        if parent is not None and self._nodes.get(parent.node_id) is not parent:
            raise ValueError(f"Parent '{parent.name}' does not belong to this structure.")

        node = GitManagerStructComponent(
            node_id=len(self._nodes),
            name=name,
            level=0 if parent is None else parent.level + 1,
            parent_id=None if parent is None else parent.node_id,
            payload=payload,
            populate_options=populate_options,
        )
        self._nodes[node.node_id] = node
        if parent is None:
            self._components.append(node)
        else:
            parent.components.append(node)
        return node

    def parent_of(self, node: GitManagerStructComponent) -> GitManagerStructComponent | None:
        """Resolve a node's parent through the node table."""
        if node.parent_id is None:
            return None
        return self.node(node.parent_id)

    def node(self, node_id: int) -> GitManagerStructComponent | None:
        return self._nodes.get(node_id)

    def walk(self) -> list[GitManagerStructComponent]:
        """All nodes, depth-first, in insertion order."""
        ordered: list[GitManagerStructComponent] = []
        stack = list(reversed(self._components))
        while stack:
            node = stack.pop()
            ordered.append(node)
            stack.extend(reversed(node.components))
        return ordered

    def pending_population(self) -> list[GitManagerStructComponent]:
        """Nodes whose filter asked for descendants that have not been populated."""
        return [
            node
            for node in self.walk()
            if node.populate_options is not None
            and node.populate_options.populate_group
            and not node.has_children
        ]
