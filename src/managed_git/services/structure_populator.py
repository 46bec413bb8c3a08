"""Hierarchical structure population.

A populator is an async strategy ``(structure) -> structure`` that discovers
part of a git manager's hierarchy.  Populators are applied in order through
:func:`run_populators`; each run works on a structure built for that run.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from managed_git.domain.structure import GitManagerStructure, PopulationState

StructurePopulator = Callable[[GitManagerStructure], Awaitable[GitManagerStructure]]


async def run_populators(
    structure: GitManagerStructure, *populators: StructurePopulator
) -> GitManagerStructure:
    """Drive *structure* through *populators* and mark it populated.

    There is no failure state: a populator that could not fetch anything
    simply contributes no components.
    """
    structure.state = PopulationState.POPULATING
    for populate in populators:
        structure = await populate(structure)
    structure.state = PopulationState.POPULATED
    return structure
