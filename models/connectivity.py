"""
Connectivity queries over a molecule's bond graph.

Atoms and bonds live in id-keyed maps; traversal works on an adjacency
map built from the bonds and never recurses.
"""

from collections import deque
from typing import Iterable, Mapping

from .bond import Bond
from .identifiers import AtomId, BondId


def build_adjacency(bonds: Mapping[BondId, Bond]) -> dict[AtomId, set[AtomId]]:
    """Map each bonded atom to the atoms it shares a bond with."""
    adjacency: dict[AtomId, set[AtomId]] = {}
    for bond in bonds.values():
        adjacency.setdefault(bond.start, set()).add(bond.end)
        adjacency.setdefault(bond.end, set()).add(bond.start)
    return adjacency


def connected_component(adjacency: Mapping[AtomId, set[AtomId]], start: AtomId) -> list[AtomId]:
    """Atoms reachable from `start`, in breadth-first discovery order."""
    component = [start]
    visited = {start}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        for neighbor in adjacency.get(current, ()):
            if neighbor not in visited:
                visited.add(neighbor)
                component.append(neighbor)
                queue.append(neighbor)

    return component


def unique_fragments(adjacency: Mapping[AtomId, set[AtomId]],
                     seeds: Iterable[AtomId]) -> list[list[AtomId]]:
    """
    Distinct connected components reached from the seed atoms.

    Seeds in the same component yield it once, in the order the first of
    them was seen.
    """
    fragments = []
    seen: set[AtomId] = set()

    for seed in seeds:
        if seed in seen:
            continue
        component = connected_component(adjacency, seed)
        seen.update(component)
        fragments.append(component)

    return fragments
