"""Starting partitions built from cheap vertex invariants."""
from __future__ import annotations

from typing import Dict, Hashable, List, Optional, Sequence

from isocanon.graph.adjacency import GraphCapability
from isocanon.partition.partition import Partition


def partition_from_colors(colors: Sequence[Hashable]) -> Partition:
    """
    Group vertices by color, one cell per color, cells in ascending color order.

    colors[v] is the color of vertex v; colors must be mutually comparable.
    """
    groups: Dict[Hashable, List[int]] = {}
    for v, c in enumerate(colors):
        groups.setdefault(c, []).append(v)
    return Partition(groups[c] for c in sorted(groups))  # type: ignore[type-var]


def degree_partition(graph: GraphCapability) -> Partition:
    """
    Cells of equal degree (edge multiplicity counted), lowest degree first.

    Relabelling the graph relabels this partition the same way, so it is a
    valid seed for canonical labelling.
    """
    n = graph.vertex_count()
    everything = set(range(n))
    return partition_from_colors([graph.neighbours_in_block(everything, v) for v in range(n)])


def equitable_partition(graph: GraphCapability, initial: Optional[Partition] = None) -> Partition:
    """
    Coarsest equitable refinement of *initial* (the degree partition by default).
    """
    from isocanon.canon.search import CanonicalFormSearch

    if initial is None:
        initial = degree_partition(graph)
    return CanonicalFormSearch(graph).refine(initial)
