from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Tuple

from isocanon.canon.search import CanonicalFormSearch
from isocanon.graph.adjacency import GraphCapability
from isocanon.partition.partition import Partition
from isocanon.perm.permutation import Permutation

logger = logging.getLogger(__name__)

SeedFunction = Callable[[GraphCapability], Partition]


def split_by_loops(graph: GraphCapability, partition: Partition) -> Partition:
    """Split every cell by self-loop multiplicity, fewest loops first.

    The search never compares diagonal entries, so vertices with different
    loop counts must start in different cells. Loop-free graphs are returned
    unchanged.
    """
    out = Partition()
    for cell in partition.cells:
        groups: Dict[int, List[int]] = {}
        for v in cell:
            groups.setdefault(graph.connectivity(v, v), []).append(v)
        for loops in sorted(groups):
            out.add_cell(groups[loops])
    return out


def run_canon(
    graph: GraphCapability,
    seed: Optional[SeedFunction] = None,
) -> CanonicalFormSearch:
    """Run a fresh search on *graph* and return it for inspection.

    The search starts from seed(graph) if a seeding function is given,
    otherwise from the unit partition, split by self-loop count.
    """
    search = CanonicalFormSearch(graph)
    start = seed(graph) if seed is not None else Partition.unit(graph.vertex_count())
    search.canon(split_by_loops(graph, start))
    return search


def canonical_labeling(
    graph: GraphCapability,
    seed: Optional[SeedFunction] = None,
) -> Permutation:
    """Canonical labelling: position i of the canonical form holds vertex best[i]."""
    return run_canon(graph, seed).get_best()


def canonical_certificate(
    graph: GraphCapability,
    seed: Optional[SeedFunction] = None,
) -> int:
    """Adjacency certificate of *graph*.

    For simple graphs of the same order, certificates are equal iff the
    graphs are isomorphic. The certificate only records whether two vertices
    are adjacent, so multigraphs differing in edge multiplicities or loops
    can share one; use are_isomorphic for those.
    """
    return run_canon(graph, seed).get_certificate()


def labelled_matrix(graph: GraphCapability, perm: Permutation) -> Tuple[Tuple[int, ...], ...]:
    """Connectivity matrix of *graph* with row/column i holding vertex perm[i]."""
    n = graph.vertex_count()
    return tuple(
        tuple(graph.connectivity(perm[i], perm[j]) for j in range(n))
        for i in range(n)
    )


def are_isomorphic(
    a: GraphCapability,
    b: GraphCapability,
    seed: Optional[SeedFunction] = None,
) -> bool:
    """Decide whether *a* and *b* are isomorphic.

    Graphs of different order are rejected without searching. Otherwise
    both are canonically labelled; the certificates must match, and so must
    the full connectivity matrices (edge multiplicities and loops) under the
    canonical labellings. *seed*, if given, must be a labelling-invariant
    starting partition such as isocanon.partition.degree_partition.
    """
    if a.vertex_count() != b.vertex_count():
        return False
    search_a = run_canon(a, seed)
    search_b = run_canon(b, seed)
    cert_a = search_a.get_certificate()
    cert_b = search_b.get_certificate()
    logger.debug("certificates: %d %d", cert_a, cert_b)
    if cert_a != cert_b:
        return False
    return labelled_matrix(a, search_a.get_best()) == labelled_matrix(b, search_b.get_best())
