"""
isocanon: graph isomorphism by canonical labelling (individualization-refinement
search pruned by a stabilizer-chain automorphism group).
"""

from .perm.permutation import Permutation
from .perm.group import PermutationGroup
from .partition.partition import Partition
from .partition.seed import degree_partition, equitable_partition, partition_from_colors
from .graph.adjacency import GraphCapability, AdjacencyGraph
from .canon.search import Comparison, CanonicalFormSearch
from .canon.isomorphism import (
    split_by_loops,
    labelled_matrix,
    run_canon,
    canonical_labeling,
    canonical_certificate,
    are_isomorphic,
)

# IO
from .io.graph6 import g6_to_nx, g6_to_graph, graph_to_g6

__all__ = [
    # Core
    "Permutation",
    "PermutationGroup",
    "Partition",
    "Comparison",
    "CanonicalFormSearch",
    # Graphs
    "GraphCapability",
    "AdjacencyGraph",
    # Seeding
    "degree_partition",
    "equitable_partition",
    "partition_from_colors",
    # Isomorphism
    "split_by_loops",
    "labelled_matrix",
    "run_canon",
    "canonical_labeling",
    "canonical_certificate",
    "are_isomorphic",
    # IO
    "g6_to_nx",
    "g6_to_graph",
    "graph_to_g6",
]
