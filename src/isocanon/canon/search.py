"""
Canonical labelling by individualization-refinement with automorphism pruning.

This is the backtracking canonical form algorithm of McKay as presented in
Kreher & Stinson, *Combinatorial Algorithms* (ch. 7): refine an ordered
partition to an equitable one, individualize each vertex of the first
non-singleton cell in turn, and recurse. Every discrete partition reached is
a labelling of the graph; the search keeps the one whose adjacency matrix is
lexicographically smallest (see compare_rowwise) and records the
automorphisms it meets along the way so that equivalent branches are skipped.
"""
from __future__ import annotations

import logging
from collections import deque
from enum import Enum
from typing import Deque, Dict, List, Optional, Set

from isocanon.graph.adjacency import GraphCapability
from isocanon.partition.partition import Partition
from isocanon.perm.group import PermutationGroup
from isocanon.perm.permutation import Permutation, permutation_from_prefix
from isocanon.utils.contracts import CHECK_CONTRACTS, check_cover

logger = logging.getLogger(__name__)


class Comparison(Enum):
    """Outcome of comparing a candidate labelling with the current best."""

    WORSE = -1
    EQUAL = 0
    BETTER = 1


class CanonicalFormSearch:
    """
    Search state for one graph.

    Typical use::

        search = CanonicalFormSearch(graph)
        search.setup()
        search.canon(Partition.unit(graph.vertex_count()))
        cert = search.get_certificate()

    The object is reusable (call setup() again) but not thread-safe.
    """

    def __init__(self, graph: GraphCapability, group: Optional[PermutationGroup] = None) -> None:
        self.graph = graph
        self._blocks_to_refine: Deque[Set[int]] = deque()
        self._current_block_index = 0
        self._best: Optional[Permutation] = None
        self._first: Optional[Permutation] = None
        self._group: PermutationGroup
        self.nodes_visited = 0
        self.setup(group)

    def setup(self, group: Optional[PermutationGroup] = None) -> None:
        """Forget any previous run and install *group* (a trivial group if None)."""
        n = self.graph.vertex_count()
        if group is None:
            group = PermutationGroup(n)
        elif group.size != n:
            raise ValueError(f"group acts on {group.size} points but the graph has {n} vertices")
        self._group = group
        self._best = None
        self._first = None
        self._blocks_to_refine = deque()
        self._current_block_index = 0
        self.nodes_visited = 0

    # ------------------------------------------------------------------
    # Refinement
    # ------------------------------------------------------------------

    def refine(self, partition: Partition) -> Partition:
        """
        Refine *partition* to an equitable partition; the argument is not modified.

        Every cell is queued as a target. For each target T, the non-singleton
        cells are scanned left to right and split by the number of edges each
        vertex sends into T; the pieces replace the cell in ascending order of
        that count and are queued as targets themselves.
        """
        b = partition.copy()
        n = self.graph.vertex_count()

        self._blocks_to_refine = deque(b.copy_block(i) for i in range(len(b)))
        while self._blocks_to_refine:
            t = self._blocks_to_refine.popleft()
            self._current_block_index = 0
            while self._current_block_index < len(b) and len(b) < n:
                if not b.is_discrete_cell(self._current_block_index):
                    invariants = self._invariants(b, t)
                    self._split(invariants, b)
                self._current_block_index += 1

            if len(b) == n:
                return b
        return b

    def _invariants(self, partition: Partition, target: Set[int]) -> Dict[int, List[int]]:
        """Group the current cell's vertices by their edge count into *target*."""
        groups: Dict[int, List[int]] = {}
        for u in partition.get_cell(self._current_block_index):
            h = self.graph.neighbours_in_block(target, u)
            groups.setdefault(h, []).append(u)
        return groups

    def _split(self, invariants: Dict[int, List[int]], partition: Partition) -> None:
        if len(invariants) < 2:
            return
        partition.remove_cell(self._current_block_index)
        k = self._current_block_index
        for h in sorted(invariants):
            cell = invariants[h]
            partition.insert_cell(k, cell)
            self._blocks_to_refine.append(set(cell))
            k += 1
        # skip over the cells just inserted
        self._current_block_index += len(invariants) - 1

    # ------------------------------------------------------------------
    # Certificates and comparison
    # ------------------------------------------------------------------

    def certificate(self, perm: Permutation) -> int:
        """
        Upper triangle of the adjacency matrix under *perm*, as an integer.

        Pairs are visited for j = n-1 .. 1 and i = j-1 .. 0; the k-th pair
        visited sets bit k when perm[i] and perm[j] are adjacent.
        """
        conn = self.graph.connectivity
        n = self.graph.vertex_count()
        cert = 0
        k = 0
        for j in range(n - 1, 0, -1):
            pj = perm[j]
            for i in range(j - 1, -1, -1):
                if conn(perm[i], pj) > 0:
                    cert |= 1 << k
                k += 1
        return cert

    def compare_rowwise(self, candidate: Permutation) -> Comparison:
        """
        Compare the graph as labelled by *candidate* with the current best,
        over the first len(candidate) positions.

        Entries are read row by row below the diagonal, (j, i) for
        j = 1 .. m-1 and i = 0 .. j-1, so comparing a prefix agrees with
        comparing any completion of it. The first differing entry decides:
        BETTER if the candidate's entry is smaller, WORSE if it is larger.
        """
        best = self._best
        if best is None:
            raise RuntimeError("no best labelling to compare against; run canon() first")
        conn = self.graph.connectivity
        m = len(candidate)
        for j in range(1, m):
            bj = best[j]
            cj = candidate[j]
            for i in range(j):
                x = conn(best[i], bj)
                y = conn(candidate[i], cj)
                if x > y:
                    return Comparison.BETTER
                if x < y:
                    return Comparison.WORSE
        return Comparison.EQUAL

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def canon(self, partition: Optional[Partition] = None) -> None:
        """
        Run the search from *partition* (the unit partition by default).

        Afterwards get_best(), get_first(), get_certificate() and
        get_automorphism_group() describe the result.
        """
        n = self.graph.vertex_count()
        if partition is None:
            partition = Partition.unit(n)
        elif CHECK_CONTRACTS:
            check_cover(partition.cells, n)
        self._canon(self._group, partition)
        logger.debug(
            "canon finished: n=%d nodes=%d |aut|=%d best=%s",
            n,
            self.nodes_visited,
            self._group.order(),
            self._best,
        )

    def _canon(self, group: PermutationGroup, coarser: Partition) -> None:
        n = self.graph.vertex_count()
        self.nodes_visited += 1

        finer = self.refine(coarser)

        target = finer.index_of_first_non_discrete_cell()
        if target == -1:
            target = n

        pi1: Optional[Permutation] = None
        result = Comparison.BETTER
        if self._best is not None:
            pi1 = finer.set_as_permutation(target)
            result = self.compare_rowwise(pi1)

        if len(finer) == n:
            if self._best is None or pi1 is None:
                # first leaf of the run
                self._best = finer.to_permutation()
                self._first = self._best
                logger.debug("first leaf %s", self._best)
            elif result is Comparison.BETTER:
                self._best = Permutation(pi1.values)
                logger.debug("new best leaf %s", self._best)
            elif result is Comparison.EQUAL:
                automorphism = Permutation(pi1.values).multiply(self._best.invert())
                if group.enter(automorphism):
                    logger.debug("automorphism %s", automorphism)
            return

        if result is Comparison.WORSE:
            return

        block = finer.copy_block(target)
        for v in finer.get_cell(target):
            if v not in block:
                continue
            next_partition = finer.split_before(target, v)
            self._canon(group, next_partition)

            prefix = [next_partition.first_in_cell(j) for j in range(target + 1)]
            group.change_base(permutation_from_prefix(prefix, n))
            for g in group.table[target]:
                if g is not None:
                    block.discard(g[v])

    def is_canonical(self, partition: Optional[Partition] = None) -> bool:
        """
        True iff following the first vertex of the first non-singleton cell
        at every level ends at the identity labelling.

        Cheaper than canon(): no branching and no group is built.
        """
        p = Partition.unit(self.graph.vertex_count()) if partition is None else partition
        while True:
            p = self.refine(p)
            if p.is_discrete():
                return p.to_permutation().is_identity()
            cell = p.index_of_first_non_discrete_cell()
            p = p.split_before(cell, p.first_in_cell(cell))

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def _require_run(self) -> Permutation:
        if self._best is None:
            raise RuntimeError("canon() has not been run since setup()")
        return self._best

    def get_certificate(self) -> int:
        return self.certificate(self._require_run())

    def get_best(self) -> Permutation:
        """Labelling giving the smallest adjacency matrix found."""
        return self._require_run()

    def get_first(self) -> Permutation:
        """First discrete partition reached, as a permutation."""
        if self._first is None:
            raise RuntimeError("canon() has not been run since setup()")
        return self._first

    def get_automorphism_group(self) -> PermutationGroup:
        return self._group
