"""Permutation group stored as a stabilizer chain (Kreher & Stinson, ch. 6)."""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple, Union

from isocanon.perm.permutation import Permutation

logger = logging.getLogger(__name__)


class PermutationGroup:
    """
    A group of permutations of {0, ..., n-1} held as a base and a table of
    coset representatives.

    For base b = (b_0, ..., b_{n-1}), table[i][x] is either None or a
    permutation that fixes b_0 .. b_{i-1} and sends b_i to x. table[i][b_i]
    is always the identity. The non-empty entries of row i form a transversal
    of G_{b_0..b_i} in G_{b_0..b_{i-1}}, so the group order is the product of
    the row sizes.
    """

    def __init__(self, base: Union[Permutation, int]) -> None:
        if isinstance(base, int):
            base = Permutation.identity(base)
        self.n = len(base)
        self.base = base
        identity = Permutation.identity(self.n)
        self.table: List[List[Optional[Permutation]]] = [
            [None] * self.n for _ in range(self.n)
        ]
        for i in range(self.n):
            self.table[i][base[i]] = identity

    @property
    def size(self) -> int:
        """Degree of the group (number of points permuted)."""
        return self.n

    def get(self, i: int, j: int) -> Optional[Permutation]:
        """Representative at level i sending b_i to j, if one is stored."""
        return self.table[i][j]

    def representatives(self, level: int) -> List[Permutation]:
        return [g for g in self.table[level] if g is not None]

    def sift(self, g: Permutation) -> Tuple[int, Permutation]:
        """
        Strip g through the chain.

        Returns (level, residual). level == n means g is already a member and
        residual is the identity. Otherwise residual fixes b_0 .. b_{level-1}
        and there is no representative at *level* sending b_level to
        residual(b_level). g itself is left untouched.
        """
        residual = g
        for i in range(self.n):
            x = residual[self.base[i]]
            h = self.table[i][x]
            if h is None:
                return i, residual
            residual = h.invert().multiply(residual)
        return self.n, residual

    def contains(self, g: Permutation) -> bool:
        return self.sift(g)[0] == self.n

    __contains__ = contains

    def enter(self, g: Permutation) -> bool:
        """
        Add g to the group, closing the table under Schreier generators.

        The table is complete once s * u sifts through for every
        representative u at level j and every s stored at a level >= j.
        A residual r newly stored at level i therefore brings two kinds of
        products to sift: r * u for u at levels 0..i (r as a generator) and
        s * r for s at levels i..n-1 (r as a coset representative).
        Products are sifted until nothing new is stored. Returns True iff
        the group grew.
        """
        grew = False
        pending = [g]
        while pending:
            level, residual = self.sift(pending.pop())
            if level == self.n:
                continue
            self.table[level][residual[self.base[level]]] = residual
            grew = True
            for j in range(level + 1):
                for h in self.table[j]:
                    if h is not None:
                        pending.append(residual.multiply(h))
            for j in range(level, self.n):
                for h in self.table[j]:
                    if h is not None:
                        pending.append(h.multiply(residual))
        return grew

    def change_base(self, new_base: Permutation) -> None:
        """
        Rebuild the chain on *new_base*.

        Levels below the first point where the bases differ keep their
        representatives (reindexed by image); the rest are re-entered.
        """
        r = self.base.first_index_of_difference(new_base)
        if r == self.n:
            return
        H = PermutationGroup(new_base)

        for j in range(r, self.n):
            for g in self.table[j]:
                if g is not None:
                    H.enter(g)

        for j in range(r):
            h = H.base[j]
            for g in self.table[j]:
                if g is not None:
                    H.table[j][g[h]] = g

        logger.debug("base changed at level %d: %s -> %s", r, list(self.base), list(new_base))
        self.base = H.base
        self.table = H.table

    def order(self) -> int:
        """Number of elements of the group."""
        result = 1
        for row in self.table:
            result *= sum(1 for g in row if g is not None)
        return result

    def __str__(self) -> str:
        lines = [f"Base = {list(self.base)}"]
        for i in range(self.n):
            row = " ".join(str(list(g)) if g is not None else "-" for g in self.table[i])
            lines.append(f"U{i} = {row}")
        return "\n".join(lines)
