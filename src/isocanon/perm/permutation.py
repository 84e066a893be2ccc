from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from isocanon.utils.contracts import CHECK_CONTRACTS, check_permutation


@dataclass(frozen=True)
class Permutation:
    """
    A bijection of {0, ..., n-1}, stored as its image tuple.

    values[i] is the image of i. Permutations are immutable; every
    operation returns a new object. Bijectivity is a precondition and is
    only verified when ISOCANON_CHECK_CONTRACTS is set.
    """

    values: Tuple[int, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.values, tuple):
            object.__setattr__(self, "values", tuple(self.values))
        if CHECK_CONTRACTS:
            check_permutation(self.values)

    @classmethod
    def identity(cls, n: int) -> "Permutation":
        return cls(tuple(range(n)))

    @classmethod
    def partial(cls, values: Sequence[int]) -> "Permutation":
        """
        An injective prefix of some permutation, e.g. the images fixed so far
        by an ordered partition. Never contract-checked.
        """
        p = object.__new__(cls)
        object.__setattr__(p, "values", tuple(values))
        return p

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, i: int) -> int:
        return self.values[i]

    def __iter__(self) -> Iterator[int]:
        return iter(self.values)

    def get(self, i: int) -> int:
        """Image of i."""
        return self.values[i]

    def multiply(self, other: "Permutation") -> "Permutation":
        """
        Composition self o other: r[i] = self[other[i]].

        other is applied first.
        """
        v = self.values
        return Permutation(tuple(v[x] for x in other.values))

    def __mul__(self, other: "Permutation") -> "Permutation":
        return self.multiply(other)

    def invert(self) -> "Permutation":
        # memoized: sifting inverts the same representatives over and over
        cached = self.__dict__.get("_inverse")
        if cached is not None:
            return cached
        inv = [0] * len(self.values)
        for i, x in enumerate(self.values):
            inv[x] = i
        result = Permutation(tuple(inv))
        object.__setattr__(self, "_inverse", result)
        return result

    def first_index_of_difference(self, other: "Permutation") -> int:
        """Smallest r with self[r] != other[r], or n if the two agree everywhere."""
        n = len(self.values)
        r = 0
        while r < n and self.values[r] == other.values[r]:
            r += 1
        return r

    def is_identity(self) -> bool:
        return all(x == i for i, x in enumerate(self.values))

    def cycles(self) -> List[Tuple[int, ...]]:
        """Non-trivial cycles, each starting at its smallest element."""
        seen = set()
        out: List[Tuple[int, ...]] = []
        for i in range(len(self.values)):
            if i in seen or self.values[i] == i:
                continue
            cycle = [i]
            seen.add(i)
            j = self.values[i]
            while j != i:
                seen.add(j)
                cycle.append(j)
                j = self.values[j]
            out.append(tuple(cycle))
        return out

    def __str__(self) -> str:
        cyc = self.cycles()
        if not cyc:
            return "()"
        return "".join("(%s)" % " ".join(map(str, c)) for c in cyc)


def permutation_from_prefix(prefix: Sequence[int], n: int) -> Permutation:
    """
    Extend the injective *prefix* to a permutation of {0, ..., n-1}.

    Starts from the identity and swaps each prefix value into place, so
    positions past the prefix keep whatever the swaps leave there.
    """
    perm = list(range(n))
    inv = list(range(n))
    for j, x in enumerate(prefix):
        i = inv[x]
        h = perm[j]
        perm[j] = x
        perm[i] = h
        inv[h] = i
        inv[x] = j
    return Permutation(tuple(perm))
