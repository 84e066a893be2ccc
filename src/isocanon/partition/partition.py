from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set, Union

from isocanon.perm.permutation import Permutation
from isocanon.utils.contracts import CHECK_CONTRACTS, check_cover


def _flatten(elements: Sequence[Union[int, Iterable[int]]]) -> List[int]:
    """Accept add_cell(1, 2, 3) as well as add_cell([1, 2, 3])."""
    if len(elements) == 1 and not isinstance(elements[0], int):
        return list(elements[0])  # type: ignore[arg-type]
    return list(elements)  # type: ignore[arg-type]


class Partition:
    """
    An ordered partition of {0, ..., n-1} into cells.

    Each cell is kept as an ascending list. The order of the cells matters:
    a discrete partition (all cells singletons) reads as a permutation, and
    a partition whose first k cells are singletons fixes the first k images.

    The disjoint-cover invariant is the caller's responsibility. It is only
    checked on construction when ISOCANON_CHECK_CONTRACTS is set.
    """

    def __init__(self, cells: Optional[Iterable[Iterable[int]]] = None) -> None:
        self.cells: List[List[int]] = []
        if cells is not None:
            for cell in cells:
                self.cells.append(sorted(cell))
            if CHECK_CONTRACTS:
                check_cover(self.cells)

    @classmethod
    def unit(cls, size: int) -> "Partition":
        """The coarsest partition: one cell holding every element (no cells if size is 0)."""
        p = cls()
        if size > 0:
            p.cells.append(list(range(size)))
        return p

    def copy(self) -> "Partition":
        p = Partition()
        p.cells = [list(c) for c in self.cells]
        return p

    def __len__(self) -> int:
        return len(self.cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Partition):
            return NotImplemented
        return self.cells == other.cells

    def get_cell(self, cell_index: int) -> List[int]:
        return self.cells[cell_index]

    def copy_block(self, cell_index: int) -> Set[int]:
        return set(self.cells[cell_index])

    def first_in_cell(self, cell_index: int) -> int:
        return self.cells[cell_index][0]

    def add_cell(self, *elements: Union[int, Iterable[int]]) -> None:
        """Append a cell with the given elements (sorted on insertion)."""
        self.cells.append(sorted(_flatten(elements)))

    def remove_cell(self, index: int) -> None:
        del self.cells[index]

    def insert_cell(self, index: int, cell: Iterable[int]) -> None:
        self.cells.insert(index, sorted(cell))

    def is_discrete_cell(self, cell_index: int) -> bool:
        return len(self.cells[cell_index]) == 1

    def is_discrete(self) -> bool:
        return all(len(c) == 1 for c in self.cells)

    def index_of_first_non_discrete_cell(self) -> int:
        """Index of the first cell with more than one element, or -1."""
        for i, c in enumerate(self.cells):
            if len(c) != 1:
                return i
        return -1

    def _split(self, cell_index: int, elements: Sequence[int], before: bool) -> "Partition":
        block = self.cells[cell_index]
        split = sorted(set(elements))
        missing = [x for x in split if x not in block]
        if missing:
            raise ValueError(f"elements {missing} are not in cell {cell_index} {block}")
        rest = [x for x in block if x not in split]

        r = Partition()
        r.cells = [list(c) for c in self.cells[:cell_index]]
        if before:
            r.cells.append(split)
            r.cells.append(rest)
        else:
            r.cells.append(rest)
            r.cells.append(split)
        r.cells.extend(list(c) for c in self.cells[cell_index + 1 :])
        return r

    def split_before(self, cell_index: int, *elements: int) -> "Partition":
        """
        New partition with *elements* moved out of the cell at *cell_index*
        into their own cell, placed just before what remains of it.
        """
        return self._split(cell_index, elements, before=True)

    def split_after(self, cell_index: int, *elements: int) -> "Partition":
        """As split_before, but the new cell goes after the remainder."""
        return self._split(cell_index, elements, before=False)

    def set_as_permutation(self, up_to: int) -> Permutation:
        """
        The first element of each of the first *up_to* cells, as a (partial)
        permutation of length up_to.
        """
        return Permutation.partial([self.cells[i][0] for i in range(up_to)])

    def to_permutation(self) -> Permutation:
        if not self.is_discrete():
            raise ValueError(f"partition {self} is not discrete")
        return Permutation(tuple(c[0] for c in self.cells))

    def __str__(self) -> str:
        return "(" + "|".join("".join(str(x) for x in c) for c in self.cells) + ")"

    def __repr__(self) -> str:
        return f"Partition({self.cells!r})"
