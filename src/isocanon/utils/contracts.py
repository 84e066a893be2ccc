from __future__ import annotations

import os
from typing import Iterable, Sequence


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


# O(n) checks on every permutation and partition; off unless requested.
CHECK_CONTRACTS = _env_flag("ISOCANON_CHECK_CONTRACTS")


def check_permutation(values: Sequence[int]) -> None:
    """Raise ValueError if *values* is not a permutation of 0..n-1."""
    if sorted(values) != list(range(len(values))):
        raise ValueError(f"not a permutation: {list(values)!r}")


def check_cover(cells: Iterable[Sequence[int]], n: int | None = None) -> None:
    """Raise ValueError unless *cells* are disjoint, sorted and cover 0..n-1.

    If *n* is not given it is taken to be the total number of elements.
    """
    seen: set[int] = set()
    total = 0
    for cell in cells:
        if list(cell) != sorted(cell):
            raise ValueError(f"cell is not sorted: {list(cell)!r}")
        for x in cell:
            if x in seen:
                raise ValueError(f"element {x} appears in more than one cell")
            seen.add(x)
        total += len(cell)
    if n is None:
        n = total
    if seen != set(range(n)):
        raise ValueError(f"cells do not cover 0..{n - 1}")
