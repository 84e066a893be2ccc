from .contracts import (
    CHECK_CONTRACTS,
    check_permutation,
    check_cover,
)

__all__ = [
    "CHECK_CONTRACTS",
    "check_permutation",
    "check_cover",
]
