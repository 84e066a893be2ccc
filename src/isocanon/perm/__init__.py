from .permutation import Permutation, permutation_from_prefix
from .group import PermutationGroup

__all__ = [
    "Permutation",
    "permutation_from_prefix",
    "PermutationGroup",
]
