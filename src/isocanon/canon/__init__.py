from .search import Comparison, CanonicalFormSearch
from .isomorphism import (
    split_by_loops,
    labelled_matrix,
    run_canon,
    canonical_labeling,
    canonical_certificate,
    are_isomorphic,
)

__all__ = [
    "Comparison",
    "CanonicalFormSearch",
    "split_by_loops",
    "labelled_matrix",
    "run_canon",
    "canonical_labeling",
    "canonical_certificate",
    "are_isomorphic",
]
