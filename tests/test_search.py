"""Tests for refinement and the canonical form search."""
import pytest

from isocanon.canon.search import CanonicalFormSearch, Comparison
from isocanon.graph.adjacency import AdjacencyGraph
from isocanon.partition.partition import Partition
from isocanon.perm.group import PermutationGroup
from isocanon.perm.permutation import Permutation


def _graph76():
    """Example 7.6 of Kreher & Stinson."""
    return AdjacencyGraph.from_edges(
        [(0, 1), (0, 3), (0, 7), (1, 2), (1, 4), (2, 3),
         (2, 6), (3, 4), (4, 5), (5, 6), (5, 7), (6, 7)],
        8,
    )


def _graph76_relabelled():
    """Isomorphic to _graph76."""
    return AdjacencyGraph.from_edges(
        [(0, 5), (0, 1), (0, 6), (1, 6), (1, 2), (2, 3),
         (2, 4), (3, 5), (3, 7), (4, 5), (4, 7), (6, 7)],
        8,
    )


def _graph78():
    """Example 7.8 of Kreher & Stinson."""
    return AdjacencyGraph.from_edges(
        [(0, 6), (1, 4), (1, 5), (2, 3), (2, 5), (3, 4),
         (3, 5), (3, 6), (4, 5), (4, 6), (5, 6)],
        7,
    )


def _graph78_partition():
    p = Partition()
    p.add_cell(0)
    p.add_cell(1, 2)
    p.add_cell(3, 4, 6)
    p.add_cell(5)
    return p


def _is_automorphism(graph, g):
    n = graph.vertex_count()
    return all(
        graph.connectivity(i, j) == graph.connectivity(g[i], g[j])
        for i in range(n)
        for j in range(n)
    )


# --- refinement ---

def test_refine_graph76():
    search = CanonicalFormSearch(_graph76())
    p = Partition()
    p.add_cell(0)
    p.add_cell(1, 2, 3, 4, 5, 6, 7)
    assert str(search.refine(p)) == "(0|24|56|7|13)"


def test_refine_graph78_and_individualize():
    search = CanonicalFormSearch(_graph78())
    p = search.refine(_graph78_partition())
    assert str(p) == "(0|12|34|6|5)"

    b1 = search.refine(p.split_before(1, 1))
    assert str(b1) == "(0|1|2|3|4|6|5)"

    b2 = search.refine(p.split_before(1, 2))
    assert str(b2) == "(0|2|1|4|3|6|5)"


def test_refine_does_not_modify_input():
    search = CanonicalFormSearch(_graph76())
    p = Partition.unit(8).split_before(0, 0)
    search.refine(p)
    assert str(p) == "(0|1234567)"


def test_refine_unit_partition_by_degree():
    # star K_{1,3}: leaves have degree 1, centre degree 3
    g = AdjacencyGraph.from_edges([(0, 1), (0, 2), (0, 3)], 4)
    p = CanonicalFormSearch(g).refine(Partition.unit(4))
    assert str(p) == "(123|0)"


def test_refine_regular_graph_is_stable():
    cycle = AdjacencyGraph.from_edges([(i, (i + 1) % 6) for i in range(6)], 6)
    p = CanonicalFormSearch(cycle).refine(Partition.unit(6))
    assert str(p) == "(012345)"


# --- certificate and comparison ---

def test_certificate_bit_order():
    # path 0-1-2: pairs visited (1,2), (0,2), (0,1) -> bits 0, 1, 2
    g = AdjacencyGraph.from_edges([(0, 1), (1, 2)], 3)
    search = CanonicalFormSearch(g)
    assert search.certificate(Permutation.identity(3)) == 0b101
    assert search.certificate(Permutation([0, 2, 1])) == 0b011


def test_certificate_large_graph_exceeds_64_bits():
    n = 70
    complete = AdjacencyGraph.from_edges(
        [(i, j) for i in range(n) for j in range(i + 1, n)], n
    )
    cert = CanonicalFormSearch(complete).certificate(Permutation.identity(n))
    assert cert == (1 << (n * (n - 1) // 2)) - 1


def test_compare_rowwise():
    g = AdjacencyGraph.from_edges([(0, 1), (1, 2)], 3)
    search = CanonicalFormSearch(g)
    search.canon()
    best = search.get_best()
    assert search.compare_rowwise(best) is Comparison.EQUAL
    # P3 has only two leaves and both give the best matrix
    for values in ([0, 1, 2], [0, 2, 1], [1, 0, 2], [1, 2, 0], [2, 0, 1], [2, 1, 0]):
        assert search.compare_rowwise(Permutation(values)) is not Comparison.BETTER


def test_compare_rowwise_before_canon():
    search = CanonicalFormSearch(AdjacencyGraph(2))
    with pytest.raises(RuntimeError):
        search.compare_rowwise(Permutation.identity(2))


# --- search ---

def test_canon_graph78_seeded():
    graph = _graph78()
    search = CanonicalFormSearch(graph)
    search.setup(PermutationGroup(7))
    search.canon(_graph78_partition())

    best = search.get_best()
    first = search.get_first()
    assert sorted(best) == list(range(7))
    assert sorted(first) == list(range(7))
    assert search.get_certificate() == search.certificate(best)
    # the seed fixes 0 and 5 in place
    assert best[0] == 0
    assert best[6] == 5


def test_canon_results_agree_for_isomorphic_graphs():
    a = CanonicalFormSearch(_graph76())
    a.canon(Partition.unit(8))
    b = CanonicalFormSearch(_graph76_relabelled())
    b.canon(Partition.unit(8))
    assert a.get_certificate() == b.get_certificate()


def test_group_contains_only_automorphisms():
    graph = _graph76()
    search = CanonicalFormSearch(graph)
    search.canon()
    group = search.get_automorphism_group()
    for level in range(graph.vertex_count()):
        for g in group.representatives(level):
            assert _is_automorphism(graph, g)


@pytest.mark.parametrize(
    "edges, n, order",
    [
        ([(0, 1), (1, 2)], 3, 2),                    # path P3
        ([(0, 1), (1, 2), (0, 2)], 3, 6),            # triangle
        ([(0, 1), (0, 2), (0, 3)], 4, 6),            # star K_{1,3}
        ([], 1, 1),
    ],
)
def test_automorphism_group_order(edges, n, order):
    search = CanonicalFormSearch(AdjacencyGraph.from_edges(edges, n))
    search.canon()
    assert search.get_automorphism_group().order() == order


def test_best_labelling_gives_canonical_form():
    graph = _graph76()
    other = _graph76_relabelled()
    forms = []
    for g in (graph, other):
        search = CanonicalFormSearch(g)
        search.canon()
        # vertex best[i] is renamed i
        forms.append(g.relabel(search.get_best().invert()).edges())
    assert forms[0] == forms[1]


def test_empty_and_single_vertex_graphs():
    for n in (0, 1):
        search = CanonicalFormSearch(AdjacencyGraph(n))
        search.canon()
        assert search.get_certificate() == 0
        assert len(search.get_best()) == n


def test_results_before_canon_raise():
    search = CanonicalFormSearch(AdjacencyGraph(3))
    with pytest.raises(RuntimeError):
        search.get_certificate()
    with pytest.raises(RuntimeError):
        search.get_best()
    with pytest.raises(RuntimeError):
        search.get_first()


def test_setup_resets_and_checks_group_size():
    search = CanonicalFormSearch(_graph78())
    search.canon()
    search.setup()
    with pytest.raises(RuntimeError):
        search.get_best()
    with pytest.raises(ValueError):
        search.setup(PermutationGroup(3))


def test_is_canonical():
    # centre is vertex 2: refinement gives (01|2), then (0|1|2)
    g = AdjacencyGraph.from_edges([(0, 2), (1, 2)], 3)
    assert CanonicalFormSearch(g).is_canonical() is True
    # centre is vertex 1: refinement gives (02|1), then (0|2|1)
    h = AdjacencyGraph.from_edges([(0, 1), (1, 2)], 3)
    assert CanonicalFormSearch(h).is_canonical() is False
