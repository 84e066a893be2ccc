"""Tests for Permutation."""
import pytest

from isocanon.perm.permutation import Permutation, permutation_from_prefix
from isocanon.utils.contracts import check_permutation, check_cover


def test_identity():
    p = Permutation.identity(4)
    assert list(p) == [0, 1, 2, 3]
    assert p.is_identity()
    assert len(p) == 4


def test_get_and_getitem():
    p = Permutation([2, 0, 1])
    assert p.get(0) == 2
    assert p[1] == 0


def test_multiply_applies_other_first():
    a = Permutation([1, 2, 0])
    b = Permutation([0, 2, 1])
    # r[i] = a[b[i]]
    assert list(a.multiply(b)) == [1, 0, 2]
    assert a * b == a.multiply(b)


def test_invert():
    p = Permutation([2, 0, 3, 1])
    inv = p.invert()
    assert list(inv) == [1, 3, 0, 2]
    assert p.multiply(inv).is_identity()
    assert inv.multiply(p).is_identity()


def test_first_index_of_difference():
    a = Permutation([0, 1, 3, 2])
    b = Permutation([0, 1, 2, 3])
    assert a.first_index_of_difference(b) == 2
    assert a.first_index_of_difference(a) == 4


def test_equality_and_hash():
    assert Permutation([1, 0]) == Permutation((1, 0))
    assert Permutation([1, 0]) != Permutation([0, 1])
    assert len({Permutation([1, 0]), Permutation((1, 0))}) == 1


def test_is_identity_false():
    assert not Permutation([1, 0, 2]).is_identity()


def test_cycles_and_str():
    p = Permutation([1, 2, 0, 3, 5, 4])
    assert p.cycles() == [(0, 1, 2), (4, 5)]
    assert str(p) == "(0 1 2)(4 5)"
    assert str(Permutation.identity(3)) == "()"


def test_partial_keeps_prefix():
    p = Permutation.partial([4, 2])
    assert len(p) == 2
    assert p[0] == 4


def test_permutation_from_prefix():
    p = permutation_from_prefix([2, 0], 4)
    assert p[0] == 2
    assert p[1] == 0
    assert sorted(p) == [0, 1, 2, 3]
    assert permutation_from_prefix([], 3).is_identity()


def test_check_permutation():
    check_permutation([2, 0, 1])
    with pytest.raises(ValueError):
        check_permutation([0, 0, 1])
    with pytest.raises(ValueError):
        check_permutation([1, 2])


def test_check_cover():
    check_cover([[0, 2], [1]])
    with pytest.raises(ValueError):
        check_cover([[0, 1], [1, 2]])
    with pytest.raises(ValueError):
        check_cover([[2, 0], [1]])
    with pytest.raises(ValueError):
        check_cover([[0], [2]], n=3)
