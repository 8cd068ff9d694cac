# tests/test_symmetry.py
"""
Canonical orientations of 3j/6j parameters and the 9j symmetry group.

Run: pytest -v tests/test_symmetry.py
"""

from fractions import Fraction
from itertools import permutations

import pytest

from exactwigner.symmetry import (
    NINEJ_SYMMETRIES,
    PERMS3,
    ninej_images,
    ninej_phase,
    parity,
    reorder3j,
    reorder6j,
)

F = Fraction


@pytest.mark.parametrize(
    "perm,p",
    [((0, 1, 2), 1), ((1, 2, 0), 1), ((2, 0, 1), 1), ((1, 0, 2), -1), ((0, 2, 1), -1), ((2, 1, 0), -1)],
)
def test_parity(perm, p):
    assert parity(perm) == p


# ---- 3j ----------------------------------------------------------------------

@pytest.mark.parametrize(
    "args,expected",
    [
        ((1, 1, 2, 1, -1, 0), (2, 1, 1, 0, 1, -1, 1)),
        ((2, 1, 1, 0, 1, -1), (2, 1, 1, 0, 1, -1, 1)),
        # J = 3 is odd: swapping two columns costs a sign
        ((1, 1, 1, 0, 1, -1), (1, 1, 1, 1, 0, -1, -1)),
        ((1, 1, 1, 1, 0, -1), (1, 1, 1, 1, 0, -1, 1)),
        ((1, 1, 1, -1, 0, 1), (1, 1, 1, 1, 0, -1, -1)),
    ],
)
def test_reorder3j(args, expected):
    assert reorder3j(*args) == expected


CASES_3J = [
    (1, 1, 2, 1, -1, 0),
    (F(3, 2), 1, F(1, 2), F(1, 2), -1, F(1, 2)),
    (F(5, 2), F(3, 2), 2, F(-1, 2), F(3, 2), -1),
    (4, 3, 2, 2, -2, 0),
    (2, 2, 2, 1, 1, -2),
]


@pytest.mark.parametrize("args", CASES_3J)
def test_reorder3j_is_canonical(args):
    """Every image under column permutations and m -> -m lands on the same representative."""
    j = args[:3]
    m = args[3:]
    target = reorder3j(*args)[:6]
    for perm in permutations(range(3)):
        for flip in (1, -1):
            image = [j[i] for i in perm] + [flip * m[i] for i in perm]
            assert reorder3j(*image)[:6] == target


@pytest.mark.parametrize("args", CASES_3J)
def test_reorder3j_is_idempotent(args):
    canon = reorder3j(*args)[:6]
    assert reorder3j(*canon) == (*canon, 1)


# ---- 6j ----------------------------------------------------------------------

def test_reorder6j_sorts_both_groups():
    assert reorder6j(4, 5, 6, 1, 3, 2, 0) == (6, 5, 4, 3, 2, 1, 0)
    assert reorder6j(6, 5, 4, 3, 2, 1, 0) == (6, 5, 4, 3, 2, 1, 0)


# ---- 9j ----------------------------------------------------------------------

def test_ninej_symmetry_table():
    assert len(PERMS3) == 6
    assert len(NINEJ_SYMMETRIES) == 36
    rows, cols, p = NINEJ_SYMMETRIES[0]
    assert rows == cols == (0, 1, 2) and p == 1
    # first block: identity rows, columns in PERMS3 order
    assert [s[2] for s in NINEJ_SYMMETRIES[:6]] == [1, -1, -1, 1, 1, -1]


def test_ninej_images():
    js = tuple(range(9))
    images = list(ninej_images(js))
    assert len(images) == 72
    assert images[0] == (js, 1)
    assert images[1] == ((0, 3, 6, 1, 4, 7, 2, 5, 8), 1)
    assert len({image for image, _ in images}) == 72
    # swapping the first two rows
    assert ((3, 4, 5, 0, 1, 2, 6, 7, 8), -1) in images


def test_ninej_phase():
    odd = (1, 2, 3, 1, 3, 2, 2, 3, 4)  # S = 21
    even = (1, 1, 0, 1, 1, 0, 0, 0, 0)  # S = 4
    assert ninej_phase(1, odd) == 1
    assert ninej_phase(-1, odd) == -1
    assert ninej_phase(-1, even) == 1
    half = (F(1, 2), F(1, 2), 1, F(1, 2), F(1, 2), 1, 1, 1, 0)  # S = 6
    assert ninej_phase(-1, half) == 1
