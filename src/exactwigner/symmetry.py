# -----------------------------------------------------------------------------
#  symmetry.py
#  Canonical orderings of 3j/6j parameters and the 9j symmetry group
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterator, Sequence
from fractions import Fraction
from itertools import permutations

from exactwigner.utility import is_odd

PERMS3 = tuple(permutations(range(3)))


def parity(perm: Sequence[int]) -> int:
    """+1 for even permutations, -1 for odd ones."""
    inversions = sum(
        1 for i in range(len(perm)) for k in range(i + 1, len(perm)) if perm[i] > perm[k]
    )
    return -1 if inversions % 2 else 1


# --- 3j ---------------------------------------------------------------------

def reorder3j(j1, j2, j3, m1, m2, m3):
    """
    Canonical representative of a 3j symbol under column permutations and m -> -m.

    Returns (j1, j2, j3, m1, m2, m3, sign) where the input symbol equals sign times
    the returned one. The representative is the image with the lexicographically
    largest (j1, j2, j3, m1, m2), so j1 >= j2 >= j3, m1 >= 0 and m2 >= 0 if m1 == 0.
    Odd permutations and the m flip each cost (-1)**(j1+j2+j3).
    """
    cols = ((j1, m1), (j2, m2), (j3, m3))
    best = None
    for perm in PERMS3:
        p = parity(perm)
        for flip in (1, -1):
            (a, x), (b, y), (c, z) = (cols[i] for i in perm)
            image = (a, b, c, flip * x, flip * y, flip * z)
            key = image[:5]
            if best is None or key > best[0]:
                best = (key, image, p * flip)

    _, image, odd_or_even = best
    sign = -1 if odd_or_even < 0 and is_odd(j1 + j2 + j3) else 1
    return (*image, sign)


# --- 6j ---------------------------------------------------------------------

def reorder6j(b1, b2, b3, a1, a2, a3, a4):
    """Sort the exchange sums and the triad sums, each descending."""
    b1, b2, b3 = sorted((b1, b2, b3), reverse=True)
    a1, a2, a3, a4 = sorted((a1, a2, a3, a4), reverse=True)
    return b1, b2, b3, a1, a2, a3, a4


# --- 9j ---------------------------------------------------------------------

# (row permutation, column permutation, parity), rows outer and columns inner
NINEJ_SYMMETRIES: tuple[tuple[tuple[int, ...], tuple[int, ...], int], ...] = tuple(
    (rows, cols, parity(rows) * parity(cols)) for rows in PERMS3 for cols in PERMS3
)


def _permute(js: Sequence, rows: Sequence[int], cols: Sequence[int]) -> tuple:
    return tuple(js[3 * r + c] for r in rows for c in cols)


def _transpose(js: Sequence) -> tuple:
    return tuple(js[3 * c + r] for r in range(3) for c in range(3))


def ninej_images(js: Sequence[Fraction]) -> Iterator[tuple[tuple, int]]:
    """
    Yield the 72 images (key, parity) of a 9j symbol given row-major as 9 entries.

    For each row/column permutation the plain image comes before its transpose.
    """
    for rows, cols, p in NINEJ_SYMMETRIES:
        image = _permute(js, rows, cols)
        yield image, p
        yield _transpose(image), p


def ninej_phase(p: int, js: Sequence[Fraction]) -> int:
    """Sign relating a 9j symbol to an image of the given parity: odd images cost (-1)**S."""
    if p > 0:
        return 1
    return -1 if is_odd(sum(js)) else 1
