# -----------------------------------------------------------------------------
#  core.py
#  Cached exact evaluation of triangle coefficients and 3j, 6j, 9j symbols
# -----------------------------------------------------------------------------

"""
All entry points take half-integer arguments (anything halfint() accepts) and
return a RationalRoot. Failed triangle or projection conditions give an exact
zero; arguments that are not half-integers raise DomainError.

Each symbol is brought to a canonical orientation first, so that equivalent
requests share one cache entry. The cache stores (r, s) with the symbol equal to
s * sqrt(r) in the canonical orientation; signs are applied on the way out.
"""

from __future__ import annotations

from fractions import Fraction
from time import perf_counter

from exactwigner.cache import CACHES
from exactwigner.factorials import primefactorial
from exactwigner.primefactor import PrimeFactorization, divgcd, product, strip_denominator
from exactwigner.rationalroot import ZERO, RationalRoot, split_factorized
from exactwigner.runtime import debug
from exactwigner.series import compute3jseries, compute6jseries, compute9jseries, triangle_squared
from exactwigner.symmetry import ninej_images, ninej_phase, reorder3j, reorder6j
from exactwigner.utility import check_j, halfint, is_integral, to_int, to_uint

CacheEntry = tuple[Fraction, Fraction]


def triangle_ok(j1, j2, j3) -> bool:
    """j3 <= j1 + j2, j1 <= j2 + j3, j2 <= j3 + j1 and j1 + j2 + j3 integral."""
    j1, j2, j3 = Fraction(j1), Fraction(j2), Fraction(j3)
    return j3 <= j1 + j2 and j1 <= j2 + j3 and j2 <= j3 + j1 and is_integral(j1 + j2 + j3)


def triangle_coefficient(j1, j2, j3) -> RationalRoot:
    """
    Δ(j1, j2, j3) = sqrt((j1+j2-j3)! (j1-j2+j3)! (-j1+j2+j3)! / (j1+j2+j3+1)!)

    Zero if the triangle condition fails.
    """
    j1, j2, j3 = check_j(j1), check_j(j2), check_j(j3)
    if not triangle_ok(j1, j2, j3):
        return ZERO
    num, den = triangle_squared(j1, j2, j3)
    return RationalRoot.from_factorizations(num, den)


# --- 3j -----------------------------------------------------------------------

def wigner3j_core(j1, j2, j3, m1, m2, m3) -> RationalRoot:
    j1, j2, j3, m1, m2, m3 = (halfint(x) for x in (j1, j2, j3, m1, m2, m3))
    if not triangle_ok(j1, j2, j3) or m1 + m2 + m3 != 0:
        return ZERO

    j1, j2, j3, m1, m2, m3, sign = reorder3j(j1, j2, j3, m1, m2, m3)
    a1 = to_int(j2 - m1 - j3)  # may be negative
    a2 = to_int(j1 + m2 - j3)  # may be negative
    b1 = to_uint(j1 + j2 - j3)
    b2 = to_uint(j1 - m1)
    b3 = to_uint(j2 + m2)

    # phase (-1)^(j1-j2-m3) of the definition; a1 - a2 = j2 - j1 + m3
    if (a1 - a2) % 2:
        sign = -sign

    key = (b1, b2, b3, a1, a2)
    cache = CACHES["3j"]
    entry = cache.get(key)
    if entry is None:
        t0 = perf_counter()
        entry = _compute3j(j1, j2, j3, b1, b2, b3, a1, a2)
        cache.put(key, entry)
        debug(f"3j {key} computed in {(perf_counter() - t0) * 1e3:.2f} ms")
    r, s = entry
    return RationalRoot(sign * s, r)


def _compute3j(j1, j2, j3, b1: int, b2: int, b3: int, a1: int, a2: int) -> CacheEntry:
    n1, d1 = triangle_squared(j1, j2, j3)
    # (j1-m1)! (j1+m1)! (j2-m2)! (j2+m2)! (j3-m3)! (j3+m3)!
    n2 = product(primefactorial(x) for x in (b2, b1 - a1, b1 - a2, b3, b3 - a1, b2 - a2))
    s, r = split_factorized(n1 * n2, d1)
    s *= compute3jseries(b1, b2, b3, a1, a2)
    return r, s


# --- 6j -----------------------------------------------------------------------

def wigner6j_core(j1, j2, j3, j4, j5, j6) -> RationalRoot:
    j1, j2, j3, j4, j5, j6 = (halfint(x) for x in (j1, j2, j3, j4, j5, j6))
    triads = ((j1, j2, j3), (j1, j6, j5), (j2, j4, j6), (j3, j4, j5))
    if not all(triangle_ok(*t) for t in triads):
        return ZERO

    a1, a2, a3, a4 = (to_uint(sum(t)) for t in triads)
    b1 = to_uint(j1 + j2 + j4 + j5)
    b2 = to_uint(j1 + j3 + j4 + j6)
    b3 = to_uint(j2 + j3 + j5 + j6)
    # b_j >= a_i for all pairs and sum(a) == sum(b)
    b1, b2, b3, a1, a2, a3, a4 = reorder6j(b1, b2, b3, a1, a2, a3, a4)

    key = (b1, b2, b3, a1, a2, a3)
    cache = CACHES["6j"]
    entry = cache.get(key)
    if entry is None:
        t0 = perf_counter()
        entry = _compute6j(triads, b1, b2, b3, a1, a2, a3, a4)
        cache.put(key, entry)
        debug(f"6j {key} computed in {(perf_counter() - t0) * 1e3:.2f} ms")
    r, s = entry
    return RationalRoot(s, r)


def _compute6j(triads, b1: int, b2: int, b3: int, a1: int, a2: int, a3: int, a4: int) -> CacheEntry:
    # the product of the four triangle coefficients does not depend on the ordering
    num, den = PrimeFactorization(), PrimeFactorization()
    for t in triads:
        n, d = triangle_squared(*t)
        num, den = num * n, den * d
    s, r = split_factorized(num, den)
    s *= compute6jseries(b1, b2, b3, a1, a2, a3, a4)
    return r, s


# --- 9j -----------------------------------------------------------------------

def wigner9j_core(j1, j2, j3, j4, j5, j6, j7, j8, j9) -> RationalRoot:
    js = tuple(halfint(x) for x in (j1, j2, j3, j4, j5, j6, j7, j8, j9))
    if not all(triangle_ok(*t) for t in _ninej_triads(js)):
        return ZERO

    cache = CACHES["9j"]
    phases = dict(ninej_images(js))
    image, entry = cache.find(phases)
    if entry is not None:
        r, s = entry
        return RationalRoot(ninej_phase(phases[image], js) * s, r)

    t0 = perf_counter()
    r, s = _compute9j(js)
    cache.put(js, (r, s))
    debug(f"9j {tuple(str(j) for j in js)} computed in {(perf_counter() - t0) * 1e3:.2f} ms")
    return RationalRoot(s, r)


def _ninej_triads(js):
    a, b, c, d, e, f, g, h, j = js
    return ((a, b, c), (d, e, f), (g, h, j), (a, d, g), (b, e, h), (c, f, j))


def _compute9j(js) -> CacheEntry:
    num, den = PrimeFactorization(), PrimeFactorization()
    for t in _ninej_triads(js):
        n, d = triangle_squared(*t)
        num, den = num * n, den * d

    snum, rnum = num.split_square()
    sden, rden = den.split_square()
    rnum, rden = divgcd(rnum, rden)
    snum, sden = divgcd(snum, sden)

    series, sden = strip_denominator(compute9jseries(*js), sden)
    s = Fraction(int(snum) * series, int(sden))
    r = Fraction(int(rnum), int(rden))
    return r, s
