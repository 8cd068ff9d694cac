# -----------------------------------------------------------------------------
#  series.py
#  Finite sums behind the triangle coefficient and the 3j, 6j and 9j symbols
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Sequence
from fractions import Fraction

import gmpy2

from exactwigner.factorials import primebinomial, primefactorial
from exactwigner.primefactor import PrimeFactorization, divgcd, product, strip_denominator
from exactwigner.utility import to_int, to_uint

Term = tuple[PrimeFactorization, PrimeFactorization]


def triangle_squared(j1, j2, j3) -> Term:
    """
    Numerator and denominator of
    (j1+j2-j3)! (j1-j2+j3)! (-j1+j2+j3)! / (j1+j2+j3+1)!, common factors cancelled.

    The unsigned conversions fail for arguments violating the triangle condition.
    """
    num = product(
        primefactorial(to_uint(x)) for x in (j1 + j2 - j3, j1 - j2 + j3, -j1 + j2 + j3)
    )
    den = primefactorial(to_uint(j1 + j2 + j3 + 1))
    return divgcd(num, den)


def sum_terms(terms: Sequence[Term]) -> Fraction:
    """
    Exact sum of num/den terms.

    All terms are brought onto the least common denominator, the numerators are
    added as integers and the denominator is reduced using its own primes only.
    """
    if not terms:
        return Fraction(0)
    den = PrimeFactorization()
    for _, d in terms:
        den = den.lcm(d)
    total = gmpy2.mpz(0)
    for n, d in terms:
        total += int(n * den.divexact(d))
    total, den = strip_denominator(total, den)
    return Fraction(total, int(den))


def compute3jseries(b1: int, b2: int, b3: int, a1: int, a2: int) -> Fraction:
    """sum_k (-1)^k / (k! (k-a1)! (k-a2)! (b1-k)! (b2-k)! (b3-k)!)"""
    terms = []
    for k in range(max(a1, a2, 0), min(b1, b2, b3) + 1):
        num = PrimeFactorization(sign=-1 if k % 2 else 1)
        den = product(
            primefactorial(x) for x in (k, k - a1, k - a2, b1 - k, b2 - k, b3 - k)
        )
        terms.append((num, den))
    return sum_terms(terms)


def compute6jseries(b1: int, b2: int, b3: int, a1: int, a2: int, a3: int, a4: int) -> Fraction:
    """sum_k (-1)^k (k+1)! / (prod_i (k-a_i)! prod_j (b_j-k)!)"""
    terms = []
    for k in range(max(a1, a2, a3, a4), min(b1, b2, b3) + 1):
        num = primefactorial(k + 1)
        if k % 2:
            num = -num
        den = product(
            primefactorial(x) for x in (k - a1, k - a2, k - a3, k - a4, b1 - k, b2 - k, b3 - k)
        )
        terms.append(divgcd(num, den))
    return sum_terms(terms)


def wei_bracket(m1, m2, m3, m4, m5, m6) -> int:
    """
    Wei's square bracket: an alternating sum of products of four binomials.

    Always an integer; the relabelling of the 9j entries happens in the caller.
    """
    a1 = to_int(m1 + m5 - m6)
    a2 = to_int(m1 - m5 + m6)
    a3 = to_int(-m1 + m5 + m6)
    b1 = to_int(m1 + m5 + m6)
    b2 = to_int(m2 + m4 + m6)
    b3 = to_int(m3 + m4 + m5)
    b0 = to_int(m1 + m2 + m3)

    total = gmpy2.mpz(0)
    for t in range(max(b1, b2, b3, b0), min(a1 + b2, a2 + b3, a3 + b0) + 1):
        term = (
            primebinomial(t + 1, t - b1)
            * primebinomial(a1, t - b2)
            * primebinomial(a2, t - b3)
            * primebinomial(a3, t - b0)
        )
        total += -int(term) if t % 2 else int(term)
    return int(total)


def compute9jseries(a, b, c, d, e, f, g, h, j) -> int:
    """
    sum_k (-1)^(2k) (2k+1) W(a,b,c,f,j,k) W(f,d,e,h,b,k) W(h,j,g,a,d,k)

    k runs in unit steps over the intersection of the three coupling ranges.
    """
    k = max(abs(h - d), abs(b - f), abs(a - j))
    kmax = min(h + d, b + f, a + j)
    total = gmpy2.mpz(0)
    while k <= kmax:
        twok = to_int(2 * k)
        weight = -(twok + 1) if twok % 2 else twok + 1
        total += (
            weight
            * wei_bracket(a, b, c, f, j, k)
            * wei_bracket(f, d, e, h, b, k)
            * wei_bracket(h, j, g, a, d, k)
        )
        k += 1
    return int(total)
