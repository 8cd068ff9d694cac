# -----------------------------------------------------------------------------
#  symbols.py
#  Public coupling coefficients: validation, defaults and output conversion
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Any

from exactwigner import core
from exactwigner.rationalroot import RationalRoot, signed_root
from exactwigner.runtime import CFG
from exactwigner.utility import check_j, check_jm, halfint, is_odd

OUTPUTS = ("exact", "float", "mpfr", "sympy")


def convert(value: RationalRoot, output: str = "exact", precision: int | None = None) -> Any:
    """
    Final conversion of an exact result.

    output: "exact" (RationalRoot), "float", "mpfr" (gmpy2, `precision` bits,
    default OUTPUT.PRECISION) or "sympy".
    """
    if output == "exact":
        return value
    if output == "float":
        return float(value)
    if output == "mpfr":
        bits = precision if precision is not None else int(CFG("OUTPUT.PRECISION", 128))
        return value.to_mpfr(bits)
    if output == "sympy":
        return value.to_sympy()
    raise ValueError(f"unknown output {output!r}; expected one of {', '.join(OUTPUTS)}")


def triangle_coefficient(j1, j2, j3, *, output: str = "exact", precision: int | None = None):
    """
    Triangle coefficient Δ(j1, j2, j3) = sqrt((j1+j2-j3)!(j1-j2+j3)!(j2+j3-j1)!/(j1+j2+j3+1)!).

    Zero if the triangle condition fails; DomainError if a j is not a
    nonnegative half-integer.
    """
    return convert(core.triangle_coefficient(j1, j2, j3), output, precision)


def wigner3j(j1, j2, j3, m1, m2, m3=None, *, output: str = "exact", precision: int | None = None):
    """
    Wigner 3j symbol

        ⎛ j1  j2  j3 ⎞
        ⎝ m1  m2  m3 ⎠

    with m3 = -m1-m2 by default. Zero if the triangle condition fails or the m's
    do not add up to zero; DomainError for invalid (j, m) pairs.
    """
    if m3 is None:
        m3 = -halfint(m1) - halfint(m2)
    pairs = [check_jm(j, m) for j, m in ((j1, m1), (j2, m2), (j3, m3))]
    (j1, m1), (j2, m2), (j3, m3) = pairs
    return convert(core.wigner3j_core(j1, j2, j3, m1, m2, m3), output, precision)


def clebschgordan(j1, m1, j2, m2, j3, m3=None, *, output: str = "exact", precision: int | None = None):
    """
    Clebsch-Gordan coefficient <j1, m1; j2, m2 | j3, m3>, m3 = m1+m2 by default.

    = (-1)^(j1-j2+m3) sqrt(2 j3 + 1) 3j(j1 j2 j3; m1 m2 -m3)
    """
    if m3 is None:
        m3 = halfint(m1) + halfint(m2)
    (j1, m1), (j2, m2), (j3, m3) = (check_jm(j, m) for j, m in ((j1, m1), (j2, m2), (j3, m3)))
    s = core.wigner3j_core(j1, j2, j3, m1, m2, -m3)
    if s:
        s = s * signed_root(2 * j3 + 1)
        if is_odd(j1 - j2 + m3):
            s = -s
    return convert(s, output, precision)


def racah_v(j1, j2, j3, m1, m2, m3=None, *, output: str = "exact", precision: int | None = None):
    """Racah's V symbol V(j1, j2, j3; m1, m2, m3) = (-1)^(-j1+j2+j3) 3j(j1 j2 j3; m1 m2 m3)."""
    s = wigner3j(j1, j2, j3, m1, m2, m3)
    if s and is_odd(-halfint(j1) + halfint(j2) + halfint(j3)):
        s = -s
    return convert(s, output, precision)


def wigner6j(j1, j2, j3, j4, j5, j6, *, output: str = "exact", precision: int | None = None):
    """
    Wigner 6j symbol

        ⎧ j1  j2  j3 ⎫
        ⎩ j4  j5  j6 ⎭

    Zero unless (j1 j2 j3), (j1 j6 j5), (j2 j4 j6) and (j3 j4 j5) all satisfy the
    triangle condition.
    """
    js = [check_j(j) for j in (j1, j2, j3, j4, j5, j6)]
    return convert(core.wigner6j_core(*js), output, precision)


def racah_w(j1, j2, J, j3, J12, J23, *, output: str = "exact", precision: int | None = None):
    """Racah's W coefficient W(j1 j2 J j3; J12 J23) = (-1)^(j1+j2+j3+J) 6j(j1 j2 J12; j3 J J23)."""
    s = wigner6j(j1, j2, J12, j3, J, J23)
    if s and is_odd(halfint(j1) + halfint(j2) + halfint(j3) + halfint(J)):
        s = -s
    return convert(s, output, precision)


def wigner9j(j1, j2, j3, j4, j5, j6, j7, j8, j9, *, output: str = "exact", precision: int | None = None):
    """
    Wigner 9j symbol

        ⎧ j1  j2  j3 ⎫
        ⎨ j4  j5  j6 ⎬
        ⎩ j7  j8  j9 ⎭

    Zero unless every row and every column satisfies the triangle condition.
    """
    js = [check_j(j) for j in (j1, j2, j3, j4, j5, j6, j7, j8, j9)]
    return convert(core.wigner9j_core(*js), output, precision)
