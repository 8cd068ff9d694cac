# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

from fractions import Fraction
from typing import Any

import gmpy2
from sympy import Rational as _SympyRational


class DomainError(ValueError):
    """Invalid angular momentum input (not a half-integer, |m| > j, ...)."""


def halfint(x: Any) -> Fraction:
    """
    Convert x to an exact Fraction and check that it is a multiple of 1/2.

    Accepts int, Fraction, float, Decimal, strings like "3/2" or "1.5",
    sympy.Rational and gmpy2 mpz/mpq.
    """
    if isinstance(x, bool):
        raise DomainError(f"not a half-integer: {x!r}")
    if isinstance(x, Fraction):
        f = x
    elif isinstance(x, int):
        return Fraction(x)
    elif isinstance(x, _SympyRational):
        f = Fraction(int(x.p), int(x.q))
    elif isinstance(x, gmpy2.mpz):
        return Fraction(int(x))
    elif isinstance(x, gmpy2.mpq):
        f = Fraction(int(x.numerator), int(x.denominator))
    else:
        try:
            f = Fraction(x.strip() if isinstance(x, str) else x)
        except (TypeError, ValueError, ZeroDivisionError, OverflowError):
            raise DomainError(f"not a half-integer: {x!r}") from None
    if f.denominator not in (1, 2):
        raise DomainError(f"not a half-integer: {x!r}")
    return f


def is_halfint(x: Any) -> bool:
    try:
        halfint(x)
    except DomainError:
        return False
    return True


def is_integral(x: Fraction | int) -> bool:
    return isinstance(x, int) or x.denominator == 1


def to_int(x: Fraction | int) -> int:
    """Exact conversion of an integral Fraction to int."""
    if isinstance(x, int):
        return x
    if x.denominator != 1:
        raise DomainError(f"{x} is not an integer")
    return x.numerator


def to_uint(x: Fraction | int) -> int:
    """Like to_int, but also rejects negative values."""
    n = to_int(x)
    if n < 0:
        raise DomainError(f"{x} is negative")
    return n


def is_odd(x: Fraction | int) -> bool:
    return to_int(x) % 2 == 1


def check_j(j: Any) -> Fraction:
    """Validate a nonnegative half-integer angular momentum."""
    jf = halfint(j)
    if jf < 0:
        raise DomainError(f"invalid j: {j!r} is negative")
    return jf


def check_jm(j: Any, m: Any) -> tuple[Fraction, Fraction]:
    """Validate an angular momentum pair: |m| <= j and j - m integral."""
    jf, mf = halfint(j), halfint(m)
    if abs(mf) > jf or not is_integral(jf - mf):
        raise DomainError(f"invalid combination (j, m) = ({j}, {m})")
    return jf, mf
