# -----------------------------------------------------------------------------
#  rationalroot.py
#  Exact numbers of the form s * sqrt(r) with s, r rational
# -----------------------------------------------------------------------------

from __future__ import annotations

from fractions import Fraction
from math import gcd, isqrt

import gmpy2
import sympy
from sympy.ntheory.primetest import is_square

from exactwigner.primefactor import PrimeFactorization, divgcd
from exactwigner.utility import DomainError

Rationalish = int | Fraction


class RationalRoot:
    """
    The real number prefactor * sqrt(radicand), radicand >= 0.

    Radicands that are perfect squares are folded into the prefactor; zero is
    always stored as 0 * sqrt(1). Values produced by split_square have a
    square-free radicand, other constructors do not guarantee that. For a
    square-free radicand the stored form is unique: -2 * sqrt(1/70) is kept as
    -sqrt(2/35).
    """

    __slots__ = ("prefactor", "radicand")

    def __init__(self, prefactor: Rationalish = 0, radicand: Rationalish = 1) -> None:
        s = Fraction(prefactor)
        r = Fraction(radicand)
        if r < 0:
            raise DomainError(f"negative radicand {r}")
        if s == 0 or r == 0:
            s, r = Fraction(0), Fraction(1)
        elif r != 1 and is_square(r.numerator) and is_square(r.denominator):
            s *= Fraction(isqrt(r.numerator), isqrt(r.denominator))
            r = Fraction(1)
        elif r != 1:
            # a prime on opposite sides of s and r moves under the root once
            g = gcd(s.numerator, r.denominator)
            h = gcd(s.denominator, r.numerator)
            if g > 1 or h > 1:
                s *= Fraction(h, g)
                r *= Fraction(g * g, h * h)
        self.prefactor = s
        self.radicand = r

    @classmethod
    def from_factorizations(cls, num: PrimeFactorization, den: PrimeFactorization) -> RationalRoot:
        """sqrt(num/den) up to the sign of num/den, which goes to the prefactor."""
        s, r = split_factorized(num, den)
        return cls(s, r)

    # --- inspection ---------------------------------------------------------

    def __bool__(self) -> bool:
        return self.prefactor != 0

    def is_zero(self) -> bool:
        return self.prefactor == 0

    def is_rational(self) -> bool:
        return self.radicand == 1

    def sign(self) -> int:
        return (self.prefactor > 0) - (self.prefactor < 0)

    def square(self) -> Fraction:
        """sign(x) * x**2, exact."""
        return self.sign() * self.prefactor * self.prefactor * self.radicand

    def to_fraction(self) -> Fraction:
        if not self.is_rational():
            raise DomainError(f"{self} is irrational")
        return self.prefactor

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (int, Fraction)):
            other = RationalRoot(other)
        if not isinstance(other, RationalRoot):
            return NotImplemented
        return self.sign() == other.sign() and self.square() == other.square()

    def __hash__(self) -> int:
        if self.is_rational():
            return hash(self.prefactor)
        return hash((self.sign(), self.square()))

    def __repr__(self) -> str:
        return f"RationalRoot({self.prefactor!s}, {self.radicand!s})"

    def __str__(self) -> str:
        if self.is_rational():
            return str(self.prefactor)
        if self.prefactor == 1:
            return f"√({self.radicand})"
        if self.prefactor == -1:
            return f"-√({self.radicand})"
        return f"{self.prefactor}√({self.radicand})"

    # --- arithmetic ---------------------------------------------------------

    def __neg__(self) -> RationalRoot:
        return RationalRoot(-self.prefactor, self.radicand)

    def __pos__(self) -> RationalRoot:
        return self

    def __abs__(self) -> RationalRoot:
        return RationalRoot(abs(self.prefactor), self.radicand)

    def __mul__(self, other: object) -> RationalRoot:
        if isinstance(other, (int, Fraction)):
            return RationalRoot(self.prefactor * other, self.radicand)
        if not isinstance(other, RationalRoot):
            return NotImplemented
        # sqrt(a) * sqrt(b) = g * sqrt(a*b / g**2), keeps square-free inputs square-free
        a, b = self.radicand, other.radicand
        gn = gcd(a.numerator, b.numerator)
        gd = gcd(a.denominator, b.denominator)
        radicand = Fraction(
            (a.numerator // gn) * (b.numerator // gn),
            (a.denominator // gd) * (b.denominator // gd),
        )
        return RationalRoot(self.prefactor * other.prefactor * Fraction(gn, gd), radicand)

    __rmul__ = __mul__

    def inverse(self) -> RationalRoot:
        if self.is_zero():
            raise ZeroDivisionError("RationalRoot division by zero")
        return RationalRoot(1 / (self.prefactor * self.radicand), self.radicand)

    def __truediv__(self, other: object) -> RationalRoot:
        if isinstance(other, (int, Fraction)):
            if other == 0:
                raise ZeroDivisionError("RationalRoot division by zero")
            return RationalRoot(self.prefactor / other, self.radicand)
        if not isinstance(other, RationalRoot):
            return NotImplemented
        return self * other.inverse()

    def __rtruediv__(self, other: object) -> RationalRoot:
        if isinstance(other, (int, Fraction)):
            return self.inverse() * other
        return NotImplemented

    # --- lossy conversions --------------------------------------------------

    def to_mpfr(self, precision: int = 128) -> gmpy2.mpfr:
        """Round to a gmpy2.mpfr with the given number of bits."""
        if self.is_zero():
            return gmpy2.mpfr(0, precision)
        n, d = self.radicand.numerator, self.radicand.denominator
        guard = precision + 16
        # sqrt(n/d) = sqrt(n*d)/d, floor of the root carries < 2**-guard relative error
        root = gmpy2.isqrt(gmpy2.mpz(n * d) << (2 * guard))
        num = gmpy2.mpz(self.prefactor.numerator) * root
        den = gmpy2.mpz(self.prefactor.denominator) * d << guard
        return gmpy2.mpfr(gmpy2.mpq(num, den), precision)

    def __float__(self) -> float:
        return float(self.to_mpfr(64))

    def to_sympy(self) -> sympy.Expr:
        s = sympy.Rational(self.prefactor.numerator, self.prefactor.denominator)
        if self.is_rational():
            return s
        return s * sympy.sqrt(sympy.Rational(self.radicand.numerator, self.radicand.denominator))


ZERO = RationalRoot(0)
ONE = RationalRoot(1)


def split_factorized(num: PrimeFactorization, den: PrimeFactorization) -> tuple[Fraction, Fraction]:
    """
    Write sign * sqrt(|num/den|) as s * sqrt(r), s carrying the sign, r square-free.

    Returns (s, r).
    """
    sn, rn = num.split_square()
    sd, rd = den.split_square()
    sn, sd = divgcd(sn, sd)
    rn, rd = divgcd(abs(rn), abs(rd))
    sign = num.sign * den.sign
    return Fraction(sign * int(sn), int(sd)), Fraction(int(rn), int(rd))


def split_square(x: Rationalish) -> tuple[Fraction, Fraction]:
    """
    Split x into (square_root_part, square_free_part) with
    square_root_part * |square_root_part| * square_free_part == x and a
    square-free second part. The sign of x goes to the first part.
    """
    x = Fraction(x)
    if x == 0:
        return Fraction(0), Fraction(1)
    return split_factorized(
        PrimeFactorization.from_int(x.numerator),
        PrimeFactorization.from_int(x.denominator),
    )


def signed_root(x: Rationalish) -> RationalRoot:
    """sign(x) * sqrt(|x|), exact."""
    x = Fraction(x)
    if x == 0:
        return ZERO
    sign = 1 if x > 0 else -1
    return RationalRoot(sign, abs(x))
