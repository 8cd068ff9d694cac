# -----------------------------------------------------------------------------
#  primefactor.py
#  Exact integers stored as exponent vectors over the primes 2, 3, 5, ...
# -----------------------------------------------------------------------------

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from functools import lru_cache

import gmpy2
from sympy import factorint, primepi, sieve


# sympy extends its global sieve in place on lookup
_SIEVE_LOCK = threading.RLock()


@lru_cache(maxsize=None)
def nth_prime(i: int) -> int:
    """The i-th prime, 0-based (nth_prime(0) == 2)."""
    with _SIEVE_LOCK:
        return int(sieve[i + 1])


@lru_cache(maxsize=None)
def prime_index(p: int) -> int:
    """0-based position of the prime p."""
    with _SIEVE_LOCK:
        return int(primepi(p)) - 1


def _strip(powers: Iterable[int]) -> tuple[int, ...]:
    powers = list(powers)
    while powers and powers[-1] == 0:
        powers.pop()
    return tuple(powers)


class PrimeFactorization:
    """
    sign * prod(nth_prime(i) ** powers[i]).

    Immutable. Trailing zero exponents are dropped, so equal numbers have equal
    exponent tuples.
    """

    __slots__ = ("powers", "sign")

    def __init__(self, powers: Iterable[int] = (), sign: int = 1) -> None:
        powers = _strip(powers)
        if any(e < 0 for e in powers):
            raise ArithmeticError(f"negative exponent in {powers}")
        if sign not in (1, -1):
            raise ValueError(f"sign must be +1 or -1, got {sign}")
        self.powers = powers
        self.sign = sign

    # --- construction -------------------------------------------------------

    @classmethod
    def one(cls) -> PrimeFactorization:
        return cls()

    @classmethod
    def from_int(cls, n: int) -> PrimeFactorization:
        if n == 0:
            raise ArithmeticError("zero has no prime factorization")
        with _SIEVE_LOCK:
            fac = factorint(abs(int(n)))
        if not fac:
            return cls((), -1 if n < 0 else 1)
        powers = [0] * (prime_index(max(fac)) + 1)
        for p, e in fac.items():
            powers[prime_index(p)] = e
        return cls(powers, -1 if n < 0 else 1)

    # --- inspection ---------------------------------------------------------

    def __iter__(self) -> Iterator[tuple[int, int]]:
        """Yield (prime, exponent) for all nonzero exponents."""
        for i, e in enumerate(self.powers):
            if e:
                yield nth_prime(i), e

    def __int__(self) -> int:
        acc = gmpy2.mpz(self.sign)
        for p, e in self:
            acc *= gmpy2.mpz(p) ** e
        return int(acc)

    def is_one(self) -> bool:
        return not self.powers and self.sign == 1

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PrimeFactorization):
            return self.sign == other.sign and self.powers == other.powers
        if isinstance(other, int):
            return other != 0 and int(self) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.sign, self.powers))

    def __repr__(self) -> str:
        terms = " * ".join(f"{p}^{e}" if e > 1 else str(p) for p, e in self) or "1"
        return f"PrimeFactorization({'-' if self.sign < 0 else ''}{terms})"

    # --- arithmetic ---------------------------------------------------------

    def __neg__(self) -> PrimeFactorization:
        return PrimeFactorization(self.powers, -self.sign)

    def __abs__(self) -> PrimeFactorization:
        return PrimeFactorization(self.powers, 1)

    def __mul__(self, other: PrimeFactorization) -> PrimeFactorization:
        if not isinstance(other, PrimeFactorization):
            return NotImplemented
        a, b = self.powers, other.powers
        if len(a) < len(b):
            a, b = b, a
        powers = list(a)
        for i, e in enumerate(b):
            powers[i] += e
        return PrimeFactorization(powers, self.sign * other.sign)

    def divexact(self, other: PrimeFactorization) -> PrimeFactorization:
        """self / other, which must divide exactly."""
        if len(other.powers) > len(self.powers):
            raise ArithmeticError(f"{other!r} does not divide {self!r}")
        powers = list(self.powers)
        for i, e in enumerate(other.powers):
            powers[i] -= e
            if powers[i] < 0:
                raise ArithmeticError(f"{other!r} does not divide {self!r}")
        return PrimeFactorization(powers, self.sign * other.sign)

    def gcd(self, other: PrimeFactorization) -> PrimeFactorization:
        return PrimeFactorization(min(a, b) for a, b in zip(self.powers, other.powers))

    def lcm(self, other: PrimeFactorization) -> PrimeFactorization:
        a, b = self.powers, other.powers
        if len(a) < len(b):
            a, b = b, a
        powers = list(a)
        for i, e in enumerate(b):
            powers[i] = max(powers[i], e)
        return PrimeFactorization(powers)

    def split_square(self) -> tuple[PrimeFactorization, PrimeFactorization]:
        """
        Return (root, square_free) with root**2 * square_free == self.

        The sign stays with the square-free part.
        """
        root = PrimeFactorization(e // 2 for e in self.powers)
        rest = PrimeFactorization((e % 2 for e in self.powers), self.sign)
        return root, rest


def divgcd(a: PrimeFactorization, b: PrimeFactorization) -> tuple[PrimeFactorization, PrimeFactorization]:
    """Cancel the common prime factors of a and b."""
    g = a.gcd(b)
    return a.divexact(g), b.divexact(g)


def product(factors: Iterable[PrimeFactorization]) -> PrimeFactorization:
    acc = PrimeFactorization()
    for f in factors:
        acc = acc * f
    return acc


def strip_denominator(total: int, den: PrimeFactorization) -> tuple[int, PrimeFactorization]:
    """
    Divide out of the fraction total/den every prime of den that also divides total.

    Only the primes already known to be in den are tried.
    """
    total = gmpy2.mpz(total)
    powers = list(den.powers)
    for i, e in enumerate(powers):
        if not e:
            continue
        p = nth_prime(i)
        while powers[i] > 0:
            q, r = gmpy2.f_divmod(total, p)
            if r:
                break
            total = q
            powers[i] -= 1
    return int(total), PrimeFactorization(powers, den.sign)
