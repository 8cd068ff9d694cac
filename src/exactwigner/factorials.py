# -----------------------------------------------------------------------------
#  factorials.py
#  Lazily growing table of factorial factorizations
# -----------------------------------------------------------------------------

from __future__ import annotations

import threading
from functools import lru_cache

from exactwigner.primefactor import PrimeFactorization
from exactwigner.utility import DomainError


class FactorialTable:
    """
    table[n] is the factorization of n!.

    Grows on demand, never shrinks. Entries are immutable and may be shared.
    """

    def __init__(self) -> None:
        self._table: list[PrimeFactorization] = [PrimeFactorization.one()]
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._table)

    def factorial(self, n: int) -> PrimeFactorization:
        if n < 0:
            raise DomainError(f"factorial of negative number {n}")
        if n < len(self._table):
            return self._table[n]
        with self._lock:
            while len(self._table) <= n:
                k = len(self._table)
                self._table.append(self._table[-1] * PrimeFactorization.from_int(k))
            return self._table[n]

    __getitem__ = factorial


FACTORIALS = FactorialTable()


def primefactorial(n: int) -> PrimeFactorization:
    return FACTORIALS.factorial(n)


@lru_cache(maxsize=100_000)
def primebinomial(n: int, k: int) -> PrimeFactorization:
    """Factorization of the binomial coefficient C(n, k) for 0 <= k <= n."""
    if not 0 <= k <= n:
        raise DomainError(f"binomial({n}, {k}) outside 0 <= k <= n")
    return primefactorial(n).divexact(primefactorial(k) * primefactorial(n - k))
