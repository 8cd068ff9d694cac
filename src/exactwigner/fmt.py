# src/exactwigner/fmt.py
from __future__ import annotations

from fractions import Fraction

from colorama import Fore, Style

from exactwigner.rationalroot import RationalRoot
from exactwigner.runtime import CFG

_SEC_PER_MIN = 60


def dec_digits(n: int) -> int:
    """Exact decimal digit count without str(); handles n >= 0."""
    n = abs(n)
    if n == 0:
        return 1
    # floor(log10(n)) ~= floor(bitlen*log10(2))
    est = int((n.bit_length() * 30103) // 100000)
    p10 = 10 ** est
    if n < p10:
        while n < p10:
            est -= 1
            p10 //= 10
    else:
        p10 *= 10
        while n >= p10:
            est += 1
            p10 *= 10
    return est + 1


def abbr_int_fast(n: int, head: int = 10, tail: int = 10, threshold: int = 35, ellipsis: str = "…") -> str:
    """Abbreviate very large ints as first<head>…last<tail> without str(n)."""
    if n == 0:
        return "0"

    sign = "-" if n < 0 else ""
    a = -n if n < 0 else n

    d = dec_digits(a)
    if d <= threshold or head + tail >= d:
        return sign + str(a)

    first = a // 10 ** (d - head)
    last = a % 10 ** tail
    return f"{sign}{first}{ellipsis}{last:0{tail}d}"


def _abbr(n: int, abbreviate: bool) -> str:
    if not abbreviate:
        return str(n)
    return abbr_int_fast(
        n,
        int(CFG("FORMATTING.NUM_ABBR_HEAD", 10)),
        int(CFG("FORMATTING.NUM_ABBR_TAIL", 10)),
        int(CFG("FORMATTING.NUM_ABBR_THRESHOLD", 35)),
    )


def format_fraction(q: Fraction, *, abbreviate: bool = False) -> str:
    if q.denominator == 1:
        return _abbr(q.numerator, abbreviate)
    return f"{_abbr(q.numerator, abbreviate)}/{_abbr(q.denominator, abbreviate)}"


def format_rational_root(x: RationalRoot, *, abbreviate: bool = False) -> str:
    """
    Tidy exact form: '0', '-1/6', '√(2/15)', '-2/105 √(2/7)'.
    """
    s = format_fraction(x.prefactor, abbreviate=abbreviate)
    if x.is_rational():
        return s
    root = f"√({format_fraction(x.radicand, abbreviate=abbreviate)})"
    if x.prefactor == 1:
        return root
    if x.prefactor == -1:
        return "-" + root
    return f"{s} {root}"


def format_value(label: str, x: RationalRoot, numeric: str | None = None) -> str:
    """One colored result line for the CLI."""
    exact = format_rational_root(x, abbreviate=True)
    line = f"{Fore.CYAN}{label}{Style.RESET_ALL} = {Fore.YELLOW}{Style.BRIGHT}{exact}{Style.RESET_ALL}"
    if numeric is not None:
        line += f" ≈ {numeric}"
    return line


def format_duration(seconds: float) -> str:
    """ms if <1s; s with millis if <60s; else mm:ss.mmm."""
    if seconds < 1:
        return f"{round(seconds * 1000)} ms"
    if seconds < _SEC_PER_MIN:
        return f"{seconds:.3f} s"
    m, s = divmod(seconds, _SEC_PER_MIN)
    return f"{int(m)}:{s:06.3f}"
