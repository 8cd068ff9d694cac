# src/exactwigner/cli.py

"""
exactwigner - exact angular momentum coupling coefficients

usage: exactwigner SYMBOL ARGS... [--float] [--digits N] [--config PATH] [--debug]

Arguments are integers, fractions (3/2) or decimals (1.5); every j and m must
be a multiple of one half.
"""

from __future__ import annotations

import argparse
import math
import re
import sys
import textwrap
import traceback
from collections.abc import Callable
from time import perf_counter
from typing import NamedTuple

from colorama import Fore, Style
from colorama import init as colorama_init

from exactwigner import __version__ as _ver
from exactwigner.cache import KINDS, cache_stats
from exactwigner.config import ConfigError, apply_settings, load_settings
from exactwigner.fmt import format_duration, format_value
from exactwigner.rationalroot import RationalRoot
from exactwigner.runtime import current as _rt_current
from exactwigner.symbols import (
    clebschgordan,
    racah_v,
    racah_w,
    triangle_coefficient,
    wigner3j,
    wigner6j,
    wigner9j,
)
from exactwigner.utility import DomainError


class Command(NamedTuple):
    func: Callable[..., RationalRoot]
    arity: tuple[int, ...]
    layout: str  # label template, {0}.. are the arguments


COMMANDS: dict[str, Command] = {
    "3j": Command(wigner3j, (5, 6), "3j({0} {1} {2}; {3} {4} {5})"),
    "6j": Command(wigner6j, (6,), "6j{{{0} {1} {2}; {3} {4} {5}}}"),
    "9j": Command(wigner9j, (9,), "9j{{{0} {1} {2}; {3} {4} {5}; {6} {7} {8}}}"),
    "cg": Command(clebschgordan, (5, 6), "<{0} {1}; {2} {3} | {4} {5}>"),
    "racahv": Command(racah_v, (5, 6), "V({0} {1} {2}; {3} {4} {5})"),
    "racahw": Command(racah_w, (6,), "W({0} {1} {2} {3}; {4} {5})"),
    "delta": Command(triangle_coefficient, (3,), "Δ({0} {1} {2})"),
}

# argparse reads "-1/2" as an unknown option
_NEG_FRACTION = re.compile(r"^-\d+/\d+$")


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    print(f"{Fore.RED}Error:{Style.RESET_ALL} {msg}", file=sys.stderr)


def _protect_negative_fractions(argv: list[str]) -> list[str]:
    return [" " + a if _NEG_FRACTION.match(a) else a for a in argv]


def _build_parser() -> argparse.ArgumentParser:
    epilog = textwrap.dedent("""\
    symbols:
      3j      j1 j2 j3 m1 m2 [m3]      Wigner 3j symbol, m3 = -m1-m2 by default
      cg      j1 m1 j2 m2 J [M]        Clebsch-Gordan <j1 m1; j2 m2 | J M>
      racahv  j1 j2 j3 m1 m2 [m3]      Racah V symbol
      6j      j1 j2 j3 j4 j5 j6        Wigner 6j symbol
      racahw  j1 j2 J j3 J12 J23       Racah W coefficient
      9j      j1 ... j9                Wigner 9j symbol, row by row
      delta   j1 j2 j3                 triangle coefficient

    examples:
      exactwigner 3j 1 1 2 1 -1
      exactwigner 6j 1/2 1 3/2 1 1/2 1 --float
      exactwigner 9j 1 2 3 1 3 2 2 3 4 --digits 40
    """)

    p = argparse.ArgumentParser(
        prog="exactwigner",
        description="Exact Wigner 3j/6j/9j symbols, Clebsch-Gordan and Racah coefficients",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("symbol", choices=sorted(COMMANDS), help="which coefficient to compute")
    p.add_argument("args", nargs="*", help="angular momenta (integers, n/2 or decimals)")
    p.add_argument("--float", action="store_true", help="Also print the value as a float")
    p.add_argument("--digits", type=int, default=None, help="Also print N significant digits (gmpy2 mpfr)")
    p.add_argument("--config", default=None, help="TOML settings file (default: $EXACTWIGNER_CONFIG)")
    p.add_argument("--debug", action="store_true", help="Show cache activity and timings")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")
    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except (DomainError, ConfigError) as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        debug = "--debug" in (argv if argv is not None else sys.argv)
        if debug:
            traceback.print_exc()
            return 1
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


def _main_impl(argv=None) -> int:
    colorama_init(autoreset=True)

    raw = list(sys.argv[1:] if argv is None else argv)
    parser = _build_parser()
    args = parser.parse_args(_protect_negative_fractions(raw))

    apply_settings(load_settings(args.config))
    rt = _rt_current()
    if args.debug:
        rt.debug = True

    cmd = COMMANDS[args.symbol]
    if len(args.args) not in cmd.arity:
        expected = " or ".join(str(n) for n in cmd.arity)
        raise DomainError(f"{args.symbol} takes {expected} arguments, got {len(args.args)}")

    values = [a.strip() for a in args.args]
    t0 = perf_counter()
    result = cmd.func(*values)
    elapsed = perf_counter() - t0

    shown = values + ["·"] * (max(cmd.arity) - len(values))
    label = cmd.layout.format(*shown)

    numeric = None
    if args.digits is not None:
        if args.digits < 1:
            raise DomainError("--digits must be positive")
        bits = math.ceil(args.digits * math.log2(10)) + 8
        numeric = format(result.to_mpfr(bits), f".{args.digits}g")
    elif args.float:
        numeric = repr(float(result))

    print(format_value(label, result, numeric))

    if rt.debug:
        print(f"[debug] computed in {format_duration(elapsed)}", file=sys.stderr)
        for kind in KINDS:
            st = cache_stats(kind)
            print(
                f"[debug] cache {kind}: {st.size}/{st.maxsize} entries, {st.hits} hits, {st.misses} misses",
                file=sys.stderr,
            )
    return 0


if __name__ == "__main__":
    sys.exit(main())
