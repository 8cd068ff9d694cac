from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("exactwigner")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .cache import cache_capacity, cache_stats, clear_caches, set_cache_capacity
from .config import apply_settings, load_settings
from .core import triangle_ok, wigner3j_core, wigner6j_core, wigner9j_core
from .rationalroot import RationalRoot, signed_root, split_square
from .runtime import APPLY, CFG
from .symbols import (
    clebschgordan,
    racah_v,
    racah_w,
    triangle_coefficient,
    wigner3j,
    wigner6j,
    wigner9j,
)
from .utility import DomainError, halfint

__all__ = [
    "APPLY",
    "CFG",
    "DomainError",
    "RationalRoot",
    "__version__",
    "apply_settings",
    "cache_capacity",
    "cache_stats",
    "clear_caches",
    "clebschgordan",
    "halfint",
    "load_settings",
    "racah_v",
    "racah_w",
    "set_cache_capacity",
    "signed_root",
    "split_square",
    "triangle_coefficient",
    "triangle_ok",
    "wigner3j",
    "wigner3j_core",
    "wigner6j",
    "wigner6j_core",
    "wigner9j",
    "wigner9j_core",
]
