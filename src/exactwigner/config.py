from __future__ import annotations

import os
import tomllib as toml  # py311+
from dataclasses import dataclass
from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path
from typing import Any

from exactwigner.cache import KINDS, set_cache_capacity
from exactwigner.runtime import APPLY, debug

ENV_CONFIG = "EXACTWIGNER_CONFIG"


class ConfigError(Exception):
    pass


@dataclass
class Settings:
    """
    Wrap the full TOML dict.
    .as_dict() feeds runtime.apply().
    """
    data: dict[str, Any]
    name: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- Paths -----------------------------------------------------------------

def default_settings_path() -> Path:
    """Packaged defaults: exactwigner/data/default.toml."""
    ref = pkg_files("exactwigner") / "data" / "default.toml"
    # materialize to a real path (needed for zip/egg resources)
    with as_file(ref) as real:
        return Path(real)


def user_settings_path() -> Path | None:
    env = os.environ.get(ENV_CONFIG)
    if env:
        return Path(env).expanduser().resolve()
    return None


# --- I/O -------------------------------------------------------------------

def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except FileNotFoundError:
        raise ConfigError(f"settings file {path} not found.") from None
    except Exception as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", str(e))
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        # No traceback chaining
        raise ConfigError(f"reading {path.name}: {msg}{loc}.") from None


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def _section(data: dict[str, Any], name: str, path: Path) -> dict[str, Any]:
    section = data.get(name, {}) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"{path.name}: [{name}] must be a table.")
    return section


def _check_int(section: dict[str, Any], name: str, key: str, lowest: int, path: Path) -> None:
    if key not in section:
        return
    v = section[key]
    if isinstance(v, bool) or not isinstance(v, int) or v < lowest:
        raise ConfigError(f"{path.name}: {name}.{key} must be an integer >= {lowest}, got {v!r}.")


def _check_settings(data: dict[str, Any], path: Path) -> None:
    cache = _section(data, "CACHE", path)
    for kind in KINDS:
        _check_int(cache, "CACHE", f"MAX_{kind.upper()}", 0, path)

    _check_int(_section(data, "OUTPUT", path), "OUTPUT", "PRECISION", 2, path)

    formatting = _section(data, "FORMATTING", path)
    for key in ("NUM_ABBR_HEAD", "NUM_ABBR_TAIL", "NUM_ABBR_THRESHOLD"):
        _check_int(formatting, "FORMATTING", key, 1, path)

    behaviour = _section(data, "BEHAVIOUR", path)
    if "DEBUG" in behaviour and not isinstance(behaviour["DEBUG"], bool):
        raise ConfigError(f"{path.name}: BEHAVIOUR.DEBUG must be true or false, got {behaviour['DEBUG']!r}.")


# --- Public API ------------------------------------------------------------

def load_settings(path: str | Path | None = None) -> Settings:
    """
    Load the packaged defaults, overlaid with a user TOML file.

    The user file is `path` if given, else $EXACTWIGNER_CONFIG if set.
    """
    default_path = default_settings_path()
    data = _load_toml(default_path)
    source = default_path

    user = Path(path).expanduser().resolve() if path else user_settings_path()
    if user is not None:
        raw = _load_toml(user)
        _check_settings(raw, user)
        data = _merge(data, raw)
        source = user

    return Settings(data=data, name=source.stem, _source=source)


def apply_settings(settings: Settings) -> None:
    """Install settings into the current runtime and resize the caches to match."""
    APPLY(settings)
    caches = settings.data.get("CACHE", {}) or {}
    for kind in KINDS:
        size = caches.get(f"MAX_{kind.upper()}")
        if size is not None:
            set_cache_capacity(kind, int(size))
    debug(f"settings applied from {settings._source}")
