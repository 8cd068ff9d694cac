# tests/test_config.py
"""
Settings: packaged defaults, user overrides and their effect on the runtime.

Run: pytest -v tests/test_config.py
"""

import pytest

from exactwigner import runtime
from exactwigner.cache import cache_capacity
from exactwigner.config import (
    ENV_CONFIG,
    ConfigError,
    apply_settings,
    default_settings_path,
    load_settings,
)
from exactwigner.runtime import CFG


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch):
    monkeypatch.delenv(ENV_CONFIG, raising=False)


def _write(tmp_path, text, name="user.toml"):
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return p


def test_packaged_defaults():
    assert default_settings_path().is_file()
    s = load_settings()
    assert s.name == "default"
    assert s.data["CACHE"]["MAX_3J"] == 1_000_000
    assert s.data["OUTPUT"]["PRECISION"] == 128
    assert s.data["BEHAVIOUR"]["DEBUG"] is False
    assert s.data["FORMATTING"]["NUM_ABBR_THRESHOLD"] == 35


def test_user_file_overlays_defaults(tmp_path):
    p = _write(tmp_path, "[CACHE]\nMAX_6J = 10\n\n[OUTPUT]\nPRECISION = 256\n")
    s = load_settings(p)
    assert s.name == "user"
    assert s.data["CACHE"]["MAX_6J"] == 10
    assert s.data["CACHE"]["MAX_3J"] == 1_000_000
    assert s.data["OUTPUT"]["PRECISION"] == 256


def test_env_variable_points_at_user_file(tmp_path, monkeypatch):
    p = _write(tmp_path, "[CACHE]\nMAX_9J = 3\n", name="env.toml")
    monkeypatch.setenv(ENV_CONFIG, str(p))
    s = load_settings()
    assert s.name == "env"
    assert s.data["CACHE"]["MAX_9J"] == 3


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_settings(tmp_path / "nope.toml")


def test_malformed_toml_reports_location(tmp_path):
    p = _write(tmp_path, "[CACHE]\nMAX_3J = = 5\n")
    with pytest.raises(ConfigError, match="line 2"):
        load_settings(p)


@pytest.mark.parametrize("value", ["-1", "1.5", "true", '"big"'])
def test_invalid_cache_size(tmp_path, value):
    p = _write(tmp_path, f"[CACHE]\nMAX_3J = {value}\n")
    with pytest.raises(ConfigError, match="MAX_3J"):
        load_settings(p)


@pytest.mark.parametrize(
    "text,key",
    [
        ("[OUTPUT]\nPRECISION = 0\n", "OUTPUT.PRECISION"),
        ("[OUTPUT]\nPRECISION = \"high\"\n", "OUTPUT.PRECISION"),
        ("[OUTPUT]\nPRECISION = 64.0\n", "OUTPUT.PRECISION"),
        ("[FORMATTING]\nNUM_ABBR_HEAD = -3\n", "FORMATTING.NUM_ABBR_HEAD"),
        ("[BEHAVIOUR]\nDEBUG = 1\n", "BEHAVIOUR.DEBUG"),
        ("OUTPUT = 5\n", r"\[OUTPUT\]"),
    ],
)
def test_invalid_setting_values(tmp_path, text, key):
    p = _write(tmp_path, text)
    with pytest.raises(ConfigError, match=key):
        load_settings(p)


def test_apply_settings(tmp_path):
    p = _write(tmp_path, "[CACHE]\nMAX_3J = 5\nMAX_9J = 0\n\n[OUTPUT]\nPRECISION = 64\n")
    apply_settings(load_settings(p))
    assert cache_capacity("3j") == 5
    assert cache_capacity("6j") == 1_000_000
    assert cache_capacity("9j") == 0
    assert CFG("OUTPUT.PRECISION") == 64
    assert runtime.current().profile_name == "user"


def test_debug_flag_from_settings(tmp_path, capsys):
    p = _write(tmp_path, "[BEHAVIOUR]\nDEBUG = true\n")
    apply_settings(load_settings(p))
    assert runtime.current().debug is True
    err = capsys.readouterr().err
    assert "[debug]" in err
    assert "settings applied" in err


def test_cfg_dotted_lookup():
    apply_settings(load_settings())
    assert CFG("CACHE.MAX_6J") == 1_000_000
    assert CFG("CACHE.NOPE", "fallback") == "fallback"
    assert CFG("", 7) == 7
