# tests/test_cli.py
"""
Command line front end.

Run: pytest -v tests/test_cli.py
"""

import re

import pytest

from exactwigner import cli
from exactwigner.cache import cache_capacity
from exactwigner.config import ENV_CONFIG


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch):
    monkeypatch.delenv(ENV_CONFIG, raising=False)


_ANSI = re.compile(r"\x1b\[[0-9;]*m")


def run(capsys, *argv):
    rc = cli.main(list(argv))
    out, err = capsys.readouterr()
    return rc, _ANSI.sub("", out), _ANSI.sub("", err)


@pytest.mark.parametrize(
    "argv,expected",
    [
        (["3j", "1", "1", "2", "1", "-1"], "√(1/30)"),
        (["3j", "1", "1", "2", "1", "-1", "0"], "√(1/30)"),
        (["3j", "1/2", "1/2", "1", "1/2", "-1/2"], "√(1/6)"),
        (["3j", "2", "2", "2", "0", "0"], "-√(2/35)"),
        (["cg", "1", "1", "1", "-1", "2"], "√(1/6)"),
        (["6j", "1", "1", "1", "1", "1", "1"], "1/6"),
        (["6j", "1/2", "1", "3/2", "1", "1/2", "1"], "-1/6"),
        (["racahw", "1", "1", "1", "1", "1", "1"], "1/6"),
        (["9j", "1", "2", "3", "1", "3", "2", "2", "3", "4"], "2/105 √(2/7)"),
        (["delta", "1", "1", "1"], "1/2 √(1/6)"),
        (["3j", "1", "1", "5", "0", "0"], "= "),
    ],
)
def test_symbols(capsys, argv, expected):
    rc, out, _ = run(capsys, *argv)
    assert rc == 0
    assert expected in out


def test_label_shows_arguments(capsys):
    rc, out, _ = run(capsys, "6j", "1", "2", "1", "1", "2", "1")
    assert rc == 0
    assert "6j{1 2 1; 1 2 1}" in out
    assert "1/30" in out


def test_zero_result(capsys):
    rc, out, _ = run(capsys, "3j", "1", "1", "1", "0", "0")
    assert rc == 0
    assert out.rstrip().endswith("0")


def test_float_and_digits(capsys):
    rc, out, _ = run(capsys, "6j", "1/2", "1", "3/2", "1", "1/2", "1", "--float")
    assert rc == 0
    assert "≈ -0.16666666666666" in out

    rc, out, _ = run(capsys, "3j", "1", "1", "2", "1", "-1", "--digits", "30")
    assert rc == 0
    # 1/sqrt(30)
    assert "≈ 0.182574185835055371152323260" in out


def test_decimal_arguments(capsys):
    rc, out, _ = run(capsys, "3j", "0.5", "0.5", "1", "0.5", "-0.5")
    assert rc == 0
    assert "√(1/6)" in out


@pytest.mark.parametrize(
    "argv,message",
    [
        (["3j", "1", "1", "1", "2", "0"], "invalid combination"),
        (["3j", "1", "1"], "takes 5 or 6 arguments"),
        (["9j", "1", "2"], "takes 9 arguments"),
        (["6j", "1/3", "1", "1", "1", "1", "1"], "not a half-integer"),
        (["3j", "1", "1", "2", "1", "-1", "--digits", "0"], "--digits"),
    ],
)
def test_user_errors(capsys, argv, message):
    rc, _, err = run(capsys, *argv)
    assert rc == 2
    assert "Error:" in err
    assert message in err


def test_unknown_symbol(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["12j", "1"])
    assert exc.value.code == 2


def test_config_option(tmp_path, capsys):
    p = tmp_path / "small.toml"
    p.write_text("[CACHE]\nMAX_3J = 4\n", encoding="utf-8")
    rc, out, _ = run(capsys, "3j", "1", "1", "2", "1", "-1", "--config", str(p))
    assert rc == 0
    assert cache_capacity("3j") == 4


def test_bad_config_file(tmp_path, capsys):
    p = tmp_path / "broken.toml"
    p.write_text("[CACHE\n", encoding="utf-8")
    rc, _, err = run(capsys, "3j", "1", "1", "2", "1", "-1", "--config", str(p))
    assert rc == 2
    assert "broken.toml" in err


def test_debug_output(capsys):
    rc, _, err = run(capsys, "9j", "1", "2", "3", "1", "3", "2", "2", "3", "4", "--debug")
    assert rc == 0
    assert "[debug] computed in" in err
    assert "cache 9j: 1/" in err


def test_unexpected_error_is_reported(capsys, monkeypatch):
    def boom(*args):
        raise RuntimeError("kaput")

    monkeypatch.setitem(cli.COMMANDS, "delta", cli.Command(boom, (3,), "Δ({0} {1} {2})"))
    rc, _, err = run(capsys, "delta", "1", "1", "1")
    assert rc == 1
    assert "RuntimeError: kaput" in err
    assert "--debug" in err
