import logging
from pathlib import Path

import pytest

from lispy import config
from lispy.errors import LispyConfigError


def test_defaults():
    assert config.get_int_bits() == 64
    assert config.get_overflow_policy() == "error"
    assert config.get_max_depth() == 256
    assert config.get_history_file() == Path.home() / ".lispy_history"
    assert config.get_log_level() == logging.WARNING
    assert config.get_color_options() is None


def test_values_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("LISPY_INT_BITS", " 32 ")
    monkeypatch.setenv("LISPY_OVERFLOW", "WRAP")
    monkeypatch.setenv("LISPY_MAX_DEPTH", "10")
    monkeypatch.setenv("LISPY_HISTORY_FILE", str(tmp_path / "hist"))
    monkeypatch.setenv("LISPY_LOG_LEVEL", "debug")
    assert config.get_int_bits() == 32
    assert config.get_overflow_policy() == "wrap"
    assert config.get_max_depth() == 10
    assert config.get_history_file() == tmp_path / "hist"
    assert config.get_log_level() == logging.DEBUG


@pytest.mark.parametrize(
    "var,value",
    [
        ("LISPY_INT_BITS", "sixty-four"),
        ("LISPY_INT_BITS", "1"),
        ("LISPY_MAX_DEPTH", "0"),
        ("LISPY_OVERFLOW", "explode"),
        ("LISPY_LOG_LEVEL", "LOUD"),
    ]
)
def test_invalid_values(monkeypatch, var, value):
    monkeypatch.setenv(var, value)
    getter = {
        "LISPY_INT_BITS": config.get_int_bits,
        "LISPY_MAX_DEPTH": config.get_max_depth,
        "LISPY_OVERFLOW": config.get_overflow_policy,
        "LISPY_LOG_LEVEL": config.get_log_level,
    }[var]
    with pytest.raises(LispyConfigError):
        getter()


def test_max_depth_is_bounded_by_recursion_limit(monkeypatch):
    assert config.get_max_depth() <= config.max_safe_depth()
    monkeypatch.setenv("LISPY_MAX_DEPTH", str(config.max_safe_depth()))
    assert config.get_max_depth() == config.max_safe_depth()
    monkeypatch.setenv("LISPY_MAX_DEPTH", str(config.max_safe_depth() + 1))
    with pytest.raises(LispyConfigError, match="at most"):
        config.get_max_depth()


def test_max_depth_far_beyond_recursion_limit_is_rejected(monkeypatch):
    monkeypatch.setenv("LISPY_MAX_DEPTH", "5000")
    with pytest.raises(LispyConfigError):
        config.get_max_depth()
