"""Tests for progress and diagnostic output."""

import pytest

import noderef_log
from noderef_log import echo, error, set_verbosity, warn


@pytest.fixture(autouse=True)
def restore_verbosity():
    yield
    set_verbosity(False)


def test_echo_silent_by_default(capsys):
    """Test progress output is suppressed unless verbose."""
    set_verbosity(False)
    echo("progress")

    assert capsys.readouterr().out == ""


def test_echo_when_verbose(capsys):
    """Test progress output appears once verbosity is enabled."""
    set_verbosity(True)
    echo("progress", 3)

    assert noderef_log.VERBOSE is True
    assert capsys.readouterr().out == "progress 3\n"


def test_warn_and_error_go_to_stderr(capsys):
    """Test diagnostics are written to stderr regardless of verbosity."""
    warn("odd", "input")
    error("bad input")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "Warning: odd input\nbad input\n"
