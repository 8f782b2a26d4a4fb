"""Tests for the output system.

Covers:
- stdout vs stderr discipline
- Quiet mode suppression rules
- Verbose mode debug output
- NO_COLOR / TERM=dumb color disabling
- Global instance management
"""

from __future__ import annotations

import pytest

from kubepass import output as output_module
from kubepass.output import (
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture(autouse=True)
def _reset_global_output():
    """Ensure the global output instance is reset between tests."""
    reset_output()
    yield
    reset_output()


# ------------------------------------------------------------------ #
# stdout vs stderr discipline
# ------------------------------------------------------------------ #


class TestStdoutStderrDiscipline:
    """Data goes to stdout, diagnostics go to stderr."""

    def test_print_data_goes_to_stdout(self, capfd):
        mgr = OutputManager(no_color=True)
        mgr.print_data('{"kind": "ExecCredential"}')
        captured = capfd.readouterr()
        assert captured.out == '{"kind": "ExecCredential"}\n'
        assert captured.err == ""

    def test_info_goes_to_stderr(self, capfd):
        OutputManager(no_color=True).info("some info")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "some info" in captured.err

    def test_error_goes_to_stderr(self, capfd):
        OutputManager(no_color=True).error("something broke")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "Error: something broke" in captured.err

    def test_success_goes_to_stderr(self, capfd):
        OutputManager(no_color=True).success("done")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "done" in captured.err

    def test_rich_error_goes_to_stderr(self, capfd, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        OutputManager().error("missing [bold]markup[/bold]")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "missing [bold]markup[/bold]" in captured.err


# ------------------------------------------------------------------ #
# Quiet / verbose
# ------------------------------------------------------------------ #


class TestQuietVerbose:
    def test_quiet_suppresses_info_and_success(self, capfd):
        mgr = OutputManager(no_color=True, quiet=True)
        mgr.info("hidden")
        mgr.success("hidden too")
        assert capfd.readouterr().err == ""

    def test_quiet_keeps_errors(self, capfd):
        OutputManager(no_color=True, quiet=True).error("shown")
        assert "Error: shown" in capfd.readouterr().err

    def test_debug_hidden_by_default(self, capfd):
        OutputManager(no_color=True).debug("trace")
        assert capfd.readouterr().err == ""

    def test_debug_shown_when_verbose(self, capfd):
        mgr = OutputManager(no_color=True, verbose=True)
        assert mgr.is_verbose
        mgr.debug("trace")
        assert "[debug] trace" in capfd.readouterr().err

    def test_flags_exposed(self):
        mgr = OutputManager(quiet=True)
        assert mgr.is_quiet
        assert not mgr.is_verbose


# ------------------------------------------------------------------ #
# Colour control
# ------------------------------------------------------------------ #


class TestColorDisabling:
    def test_no_color_env(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color()

    def test_term_dumb(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color()

    def test_color_enabled(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert not _should_disable_color()


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_lazy_default(self):
        assert isinstance(get_output(), OutputManager)
        assert get_output() is get_output()

    def test_set_and_reset(self):
        mgr = OutputManager(quiet=True)
        set_output(mgr)
        assert get_output() is mgr
        reset_output()
        assert get_output() is not mgr

    def test_convenience_functions_delegate(self, capfd):
        set_output(OutputManager(no_color=True, verbose=True))
        output_module.print_data("data")
        output_module.info("info-msg")
        output_module.error("error-msg")
        output_module.success("ok-msg")
        output_module.debug("debug-msg")
        captured = capfd.readouterr()
        assert captured.out == "data\n"
        for text in ["info-msg", "error-msg", "ok-msg", "debug-msg"]:
            assert text in captured.err
