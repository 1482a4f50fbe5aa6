"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- format_document in JSON, plain and file modes
- print_table in JSON and plain modes
- Global instance management
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from introspec import output as output_module
from introspec.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


DOCUMENT = {
    "title": "Store",
    "resources": [
        {
            "type_name": "GetPet",
            "verbs": ["GET"],
            "relative_path": "/pets/{id}",
            "category": "pets",
            "tags": ["pets", "read"],
        },
        {"type_name": "Ping"},
    ],
}


# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("introspec.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("introspec.output._is_tty", lambda: True)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("TERM", raising=False)


# ------------------------------------------------------------------ #
# OutputFormat resolution
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        assert OutputManager().format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty):
        assert OutputManager().format == OutputFormat.RICH

    def test_auto_resolves_to_plain_when_no_color(self, tty):
        assert OutputManager(no_color=True).format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, tty):
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDisabling:
    def test_no_color_env_any_value(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb_disables_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# stdout / stderr discipline
# ------------------------------------------------------------------ #


class TestStdoutStderrDiscipline:
    def test_print_data_goes_to_stdout(self, capfd, non_tty):
        OutputManager(no_color=True).print_data("hello")
        captured = capfd.readouterr()
        assert captured.out == "hello\n"
        assert captured.err == ""

    @pytest.mark.parametrize("method", ["info", "success", "warning", "error", "suggest"])
    def test_diagnostics_go_to_stderr(self, capfd, non_tty, method):
        getattr(OutputManager(no_color=True), method)("message")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "message" in captured.err

    def test_document_goes_to_stdout(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).format_document(DOCUMENT)
        captured = capfd.readouterr()
        assert json.loads(captured.out) == DOCUMENT
        assert captured.err == ""


class TestQuietAndVerbose:
    def test_quiet_suppresses_info(self, capfd, non_tty):
        OutputManager(no_color=True, quiet=True).info("hidden")
        assert capfd.readouterr().err == ""

    def test_quiet_keeps_warnings_and_errors(self, capfd, non_tty):
        output = OutputManager(no_color=True, quiet=True)
        output.warning("careful")
        output.error("broken")
        err = capfd.readouterr().err
        assert "Warning: careful" in err
        assert "Error: broken" in err

    def test_debug_hidden_by_default(self, capfd, non_tty):
        OutputManager(no_color=True).debug("details")
        assert capfd.readouterr().err == ""

    def test_debug_shown_with_verbose(self, capfd, non_tty):
        OutputManager(no_color=True, verbose=True).debug("details")
        assert "[debug] details" in capfd.readouterr().err


# ------------------------------------------------------------------ #
# Documents and tables
# ------------------------------------------------------------------ #


class TestFormatDocument:
    def test_plain_one_line_per_resource(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN).format_document(DOCUMENT)
        lines = capfd.readouterr().out.splitlines()
        assert lines == ["GetPet\tGET\t/pets/{id}\tpets\tpets,read", "Ping\t\t\t\t"]

    def test_output_file(self, capfd, non_tty, tmp_path: Path):
        target = tmp_path / "doc.json"
        OutputManager(format=OutputFormat.PLAIN, output_file=str(target)).format_document(DOCUMENT)
        assert capfd.readouterr().out == ""
        assert json.loads(target.read_text(encoding="utf-8")) == DOCUMENT


class TestPrintTable:
    def test_json_records(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).print_table(["key", "value"], [["a", "1"]])
        assert json.loads(capfd.readouterr().out) == [{"key": "a", "value": "1"}]

    def test_plain_tab_separated(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN).print_table(["key", "value"], [["a", "1"]])
        assert capfd.readouterr().out == "key\tvalue\na\t1\n"


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_get_output_creates_lazily(self, non_tty):
        reset_output()
        assert get_output() is get_output()

    def test_set_output(self, non_tty):
        custom = OutputManager(format=OutputFormat.JSON)
        set_output(custom)
        assert get_output() is custom

    def test_convenience_functions_delegate(self, capfd, non_tty):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        output_module.error("via module")
        assert "Error: via module" in capfd.readouterr().err
