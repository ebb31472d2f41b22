from __future__ import annotations

import io
import os

import pytest

from pathpad import ui


def _exists(p: str) -> bool:
    return not p.endswith("missing")


@pytest.mark.unit
class TestPrintEntries:
    def test_default_mode_badges(self):
        out = io.StringIO()
        ui.print_entries(["/a", "/missing", "/a"], exists=_exists, out=out)
        text = out.getvalue()
        assert text.splitlines()[0] == "PATH:"
        assert "1. [OK]   /a" in text
        assert "2. [MISS] /missing" in text
        assert "3. [OK]   /a (duplicate)" in text

    def test_default_mode_empty(self):
        out = io.StringIO()
        ui.print_entries([], out=out, title="MANPATH")
        assert out.getvalue().splitlines() == ["MANPATH:", "  <empty>"]

    def test_lines_mode(self):
        out = io.StringIO()
        ui.print_entries(["/a", "/b"], mode="lines", out=out)
        assert out.getvalue() == "/a\n/b\n"

    def test_single_mode(self):
        out = io.StringIO()
        ui.print_entries(["/a", "/b"], mode="single", out=out)
        assert out.getvalue() == "/a" + os.pathsep + "/b\n"

    def test_markup_in_paths_is_printed_literally(self):
        out = io.StringIO()
        ui.print_entries(["/opt/[bold]x"], exists=lambda _: True, out=out)
        assert "/opt/[bold]x" in out.getvalue()


def test_diff_lines():
    assert ui.diff_lines(["/a", "/b", "/gone"], ["/b", "/a", "/new"]) == [
        "  /b",
        "  /a",
        "+ /new",
        "- /gone",
    ]


def test_print_revisions():
    out = io.StringIO()
    ui.print_revisions(["/new", "/old"], out=out)
    assert out.getvalue().splitlines() == ["1 /new", "2 /old"]

    out = io.StringIO()
    ui.print_revisions([], out=out)
    assert out.getvalue().strip() == "<no history>"


def test_quiet_hides_everything_but_errors(capsys):
    ui.set_quiet(True)
    try:
        ui.log_info("info-msg")
        ui.log_warning("warn-msg")
        ui.log_success("ok-msg")
        ui.log_error("err-msg")
    finally:
        ui.set_quiet(False)
    err = capsys.readouterr().err
    assert "info-msg" not in err
    assert "warn-msg" not in err
    assert "ok-msg" not in err
    assert "error: err-msg" in err
