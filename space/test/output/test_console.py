"""Tests for space.output.console module."""

from __future__ import annotations

import pytest

from space.output.console import MockConsole, RichConsole, Style


class TestMockConsole:
    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("hello")
        assert console.outputs[0].message == "hello"
        assert console.outputs[0].style == Style.DEFAULT

    def test_raw_lines_keep_order_and_text(self) -> None:
        console = MockConsole()
        console.raw("[step 1] building")
        console.info("between")
        console.raw("  indented [/not-markup]")
        assert console.raw_lines == ["[step 1] building", "  indented [/not-markup]"]

    def test_error_and_success_helpers(self) -> None:
        console = MockConsole()
        console.error("broken")
        console.success("fine")
        assert console.has_error()
        assert console.has_success()
        assert console.messages == ["error: broken", "OK fine"]

    def test_find_and_count(self) -> None:
        console = MockConsole()
        console.print("a needle", Style.DIM)
        console.print("hay", Style.DIM)
        assert len(console.find("needle")) == 1
        assert console.count(Style.DIM) == 2

    def test_clear(self) -> None:
        console = MockConsole()
        console.newline()
        console.clear()
        assert console.outputs == []


class TestRichConsole:
    def test_raw_does_not_interpret_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.raw("[bold]literal[/bold]")
        out = capsys.readouterr().out
        assert "[bold]literal[/bold]" in out

    def test_error_prefix(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.error("nope")
        assert "error: nope" in capsys.readouterr().out
