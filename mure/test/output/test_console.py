"""Tests for mure.output.console module."""

from __future__ import annotations

import pytest

from mure.output.console import (
    ConsoleProtocol,
    MockConsole,
    OutputRecord,
    RichConsole,
    Style,
)


class TestStyle:
    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.DIM) == "dim"
        assert str(Style.DEFAULT) == "default"


class TestMockConsole:
    """Test MockConsole for testing purposes."""

    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("> Refreshing mure", Style.BOLD)
        assert console.outputs == [OutputRecord("> Refreshing mure", Style.BOLD)]

    def test_prefixes(self) -> None:
        console = MockConsole()
        console.success("cloned")
        console.error("fetch failed")
        assert console.messages == ["OK cloned", "error: fetch failed"]
        assert console.count(Style.ERROR) == 1

    def test_text_property(self) -> None:
        console = MockConsole()
        console.print("line1")
        console.print("line2")
        assert console.text == "line1\nline2"

    def test_has_error(self) -> None:
        console = MockConsole()
        assert console.has_error() is False
        console.error("oops")
        assert console.has_error() is True

    def test_find_and_count(self) -> None:
        console = MockConsole()
        console.print("Deleted branch a")
        console.print("Deleted branch b")
        console.print("Fast-forwarded")
        assert len(console.find("Deleted branch")) == 2
        assert console.count(Style.DEFAULT) == 3


class TestRichConsole:
    def test_prints_verbatim(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.print("[bold]not markup[/bold]")
        assert "[bold]not markup[/bold]" in capsys.readouterr().out

    def test_error_prefix(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().error("mure: fetch failed")
        assert "error: mure: fetch failed" in capsys.readouterr().out

    def test_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole(stderr=True).print("careful")
        captured = capsys.readouterr()
        assert "careful" in captured.err
        assert captured.out == ""

    def test_satisfies_protocol(self) -> None:
        def use_console(c: ConsoleProtocol) -> None:
            c.print("test")
            c.success("ok")
            c.error("err")

        use_console(RichConsole())
        use_console(MockConsole())
