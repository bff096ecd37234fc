from __future__ import annotations

import sys

import typer

from space.output.console import ConsoleProtocol, Style
from space.services.release.selector import ChooseOne


def is_interactive_terminal() -> bool:
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def confirm(prompt: str) -> bool:
    return typer.confirm(prompt, default=True)


def make_chooser(console: ConsoleProtocol) -> ChooseOne:
    """Build a chooser that lists options and reads a 1-based pick."""

    def choose_one(prompt: str, options: list[str]) -> str:
        if not options:
            raise ValueError("chooser requires at least one option")

        console.header(prompt)
        for i, option in enumerate(options, start=1):
            console.print(f"{i:2}. {option}", Style.DIM)

        while True:
            raw = typer.prompt("Pick a number", default="1")
            try:
                idx = int(raw)
            except ValueError:
                console.error("invalid number")
                continue
            if idx < 1 or idx > len(options):
                console.error("out of range")
                continue
            return options[idx - 1]

    return choose_one
