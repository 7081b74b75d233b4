"""Rich Console factory and theme for optmark output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

OPT_THEME = Theme(
    {
        "opt.ok": "bold green",
        "opt.error": "bold red",
        "opt.warning": "bold yellow",
        "opt.op": "bold cyan",
        "opt.key": "dim",
        "opt.field": "bold",
        "opt.attr": "blue",
        "opt.case.plain_optional": "dim",
        "opt.case.nullable": "green",
        "opt.case.not_required": "yellow",
        "opt.case.nullable_and_not_required": "magenta",
        "opt.case.skipped": "dim",
        "opt.case.conflict": "red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=OPT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_case(case: str) -> str:
    """Return the theme style for a semantic case, or empty string."""
    style = f"opt.case.{case}"
    return style if style in OPT_THEME.styles else ""
