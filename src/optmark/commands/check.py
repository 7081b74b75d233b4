"""Command: report marker diagnostics without rewriting."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from optmark.commands._base import OptCommand

if TYPE_CHECKING:
    from optmark.commands._context import AppContext


@click.command(
    cls=OptCommand,
    examples="""\
  optmark check item.json
  optmark -q check item.json
  optmark --json check item.json""",
)
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strict", is_flag=True, help="Exit with code 1 when any issue is found.")
@click.pass_obj
def check(app: AppContext, file: Path, strict: bool) -> None:
    """Check the markers of the type in FILE and list every problem."""
    result = app.service.check_file(file)
    app.emit(result)
    if strict and result.data.get("count", 0):
        raise SystemExit(1)
