"""Command: rewrite marker attributes into serde attributes."""

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
  optmark transform item.json
  optmark --schema transform item.json
  optmark --json transform item.json > item.resolved.json""",
)
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def transform(app: AppContext, file: Path) -> None:
    """Resolve #[nullable] / #[not_required] for the type in FILE.

    FILE is a JSON object with "name", "kind" ("struct" or "enum") and
    "fields" (or "variants"); each field has "name", "type" and a list of
    "attributes" written as attribute text, e.g. "#[serde(default)]".
    """
    app.emit(app.service.transform_file(file))
