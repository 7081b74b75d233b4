"""Custom Click command class with --examples support.

When ``--examples`` is passed, the command prints usage examples and a
sample definition FILE, then exits. This keeps ``--help`` concise while
making examples available on demand.
"""

from __future__ import annotations

from typing import Any

import click

# Every command reads the same JSON definition format.
SAMPLE_DEFINITION = """\
  {
    "name": "Patch",
    "kind": "struct",
    "fields": [
      {"name": "title", "type": "Option<String>", "attributes": ["#[not_required]"]},
      {"name": "due", "type": "Option<Option<u64>>",
       "attributes": ["#[nullable]", "#[not_required]"]}
    ]
  }"""


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        click.echo("\nSample FILE (item.json):\n")
        click.echo(SAMPLE_DEFINITION)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples and a sample definition file.",
        )
    )


class OptCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)
