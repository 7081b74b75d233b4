"""Root CLI group for optmark with global flags and command registration."""

from __future__ import annotations

import click

from optmark import __version__
from optmark.commands import register_commands
from optmark.commands._context import AppContext
from optmark.config.settings import OptmarkSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="optmark")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--schema", "schema_metadata", is_flag=True, help="Emit schema metadata attributes.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    schema_metadata: bool,
    config_path: str | None,
) -> None:
    """optmark — resolve #[nullable] / #[not_required] into serde attributes."""
    ctx.ensure_object(dict)
    overrides = {"schema_metadata": {"enabled": True}} if schema_metadata else {}
    settings = OptmarkSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        **overrides,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
