"""
wink — CLI entrypoint.

Usage:
    wink help
    wink [-d] [-v] [-e] [-p] <code> [args...]
    python -m wink.main -dv word report.docx
"""

from __future__ import annotations

import sys

import click

from wink import __version__
from wink.core import context
from wink.core.observability.logging_config import setup_from_env

NOT_WINDOWS = (
    "Runs only under Windows and Windows Subsystem for Linux (WSL). "
    f"Define {context.WSL_ENV_VAR} environment variable to override."
)


class WinkCommand(click.Command):
    """Report command line errors with the usage listing and exit 1."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            if isinstance(e, click.NoSuchOption):
                message = f"Unrecognized command line option: {e.option_name}"
            else:
                message = e.format_message()

            from wink.core.use_cases.invoke import load_registry
            from wink.ui.cli.usage import render_usage

            setup_from_env()
            registry, _ = load_registry()
            render_usage(registry, ctx.info_name or "wink", message)
            ctx.exit(1)


@click.command(
    name="wink",
    cls=WinkCommand,
    context_settings={
        "allow_interspersed_args": False,
        "help_option_names": ["--help"],
    },
)
@click.version_option(version=__version__, prog_name="wink")
@click.option("--dry-run", "-d", is_flag=True, help="Do not execute the command.")
@click.option("--verbose", "-v", is_flag=True, help="Print the command line.")
@click.option("--export", "-e", is_flag=True, help="Export configuration JSON.")
@click.option("--pretty", "-p", is_flag=True, help="Pretty-print JSON (with -e).")
@click.option("-h", "show_usage", is_flag=True, help="List all command codes.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.argument("code", required=False)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli(
    ctx: click.Context,
    dry_run: bool,
    verbose: bool,
    export: bool,
    pretty: bool,
    show_usage: bool,
    debug: bool,
    code: str | None,
    args: tuple[str, ...],
) -> None:
    """wink — access Windows and WSL features by command code."""
    ctx.ensure_object(dict)

    # ── Logging setup (once, at process start) ──────────────────
    setup_from_env(debug)

    from wink.core.use_cases.invoke import invoke_code, load_registry
    from wink.ui.cli.usage import render_usage

    registry, error = load_registry()
    if error:
        click.secho(f"❌ {error}", fg="red", err=True)
        sys.exit(1)
    assert registry is not None

    cmd_name = ctx.info_name or "wink"

    if show_usage or (code or "").lower() == "help":
        render_usage(registry, cmd_name, "Help requested")
        return

    if not context.is_windows_or_wsl():
        render_usage(registry, cmd_name, NOT_WINDOWS)
        sys.exit(1)

    if pretty and not export:
        render_usage(registry, cmd_name, "-p invalid without -e")
        sys.exit(1)

    if not code and not (export or dry_run):
        render_usage(registry, cmd_name, "No command code specified")
        sys.exit(1)

    code = (code or "").lower()
    invocable = registry.lookup(code) if code else None

    if invocable is not None:
        if export:
            click.echo(invocable.model_dump_json(indent=2 if pretty else None))

        result = invoke_code(
            code,
            args,
            dry_run=dry_run,
            verbose=verbose,
            registry=registry,
            builder=ctx.obj.get("builder"),
        )
        if result.error:
            click.secho(f"❌ {result.error}", fg="red", err=True)
            sys.exit(1)
        return

    if export:
        catalog = registry.to_category_list()
        click.echo(catalog.model_dump_json(indent=2 if pretty else None))

    if export or dry_run:
        return

    render_usage(registry, cmd_name, f"Command not recognized: {code}")
    sys.exit(2)


if __name__ == "__main__":
    cli()
