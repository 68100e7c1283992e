"""
Usage listing — what ``wink help`` prints.

Thin presentation over CatalogRegistry: a header with the three
launcher idioms, then every category sorted by name with its command
codes sorted and highlighted.
"""

from __future__ import annotations

import click

from wink.core import context
from wink.core.services.catalog import CatalogRegistry

RULE = "-" * 77

# Code → (launcher line, [(example args, explanation), ...])
_IDIOMS: list[tuple[str, str, list[tuple[str, str]]]] = [
    ("EXP", "explorer.exe", [
        ("<file.ext>", "Set/open default application for extension"),
        ("<shell:sendto>", "Invoke command code (replace <shell:sendto>)"),
    ]),
    ("CMD", "cmd.exe /c", [
        ("<cmd> [args]", "Invoke Windows console command line"),
        ("echo %PATH%", "Display Windows environment variable"),
    ]),
    ("BASH", "bash.exe -c", [
        ("/path [args]", "Invoke shell command line"),
        ("echo '$USER'", "Display WSL environment variable"),
    ]),
]


def _code(text: str, nl: bool = False) -> None:
    click.secho(text, fg="bright_cyan", bold=True, nl=nl)


def render_usage(registry: CatalogRegistry | None, cmd_name: str, message: str) -> None:
    """Print the usage header, the command code tables, and the options."""
    click.echo()
    click.echo(RULE)
    click.echo(f"{cmd_name:>12} : access Windows and WSL features : {message}")
    click.echo(RULE)

    for code, launcher, examples in _IDIOMS:
        click.echo()
        click.echo(RULE)
        click.echo(f"{cmd_name:>12} ", nl=False)
        _code(code)
        click.echo(f" {'':<16}{launcher}")
        click.echo(RULE)
        for example, explanation in examples:
            click.echo(f"{cmd_name:>12} ", nl=False)
            _code(code)
            click.echo(f" {example:<16}{explanation}")
        click.echo(RULE)

    click.echo()
    click.echo(RULE)
    click.echo(f"{cmd_name:>12} ", nl=False)
    _code("CODE")
    click.echo(" [args]        See command code tables below")
    click.echo(RULE)

    count = 0
    if registry is not None:
        for category in registry.sorted_categories():
            click.echo(f"\n{category.name}\n{RULE}")
            for inv in category.invocables:
                _code(f"{inv.code.upper():>31}")
                click.echo(f" {inv.label}")
                count += 1

    click.echo(f"\n{cmd_name:>12} : {count} known command codes\n")
    click.echo(f"{cmd_name:>12} : access Windows features : {message}\n")
    click.echo(f"{cmd_name:>12} [opts] <", nl=False)
    _code("CODE")
    click.echo("> [arguments]")
    click.echo("            -d dry (do not execute)")
    click.echo("            -e export (configuration JSON)")
    click.echo("            -p pretty-print (for use with -e)")
    click.echo("            -v verbose (print command line)\n")
    click.echo(f"{cmd_name} ", nl=False)
    _code("HELP")
    click.echo(" :                  display command usage information")
    click.echo(f"{cmd_name} ", nl=False)
    _code("HELP")
    if context.is_windows():
        click.echo(' | find /i "text" :: identify command code matching text')
    else:
        click.echo(' | grep -i "text" # identify command code matching text')
