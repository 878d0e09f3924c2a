"""CSV template command."""

from pathlib import Path

import click
from balanceit.domain.csv_templates import (
    TEMPLATE_FILENAMES,
    generate_bank_template,
    generate_template,
)


@click.command("template")
@click.argument("kind", type=click.Choice(list(TEMPLATE_FILENAMES)))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Write to this file; use --output - for stdout",
)
def write_template(kind: str, output: str | None):
    """Write an example CSV file for an import.

    KIND is tb (trial balance), gl (general ledger) or bank (bank statement).
    Without --output the file is written to the current directory under
    its default name.
    """
    content = generate_bank_template() if kind == "bank" else generate_template(kind)

    if output == "-":
        click.echo(content)
        return

    path = Path(output or TEMPLATE_FILENAMES[kind])
    path.write_text(content + "\n", encoding="utf-8")
    click.echo(f"Wrote {kind} template to {path}")


def register_commands(cli):
    """Register template command with main CLI."""
    cli.add_command(write_template)
