"""Custom account group commands."""

import click
from balanceit.cli.error_handling import handle_domain_error


@click.group()
def group_group():
    """Manage custom account groups."""
    pass


def _find_group_id(ledger, group: str) -> str | None:
    for g in ledger.list_custom_groups():
        if group in (g.id, g.name):
            return g.id
    return None


@group_group.command("list")
@click.pass_context
def list_groups(ctx):
    """List custom groups and how many accounts each holds."""
    ledger = ctx.obj["ledger"]

    groups = ledger.list_custom_groups()
    if not groups:
        click.echo("No custom groups found.")
        return

    counts: dict[str, int] = {}
    for acc in ledger.list_accounts():
        if acc.custom_group_id:
            counts[acc.custom_group_id] = counts.get(acc.custom_group_id, 0) + 1

    click.echo("\nCustom groups:")
    click.echo("-" * 60)
    for g in groups:
        click.echo(f"{g.name:30s} | {counts.get(g.id, 0):3d} accounts | ID: {g.id}")


@group_group.command("create")
@click.argument("name")
@click.pass_context
def create_group(ctx, name: str):
    """Create a custom group."""
    ledger = ctx.obj["ledger"]
    group = ledger.add_custom_group(name)
    click.echo(f"Created group '{group.name}' (ID: {group.id})")


@group_group.command("rename")
@click.argument("group")
@click.argument("new_name")
@click.pass_context
def rename_group(ctx, group: str, new_name: str):
    """Rename a custom group. GROUP can be a group name or ID."""
    ledger = ctx.obj["ledger"]
    group_id = _find_group_id(ledger, group) or group

    try:
        renamed = ledger.rename_custom_group(group_id, new_name)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Renamed group to '{renamed.name}'")


@group_group.command("delete")
@click.argument("group")
@click.pass_context
def delete_group(ctx, group: str):
    """Delete a custom group.

    Accounts in the group become ungrouped.
    """
    ledger = ctx.obj["ledger"]
    group_id = _find_group_id(ledger, group)
    if group_id is None:
        click.echo(f"Error: Custom group '{group}' not found", err=True)
        ctx.exit(1)

    ledger.delete_custom_group(group_id)
    click.echo(f"Deleted group '{group}'")


def register_commands(cli):
    """Register group commands with main CLI."""
    cli.add_command(group_group, name="group")
