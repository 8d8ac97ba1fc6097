"""Diff command - show changed paths between commits, index and working tree."""

import click
from colorama import Style
from twig.core.repository import Repository
from twig.errors import TwigError
from twig.operations.diff import DiffEngine, format_name_status
from twig.cli.output import error, status_color


@click.command('diff')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.argument('ref1', required=False)
@click.argument('ref2', required=False)
def diff_cmd(no_color, ref1, ref2):
    """
    Show changed paths as "<status> <path>" lines.

    With no arguments, compares the index with the working tree.
    With one reference, compares that commit with the working tree.
    With two references, compares the two commits.

    Status letters: A added, M modified, D deleted.

    Examples:
        twig diff                    # Unstaged changes
        twig diff HEAD               # Working tree vs HEAD
        twig diff master feature     # Changes between branches
    """
    try:
        repo = Repository.discover()
        records = DiffEngine(repo).diff_refs(ref1, ref2)
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    if no_color or not records:
        click.echo(format_name_status(records), nl=False)
        return

    for record in records:
        color = status_color(record.status.value)
        click.echo(f"{color}{record.status.value}{Style.RESET_ALL} {record.path}")
