"""Rm command - remove files from the working tree and the index."""

import click
from twig.core.repository import Repository
from twig.errors import TwigError
from twig.operations.remove import RemovalEngine
from twig.cli.output import success, error, info


@click.command('rm')
@click.argument('pathspec')
@click.option('-r', 'recursive', is_flag=True, help='Allow recursive removal of a directory')
@click.option('-f', '--force', is_flag=True, help='Not supported; always refused')
def rm_cmd(pathspec, recursive, force):
    """
    Remove files from the working tree and the index.

    Refuses to remove files with staged or unstaged changes, listing
    every such file. Files already deleted from disk are simply unstaged.

    Examples:
        twig rm file.txt
        twig rm -r src
    """
    try:
        repo = Repository.discover()
        removed = RemovalEngine(repo).remove(pathspec, recursive=recursive, force=force)
    except TwigError as e:
        click.echo(error(str(e).rstrip('\n')))
        raise click.Abort()

    click.echo(success(f"Removed {len(removed)} file(s)"))
    for path in removed:
        click.echo(info(f"  rm '{path}'"))
