"""Add command - stage files for commit."""

import click
from twig.core.repository import Repository
from twig.errors import TwigError
from twig.operations.stage import add
from twig.cli.output import success, error, info


@click.command('add')
@click.argument('paths', nargs=-1, required=True)
@click.option('--add/--no-add', 'add_untracked', default=True,
              help='Also stage files that are not tracked yet (default on)')
def add_cmd(paths, add_untracked):
    """
    Add file contents to the staging area.

    Stage files for the next commit. Modified files must be added
    again to stage the new changes. A directory stages every file below it.

    Examples:
        twig add file.txt
        twig add src
        twig add --no-add .          # Restage tracked files only
    """
    try:
        repo = Repository.discover()
        staged = []
        for path in paths:
            staged.extend(add(repo, path, add_untracked=add_untracked))
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    click.echo(success(f"Added {len(staged)} file(s) to staging area"))
    for path in staged:
        click.echo(info(f"  {path}"))
