"""Branch command - create or list branches."""

import click
from colorama import Fore, Style
from twig.core.repository import Repository
from twig.errors import TwigError
from twig.operations.branch import create_branch, list_branches
from twig.cli.output import success, error


@click.command('branch')
@click.argument('name', required=False)
def branch_cmd(name):
    """
    Create a branch at HEAD, or list branches.

    Examples:
        twig branch                  # List branches
        twig branch feature          # Create branch 'feature'
    """
    try:
        repo = Repository.discover()
        if name:
            commit_hash = create_branch(repo, name)
            click.echo(success(f"Created branch '{name}' at {commit_hash[:7]}"))
            return
        branches = list_branches(repo)
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    for branch, current in branches:
        if current:
            click.echo(f"* {Fore.GREEN}{branch}{Style.RESET_ALL}")
        else:
            click.echo(f"  {branch}")
