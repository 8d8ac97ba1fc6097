"""Commit command - create a commit from staged changes."""

import click
from twig.core.repository import Repository
from twig.errors import TwigError
from twig.operations.commit import commit
from twig.cli.output import success, error


@click.command('commit')
@click.option('-m', '--message', required=True, help='Commit message')
@click.option('--author', help='Author name and email (format: "Name <email>")')
def commit_cmd(message, author):
    """
    Record changes to the repository.

    Creates a commit from the staged changes in the index and advances
    the current branch.

    Author identity comes from --author, TWIG_USER_NAME / TWIG_USER_EMAIL,
    the repository config or ~/.twigconfig, in that order.

    Examples:
        twig commit -m "Initial commit"
        twig commit -m "Add feature" --author "Jane <jane@example.com>"
    """
    try:
        repo = Repository.discover()
        summary = commit(repo, message, author=author)
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    click.echo(success(summary))
