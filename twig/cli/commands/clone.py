"""Clone command - clone a repository into a new directory."""

import click
from twig.errors import TwigError
from twig.remote.clone import clone
from twig.cli.output import success, error


@click.command('clone')
@click.argument('source', required=False)
@click.argument('target', required=False)
@click.option('--bare', is_flag=True, help='Create a bare repository')
def clone_cmd(source, target, bare):
    """
    Clone a repository into a new directory.

    Copies every object and branch of SOURCE into TARGET, records SOURCE
    as the 'origin' remote and checks out the default branch. TARGET may
    exist only if it is empty.

    Options:
        --bare    Create a bare repository (no working directory)
                  A bare clone can itself be cloned

    Examples:
        twig clone ../project project-copy
        twig clone --bare ../project shared
    """
    try:
        message = clone(source, target, bare=bare)
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    click.echo(success(message))
