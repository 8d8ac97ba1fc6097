"""Initialize a new Twig repository."""

import click
from pathlib import Path
from twig.core.repository import Repository
from twig.errors import TwigError
from twig.cli.output import success, error, info


@click.command('init')
@click.argument('path', default='.')
@click.option('--bare', is_flag=True, help='Create a bare repository')
def init_cmd(path, bare):
    """
    Initialize a new Twig repository.

    Creates a .twig directory with the necessary structure for version
    control. A bare repository keeps that structure directly in PATH and
    has no working tree.

    Examples:
        twig init                    # Initialize in current directory
        twig init my-project         # Initialize in my-project directory
        twig init --bare shared      # Create a bare repository
    """
    repo_path = Path(path).resolve()

    try:
        if not repo_path.exists():
            repo_path.mkdir(parents=True)
            click.echo(info(f"Created directory {repo_path}"))

        repo = Repository(str(repo_path), bare=bare).init()

    except PermissionError:
        click.echo(error(f"Permission denied: Cannot create repository at {path}"))
        raise click.Abort()
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    kind = 'bare ' if bare else 'empty '
    click.echo(success(f"Initialized {kind}Twig repository in {repo.twig_dir}"))
