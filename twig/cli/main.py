"""Main CLI entry point for Twig."""

import logging

import click
from colorama import init

from twig import __version__
from twig.cli.commands import (init_cmd, add_cmd, commit_cmd, rm_cmd, diff_cmd,
                               branch_cmd, clone_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)

LOG_FORMAT = '%(asctime)s %(name)s %(levelname)s: %(message)s'


@click.group()
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Log engine activity to stderr')
def cli(verbose):
    """Twig - a small content-addressed version control system."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)


cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(commit_cmd)
cli.add_command(rm_cmd)
cli.add_command(diff_cmd)
cli.add_command(branch_cmd)
cli.add_command(clone_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
