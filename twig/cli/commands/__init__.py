"""CLI commands for Twig."""

from twig.cli.commands.init import init_cmd
from twig.cli.commands.add import add_cmd
from twig.cli.commands.commit import commit_cmd
from twig.cli.commands.rm import rm_cmd
from twig.cli.commands.diff import diff_cmd
from twig.cli.commands.branch import branch_cmd
from twig.cli.commands.clone import clone_cmd

__all__ = ['init_cmd', 'add_cmd', 'commit_cmd', 'rm_cmd', 'diff_cmd',
           'branch_cmd', 'clone_cmd']
