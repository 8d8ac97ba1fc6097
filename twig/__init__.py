"""Twig - a small content-addressed version control system."""

__version__ = '0.1.0'

from twig.core.repository import Repository
from twig.core.objects import TwigObject, Blob, Tree, Commit
from twig.errors import TwigError

__all__ = [
    'Repository',
    'TwigObject',
    'Blob',
    'Tree',
    'Commit',
    'TwigError',
]
