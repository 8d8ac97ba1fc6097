"""Remote module for repository replication.

Currently supports cloning repositories on the local file system.
"""

from twig.remote.clone import CloneEngine, clone

__all__ = [
    'CloneEngine',
    'clone',
]
