"""Core functionality for Twig.

This module contains the core data structures:
- Objects (Blob, Tree, Commit)
- Repository management and the object store
- Index/staging area
- Reference management
- Configuration management
- Hashing utilities

For snapshots, diff, removal and commits, see twig.operations
For cloning, see twig.remote
"""

from twig.core.objects import TwigObject, Blob, Tree, TreeEntry, Commit
from twig.core.repository import Repository
from twig.core.hash import hash_object, hash_blob_content, hash_file
from twig.core.index import Index, IndexEntry
from twig.core.refs import RefManager
from twig.core.config import Config, get_config

__all__ = [
    'TwigObject',
    'Blob',
    'Tree',
    'TreeEntry',
    'Commit',
    'Repository',
    'Index',
    'IndexEntry',
    'RefManager',
    'Config',
    'get_config',
    'hash_object',
    'hash_blob_content',
    'hash_file',
]
