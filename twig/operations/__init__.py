"""Operations module for high-level Twig operations.

This module contains the business logic for:
- Snapshot resolution (working tree, index, committed trees)
- Path-level diff computation
- Removal of tracked files
- Staging, committing and branching
"""

from twig.operations.snapshot import SnapshotKind, SnapshotResolver, SnapshotSource
from twig.operations.diff import DiffEngine, DiffRecord, DiffStatus, format_name_status
from twig.operations.remove import RemovalEngine
from twig.operations.stage import add
from twig.operations.commit import commit
from twig.operations.branch import create_branch, list_branches

__all__ = [
    'SnapshotKind', 'SnapshotResolver', 'SnapshotSource',
    'DiffEngine', 'DiffRecord', 'DiffStatus', 'format_name_status',
    'RemovalEngine',
    'add', 'commit', 'create_branch', 'list_branches',
]
