"""Diff engine for comparing snapshots path by path."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .snapshot import Snapshot, SnapshotResolver, SnapshotSource

logger = logging.getLogger(__name__)


class DiffStatus(Enum):
    ADDED = 'A'
    MODIFIED = 'M'
    DELETED = 'D'


@dataclass(frozen=True)
class DiffRecord:
    """Status of a single path between two snapshots."""
    status: DiffStatus
    path: str

    def __str__(self) -> str:
        return f"{self.status.value} {self.path}"


def traversal_key(path: str) -> Tuple[Tuple[int, str], ...]:
    """
    Sort key reproducing a depth-first walk of the directory structure.

    Within a directory, files sort before subdirectories and each group is
    alphabetic, so ``b/x`` comes before ``b/a/y``.
    """
    parts = path.split('/')
    return tuple((1, part) for part in parts[:-1]) + ((0, parts[-1]),)


def compare_snapshots(old: Snapshot, new: Snapshot) -> List[DiffRecord]:
    """
    Compute per-path status records between two snapshots.

    Args:
        old: Dict of {path: blob_hash} on the left-hand side
        new: Dict of {path: blob_hash} on the right-hand side

    Returns:
        Records in traversal order; unchanged paths are omitted
    """
    records = []

    for path in sorted(set(old) | set(new), key=traversal_key):
        old_hash = old.get(path)
        new_hash = new.get(path)

        if old_hash == new_hash:
            continue

        if old_hash is None:
            status = DiffStatus.ADDED
        elif new_hash is None:
            status = DiffStatus.DELETED
        else:
            status = DiffStatus.MODIFIED

        records.append(DiffRecord(status, path))

    return records


class DiffEngine:
    """
    Engine for computing path-level diffs between snapshots.

    Supports:
    - Index vs working tree (unstaged changes)
    - Commit vs working tree
    - Commit vs commit
    - Any other pairing of snapshot sources
    """

    def __init__(self, repo):
        self.repo = repo
        self.resolver = SnapshotResolver(repo)

    def diff(self, old: SnapshotSource, new: SnapshotSource) -> List[DiffRecord]:
        """
        Compare two snapshot sources.

        A working-tree side is only hashed over the paths that the other
        side or the index tracks, so untracked files never show up.

        Returns:
            List of DiffRecord objects
        """
        old_files = self._load(old, new)
        new_files = self._load(new, old)
        records = compare_snapshots(old_files, new_files)
        logger.debug("Diff %s..%s: %d change(s)", old.kind.value, new.kind.value, len(records))
        return records

    def _load(self, source: SnapshotSource, other: SnapshotSource) -> Snapshot:
        if not source.is_working_tree:
            return self.resolver.snapshot(source)

        tracked = set(self.resolver.snapshot(SnapshotSource.index()))
        if not other.is_working_tree:
            tracked.update(self.resolver.snapshot(other))
        return self.resolver.snapshot(source, sorted(tracked, key=traversal_key))

    def diff_refs(self, ref1: Optional[str] = None, ref2: Optional[str] = None) -> List[DiffRecord]:
        """
        Diff as the ``diff`` command sees it.

        - no refs: index vs working tree
        - one ref: that commit vs working tree
        - two refs: commit vs commit

        Args:
            ref1: First reference or hash; validated before ref2
            ref2: Second reference or hash

        Raises:
            BareRepositoryWorkTreeOperation: In a bare repository
            UnknownRevision: If a reference can't be resolved
        """
        self.repo.require_work_tree()

        old = SnapshotSource.index() if ref1 is None else self.resolver.parse(ref1)
        new = SnapshotSource.working_tree() if ref2 is None else self.resolver.parse(ref2)

        return self.diff(old, new)


def format_name_status(records: List[DiffRecord]) -> str:
    """
    Render records one per line as ``<status> <path>``.

    An empty diff renders as a single empty line.
    """
    if not records:
        return '\n'
    return ''.join(f"{record}\n" for record in records)
