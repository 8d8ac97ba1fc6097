"""Snapshot resolution: path -> blob hash views of the repository.

A snapshot is read from one of three sources:

- the working tree, hashed from disk on every request;
- the index, whose entries already carry hashes;
- a commit, whose tree is walked recursively.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, Optional

from twig.core.hash import hash_file
from twig.core.repository import METADATA_DIR

logger = logging.getLogger(__name__)

Snapshot = Dict[str, str]

WORKING_TREE_TOKEN = 'WORKING_TREE'
INDEX_TOKEN = 'INDEX'


class SnapshotKind(Enum):
    WORKING_TREE = 'working-tree'
    INDEX = 'index'
    COMMITTED_TREE = 'committed-tree'


@dataclass(frozen=True)
class SnapshotSource:
    """Where a snapshot comes from; ``commit`` is set only for committed trees."""
    kind: SnapshotKind
    commit: Optional[str] = None

    @classmethod
    def working_tree(cls) -> 'SnapshotSource':
        return cls(SnapshotKind.WORKING_TREE)

    @classmethod
    def index(cls) -> 'SnapshotSource':
        return cls(SnapshotKind.INDEX)

    @classmethod
    def committed_tree(cls, commit_hash: str) -> 'SnapshotSource':
        return cls(SnapshotKind.COMMITTED_TREE, commit_hash)

    @property
    def is_working_tree(self) -> bool:
        return self.kind is SnapshotKind.WORKING_TREE


class SnapshotResolver:
    """Turns tokens into snapshot sources and sources into snapshots."""

    def __init__(self, repo):
        self.repo = repo
        self._loaders = {
            SnapshotKind.WORKING_TREE: self._load_working_tree,
            SnapshotKind.INDEX: self._load_index,
            SnapshotKind.COMMITTED_TREE: self._load_committed_tree,
        }

    def parse(self, token: str) -> SnapshotSource:
        """
        Parse a snapshot token.

        Args:
            token: 'WORKING_TREE', 'INDEX', or a reference / hash prefix

        Returns:
            SnapshotSource for the token

        Raises:
            UnknownRevision: If a reference token doesn't name a stored commit
        """
        if token == WORKING_TREE_TOKEN:
            return SnapshotSource.working_tree()
        if token == INDEX_TOKEN:
            return SnapshotSource.index()
        return SnapshotSource.committed_tree(self.repo.refs.require(token))

    def snapshot(self, source: SnapshotSource, paths: Optional[Iterable[str]] = None) -> Snapshot:
        """
        Load a snapshot.

        Args:
            source: Snapshot source
            paths: For the working tree only, the paths to hash; every file
                is hashed when omitted

        Returns:
            Dict of {path: blob_hash}
        """
        return self._loaders[source.kind](source, paths)

    def _load_index(self, source: SnapshotSource, paths=None) -> Snapshot:
        return self.repo.open_index().hashes()

    def _load_committed_tree(self, source: SnapshotSource, paths=None) -> Snapshot:
        commit = self.repo.read_commit(source.commit)
        files = tree_files(self.repo, commit.tree)
        logger.debug("Loaded %d paths from commit %s", len(files), source.commit)
        return files

    def _load_working_tree(self, source: SnapshotSource, paths: Optional[Iterable[str]] = None) -> Snapshot:
        work_tree = self.repo.require_work_tree()

        if paths is None:
            paths = working_tree_paths(work_tree)

        files = {}
        for path in paths:
            file_path = work_tree / path
            if file_path.is_file():
                files[path] = hash_file(file_path)
        return files


def tree_files(repo, tree_hash: str, prefix: str = '') -> Snapshot:
    """Recursively collect {path: blob_hash} for every file below a tree."""
    files = {}
    for entry in repo.read_tree(tree_hash).entries:
        path = f"{prefix}{entry.name}"
        if entry.is_tree:
            files.update(tree_files(repo, entry.hash, f"{path}/"))
        else:
            files[path] = entry.hash
    return files


def working_tree_paths(work_tree: Path):
    """Slash-separated paths of every file in the work tree, skipping the metadata directory."""
    paths = []
    for item in sorted(work_tree.iterdir()):
        if item.name == METADATA_DIR:
            continue
        if item.is_dir() and not item.is_symlink():
            paths.extend(f"{item.name}/{sub}" for sub in working_tree_paths(item))
        elif item.is_file():
            paths.append(item.name)
    return paths
