"""Removal of tracked files from the index and the working tree."""

import logging
from pathlib import Path
from typing import List, Optional

from twig.errors import PathspecMismatch, RecursiveRemovalRequired, UncommittedChanges, UnsupportedOption
from .diff import traversal_key
from .snapshot import SnapshotResolver, SnapshotSource
from .stage import resolve_pathspec

logger = logging.getLogger(__name__)


class RemovalEngine:
    """
    Removes tracked paths, refusing to throw away work.

    Every matched path is validated before anything is deleted, so a
    failing removal leaves the index and the working tree untouched.
    """

    def __init__(self, repo):
        self.repo = repo
        self.resolver = SnapshotResolver(repo)

    def matching_paths(self, index, rel_path: str) -> List[str]:
        """Index paths equal to rel_path or inside it as a directory."""
        if not rel_path:
            return sorted(index.entries, key=traversal_key)

        prefix = f"{rel_path}/"
        return sorted((path for path in index.entries
                       if path == rel_path or path.startswith(prefix)), key=traversal_key)

    def changed_paths(self, index, paths: List[str]) -> List[str]:
        """
        Paths whose removal would discard work.

        A path still on disk is changed when its staged content differs from
        HEAD (staged but never committed) or its disk content differs from
        the staged content (modified after staging). Files already gone
        from disk have nothing left to lose.
        """
        head = self.repo.refs.resolve_head()
        committed = self.resolver.snapshot(SnapshotSource.committed_tree(head)) if head else {}
        on_disk = self.resolver.snapshot(SnapshotSource.working_tree(), paths)

        changed = []
        for path in paths:
            if path not in on_disk:
                continue
            staged = index.get_entry(path).sha1
            if staged != committed.get(path) or on_disk[path] != staged:
                changed.append(path)
        return changed

    def remove(self, pathspec: str, recursive: bool = False, force: bool = False,
               cwd: Optional[Path] = None) -> List[str]:
        """
        Remove matching paths from the index and the working tree.

        Args:
            pathspec: File or directory, relative to cwd
            recursive: Allow removing a directory
            force: Not supported; always rejected
            cwd: Directory the pathspec is relative to (defaults to process cwd)

        Returns:
            Removed paths in traversal order

        Raises:
            BareRepositoryWorkTreeOperation: In a bare repository
            UnsupportedOption: If force is requested
            PathspecMismatch: If no index entries match
            RecursiveRemovalRequired: If pathspec is a directory and recursive is off
            UncommittedChanges: If any matched path has staged or unstaged changes
        """
        work_tree = self.repo.require_work_tree()

        if force:
            raise UnsupportedOption()

        rel_path = resolve_pathspec(self.repo, pathspec, cwd)
        index = self.repo.open_index()

        paths = self.matching_paths(index, rel_path)
        if not paths:
            raise PathspecMismatch(rel_path or '.')

        if (work_tree / rel_path).is_dir() and not recursive:
            raise RecursiveRemovalRequired(rel_path or '.')

        changed = self.changed_paths(index, paths)
        if changed:
            raise UncommittedChanges(changed)

        for path in paths:
            file_path = work_tree / path
            if file_path.is_file():
                file_path.unlink()
            index.remove_entry(path)

        index.write(self.repo.index_file)
        logger.info("Removed %d path(s) under %s", len(paths), rel_path or '.')
        return paths

