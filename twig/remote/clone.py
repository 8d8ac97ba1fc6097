"""Repository replication: clone a local repository into a new location."""

import logging
import os
import shutil
from collections import deque
from pathlib import Path
from typing import Dict, Iterable, Optional

from twig.core.repository import DEFAULT_BRANCH, Repository
from twig.errors import CloneUsageError, SourceNotARepository, TargetNotEmpty

logger = logging.getLogger(__name__)

HEADS_PREFIX = 'refs/heads/'
TAGS_PREFIX = 'refs/tags/'


class CloneEngine:
    """
    Clones local repositories, bare or not.

    Objects are copied as stored (already compressed and content
    addressed), so copying one the target already has is a no-op.
    """

    def __init__(self, remote_name: str = 'origin'):
        self.remote_name = remote_name

    def clone(self, source_path: Optional[str], target_path: Optional[str], bare: bool = False) -> str:
        """
        Clone source_path into target_path.

        Args:
            source_path: Path of the repository to clone
            target_path: Destination; created if missing, must be empty if present
            bare: Create a bare repository (no work tree, no index)

        Returns:
            Confirmation message naming the target

        Raises:
            CloneUsageError: If either path is missing
            SourceNotARepository: If source_path holds no repository
            TargetNotEmpty: If target_path exists and has content
        """
        if not source_path or not target_path:
            raise CloneUsageError()

        source = Repository.load(source_path)
        if source is None:
            raise SourceNotARepository(source_path)

        target_dir = Path(target_path)
        if target_dir.exists() and (not target_dir.is_dir() or any(target_dir.iterdir())):
            raise TargetNotEmpty(target_path)

        created = not target_dir.exists()
        target_dir.mkdir(parents=True, exist_ok=True)

        try:
            self._replicate(source, target_dir, bare)
        except Exception:
            logger.warning("Clone into %s failed, discarding partial copy", target_dir)
            self._discard(target_dir, created)
            raise

        return f"Cloning into {target_path}"

    def _replicate(self, source: Repository, target_dir: Path, bare: bool) -> Repository:
        target = Repository(str(target_dir), bare=bare).init()

        source_refs = source.refs.all_refs()
        tips = list(source_refs.values())
        head = source.refs.resolve_head()
        if head:
            tips.append(head)

        copied = self.copy_objects(source, target, tips)
        logger.info("Copied %d object(s) from %s", copied, source.root)

        default_branch = self._copy_refs(source, target, source_refs, bare)

        url = os.path.relpath(source.root, target.root)
        target.config.add_remote(self.remote_name, url)

        tip = target.refs.resolve_head()
        if not bare and tip is not None:
            self.checkout(target, tip)

        logger.info("Cloned %s into %s (branch %s)", source.root, target.root, default_branch)
        return target

    def copy_objects(self, source: Repository, target: Repository, tips: Iterable[str]) -> int:
        """
        Copy every object reachable from tips.

        Returns:
            Number of objects newly written to target
        """
        seen = set()
        queue = deque(tips)
        copied = 0

        while queue:
            obj_hash = queue.popleft()
            if obj_hash in seen:
                continue
            seen.add(obj_hash)

            if target.write_raw(obj_hash, source.read_raw(obj_hash)):
                copied += 1

            queue.extend(source.read_object(obj_hash).references())

        return copied

    def _copy_refs(self, source: Repository, target: Repository,
                   source_refs: Dict[str, str], bare: bool) -> str:
        """
        Copy branches and tags, then point HEAD at the default branch.

        Bare targets mirror the source branches; other targets keep them as
        remote-tracking refs and get a local default branch only, at the
        source branch tip. A detached source HEAD stays detached in the target.

        Returns:
            The default branch name
        """
        for ref_name, commit_hash in source_refs.items():
            if ref_name.startswith(HEADS_PREFIX):
                branch = ref_name[len(HEADS_PREFIX):]
                if bare:
                    target.refs.update(ref_name, commit_hash)
                else:
                    target.refs.update(f'refs/remotes/{self.remote_name}/{branch}', commit_hash)
            elif ref_name.startswith(TAGS_PREFIX):
                target.refs.update(ref_name, commit_hash)

        default_branch = source.refs.current_branch() or DEFAULT_BRANCH
        tip = source.refs.resolve_head()

        if not bare:
            branch_tip = source_refs.get(HEADS_PREFIX + default_branch, tip)
            if branch_tip is not None:
                target.refs.update(HEADS_PREFIX + default_branch, branch_tip)

        if source.refs.is_detached_head() and tip is not None:
            target.refs.set_detached_head(tip)
        else:
            target.refs.set_symbolic_head(default_branch)

        return default_branch

    def checkout(self, repo: Repository, commit_hash: str) -> None:
        """Write a commit's tree into an empty work tree and index it."""
        commit = repo.read_commit(commit_hash)
        index = repo.open_index()

        self._restore_tree(repo, commit.tree, repo.work_tree, index, '')

        index.write(repo.index_file)

    def _restore_tree(self, repo: Repository, tree_hash: str, path: Path, index, prefix: str) -> None:
        """Recursively restore tree to working directory and stage each file."""
        for entry in repo.read_tree(tree_hash).entries:
            entry_path = path / entry.name
            rel_path = f"{prefix}{entry.name}"

            if entry.is_tree:
                entry_path.mkdir(exist_ok=True)
                self._restore_tree(repo, entry.hash, entry_path, index, f"{rel_path}/")
            else:
                entry_path.write_bytes(repo.read_object(entry.hash).data)
                entry_path.chmod(int(entry.mode, 8) & 0o777)
                index.add_file(repo, rel_path)

    def _discard(self, target_dir: Path, created: bool) -> None:
        if created:
            shutil.rmtree(target_dir, ignore_errors=True)
            return

        for item in target_dir.iterdir():
            if item.is_dir() and not item.is_symlink():
                shutil.rmtree(item, ignore_errors=True)
            else:
                item.unlink()


def clone(source_path: Optional[str], target_path: Optional[str], bare: bool = False) -> str:
    """Clone with the default 'origin' remote name."""
    return CloneEngine().clone(source_path, target_path, bare=bare)
