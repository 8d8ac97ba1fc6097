"""Recording the index as a commit."""

import logging
from collections import defaultdict
from typing import Optional

from twig.core.objects import TREE_MODE, Commit, Tree, file_mode
from twig.errors import NothingToCommit

logger = logging.getLogger(__name__)


def build_tree_from_index(repo, index) -> str:
    """
    Build and store tree objects matching the index.

    Creates one tree per directory, writing the deepest directories first
    so every parent only refers to trees that are already stored.

    Returns:
        Hash of the root tree
    """
    trees = defaultdict(Tree)
    trees['']

    for entry in index.iter_entries():
        parts = entry.path.split('/')

        for i in range(1, len(parts)):
            trees['/'.join(parts[:i])]

        dir_path = '/'.join(parts[:-1])
        trees[dir_path].add_entry(file_mode(entry.mode), 'blob', entry.sha1, parts[-1])

    for dir_path in sorted(trees, key=lambda p: p.count('/'), reverse=True):
        if dir_path:
            tree_hash = repo.write_object(trees[dir_path])

            parent_path, _, dir_name = dir_path.rpartition('/')
            trees[parent_path].add_entry(TREE_MODE, 'tree', tree_hash, dir_name)

    return repo.write_object(trees[''])


def commit(repo, message: str, author: Optional[str] = None,
           timestamp: Optional[int] = None) -> str:
    """
    Create a commit from the index and advance HEAD.

    An empty index is allowed as long as the resulting tree differs from
    the current commit's, so removing the last file can be committed.

    Args:
        repo: Repository instance
        message: Commit message
        author: "Name <email>"; defaults to the configured identity
        timestamp: Unix timestamp (defaults to current time)

    Returns:
        Summary line: "[<branch> <short hash>] <message>"

    Raises:
        BareRepositoryWorkTreeOperation: In a bare repository
        NothingToCommit: If the index matches the HEAD tree
    """
    repo.require_work_tree()
    index = repo.open_index()

    tree_hash = build_tree_from_index(repo, index)
    parent = repo.refs.resolve_head()

    if parent is None and len(index) == 0:
        raise NothingToCommit("nothing to commit (create/copy files and use \"twig add\" to track)")
    if parent is not None and repo.read_commit(parent).tree == tree_hash:
        raise NothingToCommit("nothing to commit, working directory clean")

    author = author or repo.config.author()
    new_commit = Commit.create(
        tree_hash=tree_hash,
        parent_hashes=[parent] if parent else [],
        author=author,
        committer=author,
        message=message,
        timestamp=timestamp
    )
    commit_hash = repo.write_object(new_commit)
    repo.refs.update_head(commit_hash)

    branch = repo.refs.current_branch() or 'detached HEAD'
    logger.info("Committed %s on %s", commit_hash, branch)
    return f"[{branch} {commit_hash[:7]}] {message}"
