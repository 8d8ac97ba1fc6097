"""Staging files into the index."""

import logging
from pathlib import Path
from typing import List, Optional

from twig.core.repository import METADATA_DIR
from twig.errors import PathspecMismatch
from .snapshot import working_tree_paths

logger = logging.getLogger(__name__)


def resolve_pathspec(repo, pathspec: str, cwd: Optional[Path] = None) -> str:
    """
    Turn a pathspec given relative to cwd into a repository-relative path.

    Returns:
        Slash-separated path, or '' for the repository root

    Raises:
        PathspecMismatch: If the path lies outside the work tree
    """
    work_tree = repo.require_work_tree()
    base = Path(cwd) if cwd is not None else Path.cwd()
    target = (base / pathspec).resolve()

    try:
        rel_path = target.relative_to(work_tree).as_posix()
    except ValueError:
        raise PathspecMismatch(pathspec)

    if rel_path.split('/')[0] == METADATA_DIR:
        raise PathspecMismatch(rel_path)

    return '' if rel_path == '.' else rel_path


def add(repo, pathspec: str, add_untracked: bool = True, cwd: Optional[Path] = None) -> List[str]:
    """
    Stage every file matching a file or directory pathspec.

    Args:
        repo: Repository instance
        pathspec: File or directory, relative to cwd
        add_untracked: Also stage files the index doesn't track yet
        cwd: Directory the pathspec is relative to (defaults to process cwd)

    Returns:
        Staged paths in path order

    Raises:
        PathspecMismatch: If nothing under the pathspec can be staged
    """
    rel_path = resolve_pathspec(repo, pathspec, cwd)
    target = repo.work_tree / rel_path

    if target.is_file():
        candidates = [rel_path]
    elif target.is_dir():
        prefix = f"{rel_path}/" if rel_path else ''
        candidates = [f"{prefix}{path}" for path in working_tree_paths(target)]
    else:
        candidates = []

    index = repo.open_index()
    if not add_untracked:
        candidates = [path for path in candidates if path in index]

    if not candidates:
        raise PathspecMismatch(rel_path or '.')

    for path in candidates:
        index.add_file(repo, path)

    index.write(repo.index_file)
    logger.info("Staged %d file(s) under %s", len(candidates), rel_path or '.')
    return sorted(candidates)
