"""Branch creation and listing."""

import logging
from typing import List, Tuple

from twig.errors import BranchExistsError, UnknownRevision

logger = logging.getLogger(__name__)


def create_branch(repo, name: str) -> str:
    """
    Create a branch at the current HEAD commit.

    Returns:
        The commit the branch points to

    Raises:
        UnknownRevision: If HEAD has no commit yet
        BranchExistsError: If the branch already exists
    """
    head = repo.refs.resolve_head()
    if head is None:
        raise UnknownRevision(repo.refs.current_branch() or 'HEAD')

    if name in repo.refs.list_branches():
        raise BranchExistsError(name)

    repo.refs.update(f'refs/heads/{name}', head)
    logger.info("Created branch %s at %s", name, head)
    return head


def list_branches(repo) -> List[Tuple[str, bool]]:
    """
    List branches.

    Returns:
        (name, is_current) tuples sorted by name
    """
    current = repo.refs.current_branch()
    return [(name, name == current) for name in repo.refs.list_branches()]
