"""Reference management for Twig."""

import logging
from typing import Dict, List, Optional

from twig.errors import UnknownRevision
from .hash import is_hash_prefix
from .objects import Commit

logger = logging.getLogger(__name__)

SYMBOLIC_PREFIX = 'ref: '
HEADS_PREFIX = 'refs/heads/'


class RefManager:
    """
    Manages references (branches, remote-tracking refs, tags, HEAD).

    Handles:
    - Symbolic references (HEAD pointing to branch)
    - Direct references (detached HEAD)
    - Branch references (refs/heads/*)
    - Remote-tracking references (refs/remotes/<remote>/*)
    - Reference resolution, including abbreviated commit hashes
    """

    def __init__(self, repo):
        self.repo = repo
        self.twig_dir = repo.twig_dir
        self.refs_dir = repo.refs_dir
        self.heads_dir = repo.heads_dir
        self.head_file = repo.head_file

    def _ref_path(self, ref_name: str):
        return self.twig_dir / ref_name

    def _inside_refs(self, ref_path) -> bool:
        try:
            ref_path.resolve().relative_to(self.refs_dir.resolve())
        except ValueError:
            return False
        return True

    def _candidates(self, name: str) -> List[str]:
        if name.startswith('refs/'):
            return [name]
        return [f'refs/heads/{name}', f'refs/tags/{name}', f'refs/remotes/{name}']

    def read_ref(self, ref_name: str) -> Optional[str]:
        """
        Read a reference file by its full name.

        Args:
            ref_name: Full reference name (e.g., 'refs/heads/master')

        Returns:
            Commit hash or None if the reference doesn't exist
        """
        ref_path = self._ref_path(ref_name)
        if not self._inside_refs(ref_path) or not ref_path.is_file():
            return None
        try:
            return ref_path.read_bytes().decode().strip() or None
        except UnicodeDecodeError:
            return None

    def resolve(self, name: str) -> Optional[str]:
        """
        Resolve a reference name to a commit hash.

        HEAD follows exactly one level of indirection. Other names are
        tried as a full ref path, then as a branch, tag and remote-tracking
        ref.

        Args:
            name: Reference name (e.g., 'HEAD', 'master', 'origin/master')

        Returns:
            Commit hash or None if the name doesn't resolve
        """
        if name == 'HEAD':
            return self.resolve_head()

        for candidate in self._candidates(name):
            value = self.read_ref(candidate)
            if value is not None:
                return value

        return None

    def resolve_reference(self, ref: str) -> Optional[str]:
        """
        Resolve any reference (branch, tag, HEAD, hash) to a commit hash.

        Args:
            ref: Reference string (e.g., 'HEAD', 'master', commit hash prefix)

        Returns:
            Commit hash or None if the reference can't be resolved
        """
        commit_hash = self.resolve(ref)
        if commit_hash is not None:
            return commit_hash

        prefix = ref.lower()
        if not is_hash_prefix(prefix):
            return None

        matches = [h for h in self.repo.find_objects(prefix)
                   if isinstance(self.repo.read_object(h), Commit)]
        if len(matches) == 1:
            return matches[0]
        return None

    def update(self, ref_name: str, commit_hash: str) -> None:
        """
        Point a reference at a commit, creating it if needed.

        Args:
            ref_name: Branch name or full reference name
            commit_hash: Commit hash to point to

        Raises:
            UnknownRevision: If commit_hash is not a stored commit
        """
        self.repo.read_commit(commit_hash)

        if not ref_name.startswith('refs/'):
            ref_name = HEADS_PREFIX + ref_name

        ref_path = self._ref_path(ref_name)
        ref_path.parent.mkdir(parents=True, exist_ok=True)
        ref_path.write_text(commit_hash + '\n')
        logger.debug("Updated %s to %s", ref_name, commit_hash)

    def delete(self, ref_name: str) -> bool:
        """
        Delete a reference.

        Returns:
            True if deleted, False if not found
        """
        for candidate in self._candidates(ref_name):
            ref_path = self._ref_path(candidate)
            if self._inside_refs(ref_path) and ref_path.is_file():
                ref_path.unlink()
                logger.debug("Deleted %s", candidate)
                return True
        return False

    def head_target(self) -> str:
        """Raw content of HEAD: 'ref: refs/heads/<branch>' or a hash."""
        return self.head_file.read_text().strip()

    def resolve_head(self) -> Optional[str]:
        """
        Resolve HEAD to a commit hash.

        Returns:
            Commit hash or None if HEAD is unborn
        """
        if not self.head_file.exists():
            return None

        content = self.head_target()
        if content.startswith(SYMBOLIC_PREFIX):
            return self.read_ref(content[len(SYMBOLIC_PREFIX):])

        return content or None

    def current_branch(self) -> Optional[str]:
        """
        Get the current branch name.

        Returns:
            Branch name or None if in detached HEAD state
        """
        if not self.head_file.exists():
            return None

        content = self.head_target()
        if content.startswith(SYMBOLIC_PREFIX + HEADS_PREFIX):
            return content[len(SYMBOLIC_PREFIX + HEADS_PREFIX):]

        return None

    def is_detached_head(self) -> bool:
        if not self.head_file.exists():
            return False
        return not self.head_target().startswith(SYMBOLIC_PREFIX)

    def set_symbolic_head(self, branch: str) -> None:
        """Attach HEAD to a branch, which may not exist yet."""
        if not branch.startswith(HEADS_PREFIX):
            branch = HEADS_PREFIX + branch
        self.head_file.write_text(f'{SYMBOLIC_PREFIX}{branch}\n')

    def set_detached_head(self, commit_hash: str) -> None:
        """Point HEAD directly at a commit."""
        self.repo.read_commit(commit_hash)
        self.head_file.write_text(commit_hash + '\n')

    def update_head(self, commit_hash: str) -> None:
        """Advance whatever HEAD points to: the current branch, or HEAD itself when detached."""
        branch = self.current_branch()
        if branch is None:
            self.set_detached_head(commit_hash)
        else:
            self.update(HEADS_PREFIX + branch, commit_hash)

    def list_branches(self) -> List[str]:
        """
        List all branches.

        Returns:
            Sorted list of branch names
        """
        if not self.heads_dir.exists():
            return []

        return sorted(branch_file.relative_to(self.heads_dir).as_posix()
                      for branch_file in self.heads_dir.rglob('*') if branch_file.is_file())

    def all_refs(self) -> Dict[str, str]:
        """
        Every reference file under refs/.

        Returns:
            Dict mapping full reference names to commit hashes
        """
        if not self.refs_dir.exists():
            return {}

        refs = {}
        for ref_file in sorted(self.refs_dir.rglob('*')):
            if ref_file.is_file():
                ref_name = ref_file.relative_to(self.twig_dir).as_posix()
                value = ref_file.read_text().strip()
                if value:
                    refs[ref_name] = value
        return refs

    def require(self, ref: str) -> str:
        """
        Resolve a reference to an existing commit.

        Raises:
            UnknownRevision: If the reference doesn't name a stored commit
        """
        commit_hash = self.resolve_reference(ref)
        if commit_hash is None:
            raise UnknownRevision(ref)
        self.repo.read_commit(commit_hash, name=ref)
        return commit_hash
