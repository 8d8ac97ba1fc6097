"""Repository management and object storage for Twig."""

import logging
import zlib
from pathlib import Path
from typing import List, Optional

from twig.errors import (BareRepositoryWorkTreeOperation, CorruptObjectError, NotARepository,
                         ObjectNotFoundError, RepositoryExistsError, UnknownRevision)
from .config import Config, write_config_file
from .objects import OBJECT_TYPES, Commit, Tree, TwigObject

logger = logging.getLogger(__name__)

METADATA_DIR = '.twig'
DEFAULT_BRANCH = 'master'


class Repository:
    """
    Represents a Twig repository.

    A non-bare repository keeps its metadata in a ``.twig`` directory under
    the work tree. A bare repository has no work tree and keeps the same
    files directly in its root directory.
    """

    def __init__(self, path='.', bare: bool = False):
        """
        Initialize repository handle.

        Args:
            path: Path to repository root (defaults to current directory)
            bare: Whether the root itself is the metadata directory
        """
        self.root = Path(path).resolve()
        self.bare = bare
        self.work_tree: Optional[Path] = None if bare else self.root
        self.twig_dir = self.root if bare else self.root / METADATA_DIR
        self.objects_dir = self.twig_dir / 'objects'
        self.refs_dir = self.twig_dir / 'refs'
        self.heads_dir = self.refs_dir / 'heads'
        self.tags_dir = self.refs_dir / 'tags'
        self.remotes_dir = self.refs_dir / 'remotes'
        self.head_file = self.twig_dir / 'HEAD'
        self.index_file = self.twig_dir / 'index'
        self.config_file = self.twig_dir / 'config'

        self._ref_manager = None
        self._config = None

    @property
    def refs(self):
        """Get RefManager instance."""
        if self._ref_manager is None:
            from .refs import RefManager
            self._ref_manager = RefManager(self)
        return self._ref_manager

    @property
    def config(self) -> Config:
        """Get Config instance for this repository."""
        if self._config is None:
            self._config = Config(self.config_file)
        return self._config

    def init(self) -> 'Repository':
        """
        Initialize a new repository.

        Creates the metadata structure:
        objects/       # Object database
        refs/heads/    # Branch references
        HEAD           # Current branch/commit
        config         # Repository configuration

        The index file appears on the first ``add``.

        Returns:
            Repository: self for method chaining

        Raises:
            RepositoryExistsError: If repository already exists
        """
        if self.head_file.exists() or (not self.bare and self.twig_dir.exists()):
            raise RepositoryExistsError(f"Repository already exists at {self.twig_dir}")

        self.twig_dir.mkdir(parents=True, exist_ok=True)
        self.objects_dir.mkdir()
        self.refs_dir.mkdir()
        self.heads_dir.mkdir()

        self.head_file.write_text(f'ref: refs/heads/{DEFAULT_BRANCH}\n')

        config = Config(self.config_file)
        parser = config.repo_config
        parser.add_section('core')
        parser.set('core', 'bare', 'true' if self.bare else 'false')
        write_config_file(parser, self.config_file)
        self._config = None

        logger.debug("Initialized %s repository in %s", 'bare' if self.bare else 'empty', self.twig_dir)
        return self

    @classmethod
    def load(cls, path) -> Optional['Repository']:
        """
        Open the repository rooted exactly at path.

        Returns:
            Repository if path holds one, None otherwise
        """
        root = Path(path).resolve()
        if (root / METADATA_DIR).is_dir():
            return cls(str(root))
        if cls._is_bare_dir(root):
            return cls(str(root), bare=True)
        return None

    @staticmethod
    def _is_bare_dir(path: Path) -> bool:
        if not ((path / 'HEAD').is_file() and (path / 'objects').is_dir()
                and (path / 'config').is_file()):
            return False
        return Config(path / 'config').is_bare()

    @classmethod
    def find_repository(cls, path='.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Searches from the given path upwards until it finds a repository
        or reaches the filesystem root.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            repo = cls.load(current)
            if repo is not None:
                return repo

            if current == current.parent:
                return None

            current = current.parent

    @classmethod
    def discover(cls, path='.') -> 'Repository':
        """Like find_repository, but raises NotARepository when nothing is found."""
        repo = cls.find_repository(path)
        if repo is None:
            raise NotARepository()
        return repo

    def require_work_tree(self) -> Path:
        """Return the work tree, raising for bare repositories."""
        if self.bare:
            raise BareRepositoryWorkTreeOperation()
        return self.work_tree

    def open_index(self):
        """Read the index from disk."""
        from .index import Index

        index = Index()
        index.read(self.index_file)
        return index

    def object_path(self, obj_hash: str) -> Path:
        """
        Get filesystem path for an object.

        Objects are stored in subdirectories named by the first 2 characters
        of the hash, with the remaining 38 characters as the filename.
        """
        return self.objects_dir / obj_hash[:2] / obj_hash[2:]

    def write_object(self, obj: TwigObject) -> str:
        """
        Write object to repository.

        Objects are stored compressed with zlib. The format is:
        <type> <size>\\0<content>

        Returns:
            str: SHA-1 hash of the object
        """
        obj_hash = obj.hash
        path = self.object_path(obj_hash)

        if path.exists():
            return obj_hash

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(zlib.compress(obj.encode()))

        logger.debug("Wrote %s %s", obj.type, obj_hash)
        return obj_hash

    def read_raw(self, obj_hash: str) -> bytes:
        """Compressed bytes of a stored object."""
        path = self.object_path(obj_hash)
        if not path.is_file():
            raise ObjectNotFoundError(obj_hash)
        return path.read_bytes()

    def write_raw(self, obj_hash: str, compressed: bytes) -> bool:
        """
        Store an already-compressed object under its hash.

        Returns:
            True if the object was written, False if it was already present
        """
        path = self.object_path(obj_hash)
        if path.exists():
            return False
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(compressed)
        return True

    def read_object(self, obj_hash: str) -> TwigObject:
        """
        Read object from repository.

        Args:
            obj_hash: 40-character SHA-1 hash

        Returns:
            Deserialized object (Blob, Tree, or Commit)

        Raises:
            ObjectNotFoundError: If the object is not stored
            CorruptObjectError: If the object has an invalid format
        """
        try:
            content = zlib.decompress(self.read_raw(obj_hash))
            null_idx = content.index(b'\0')
        except (zlib.error, ValueError) as e:
            raise CorruptObjectError(f"Object {obj_hash} is corrupt: {e}") from e

        header = content[:null_idx].decode()
        data = content[null_idx + 1:]

        try:
            obj_type, size_str = header.split(' ', 1)
            size = int(size_str)
        except ValueError:
            raise CorruptObjectError(f"Invalid object header: {header}")

        if len(data) != size:
            raise CorruptObjectError(f"Object size mismatch: expected {size}, got {len(data)}")

        if obj_type not in OBJECT_TYPES:
            raise CorruptObjectError(f"Unknown object type: {obj_type}")

        obj = OBJECT_TYPES[obj_type]()
        obj.deserialize(data)
        return obj

    def read_commit(self, obj_hash: str, name: Optional[str] = None) -> Commit:
        """Read a commit, raising UnknownRevision if the hash names anything else."""
        try:
            obj = self.read_object(obj_hash)
        except ObjectNotFoundError:
            raise UnknownRevision(name or obj_hash)
        if not isinstance(obj, Commit):
            raise UnknownRevision(name or obj_hash)
        return obj

    def read_tree(self, obj_hash: str) -> Tree:
        obj = self.read_object(obj_hash)
        if not isinstance(obj, Tree):
            raise CorruptObjectError(f"Object {obj_hash} is not a tree")
        return obj

    def object_exists(self, obj_hash: str) -> bool:
        """Check if object exists in repository."""
        return self.object_path(obj_hash).is_file()

    def find_objects(self, prefix: str) -> List[str]:
        """
        Find stored objects whose hash starts with prefix.

        Args:
            prefix: Hash prefix, at least 2 characters

        Returns:
            Sorted list of matching full hashes
        """
        if len(prefix) < 2:
            return []

        subdir = self.objects_dir / prefix[:2]
        if not subdir.is_dir():
            return []

        return sorted(prefix[:2] + obj_file.name for obj_file in subdir.iterdir()
                      if (prefix[:2] + obj_file.name).startswith(prefix))

    def __repr__(self) -> str:
        kind = 'bare ' if self.bare else ''
        return f"Repository({kind}path={self.root})"
