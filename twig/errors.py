"""Exceptions raised by Twig operations."""


class TwigError(Exception):
    """Base class for all Twig errors."""


class NotARepository(TwigError):
    """Raised when an operation needs a repository and none is found."""

    def __init__(self, message: str = "not a Twig repository"):
        super().__init__(message)


class RepositoryExistsError(TwigError):
    """Raised when initializing over an existing repository."""


class BareRepositoryWorkTreeOperation(TwigError):
    """Raised when a work-tree command runs in a bare repository."""

    def __init__(self, message: str = "this operation must be run in a work tree"):
        super().__init__(message)


class UnknownRevision(TwigError):
    """Raised when a reference or hash argument cannot be resolved."""

    def __init__(self, revision: str):
        self.revision = revision
        super().__init__(f"ambiguous argument {revision}: unknown revision")


class PathspecMismatch(TwigError):
    """Raised when a pathspec matches no index entries or files."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"{path} did not match any files")


class RecursiveRemovalRequired(TwigError):
    """Raised when removing a directory without the recursive flag."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"not removing {path} recursively without -r")


class UncommittedChanges(TwigError):
    """Raised when a removal would discard staged or unstaged work."""

    def __init__(self, paths):
        self.paths = list(paths)
        listing = ''.join(f"{path}\n" for path in self.paths)
        super().__init__(f"these files have changes:\n{listing}")


class UnsupportedOption(TwigError):
    """Raised for options that are recognized but deliberately disabled."""

    def __init__(self, message: str = "unsupported"):
        super().__init__(message)


class NothingToCommit(TwigError):
    """Raised when the index matches the HEAD tree."""


class BranchExistsError(TwigError):
    """Raised when creating a branch whose name is taken."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"A branch named {name} already exists")


class CloneUsageError(TwigError):
    """Raised when clone is called without a source or target."""

    def __init__(self, message: str = "you must specify remote path and target path"):
        super().__init__(message)


class TargetNotEmpty(TwigError):
    """Raised when the clone target exists and has content."""

    def __init__(self, target: str):
        self.target = target
        super().__init__(f"{target} already exists and is not empty")


class SourceNotARepository(TwigError):
    """Raised when the clone source is not a repository."""

    def __init__(self, source: str):
        self.source = source
        super().__init__(f"repository {source} does not exist")


class ObjectNotFoundError(TwigError):
    """Raised when reading an object that is not in the store."""

    def __init__(self, obj_hash: str):
        self.hash = obj_hash
        super().__init__(f"Object {obj_hash} not found")


class CorruptObjectError(TwigError):
    """Raised when a stored object cannot be decoded."""


class CorruptIndexError(TwigError):
    """Raised when the index file fails validation."""
