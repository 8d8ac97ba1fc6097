"""Shared pytest fixtures for Twig tests."""

import pytest
from pathlib import Path
from twig.core.config import Config
from twig.core.objects import Blob, Tree, Commit
from twig.core.repository import Repository
from twig.operations.commit import commit
from twig.operations.stage import add


TEST_AUTHOR = "Test User <test@example.com>"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's global config and environment."""
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', tmp_path / '.twigconfig')
    for name in ('TWIG_USER_NAME', 'TWIG_USER_EMAIL', 'TWIG_CORE_BARE'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir(tmp_path):
    """Create a temporary directory for tests."""
    path = tmp_path / 'work'
    path.mkdir()
    return path


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    return Repository(str(temp_dir)).init()


@pytest.fixture
def bare_repo(tmp_path):
    """Create an initialized bare repository."""
    path = tmp_path / 'bare.twig'
    path.mkdir()
    return Repository(str(path), bare=True).init()


@pytest.fixture
def write_file():
    """Write text to a path below a root, creating parent directories."""
    def _write(root, rel_path, content):
        path = Path(root) / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path
    return _write


@pytest.fixture
def stage():
    """Stage pathspecs relative to the work tree."""
    def _stage(repo, *pathspecs):
        staged = []
        for pathspec in pathspecs:
            staged.extend(add(repo, pathspec, cwd=repo.work_tree))
        return staged
    return _stage


@pytest.fixture
def commit_all(stage):
    """Stage the whole work tree and commit it."""
    def _commit(repo, message="Test commit"):
        stage(repo, '.')
        commit(repo, message, author=TEST_AUTHOR, timestamp=1700000000)
        return repo.refs.resolve_head()
    return _commit


@pytest.fixture
def repo_with_commits(repo, write_file, stage):
    """
    Repository with two commits on master.

    First commit: a.txt, src/main.py
    Second commit: adds src/util/helpers.py
    """
    write_file(repo.work_tree, 'a.txt', 'alpha\n')
    write_file(repo.work_tree, 'src/main.py', 'print("hi")\n')
    stage(repo, '.')
    commit(repo, "First commit", author=TEST_AUTHOR, timestamp=1700000000)
    repo.first_commit = repo.refs.resolve_head()

    write_file(repo.work_tree, 'src/util/helpers.py', 'def helper():\n    pass\n')
    stage(repo, 'src')
    commit(repo, "Second commit", author=TEST_AUTHOR, timestamp=1700000100)
    repo.second_commit = repo.refs.resolve_head()

    return repo


@pytest.fixture
def sample_blob():
    """Create a sample blob object."""
    return Blob(b"Hello, World!\n")


@pytest.fixture
def sample_tree(repo, sample_blob):
    """Create a sample tree with one blob."""
    blob_hash = repo.write_object(sample_blob)
    tree = Tree()
    tree.add_entry('100644', 'blob', blob_hash, 'test.txt')
    return tree


@pytest.fixture
def sample_commit(sample_tree, repo):
    """Sample commit object."""
    tree_hash = repo.write_object(sample_tree)
    return Commit.create(
        tree_hash=tree_hash,
        parent_hashes=[],
        author=TEST_AUTHOR,
        committer=TEST_AUTHOR,
        message="Test commit",
        timestamp=1700000000
    )
