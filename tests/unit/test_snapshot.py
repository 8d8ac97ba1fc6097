"""Unit tests for snapshot resolution."""

import pytest
from twig.core.hash import hash_blob_content
from twig.errors import UnknownRevision
from twig.operations.snapshot import (SnapshotKind, SnapshotResolver, SnapshotSource,
                                      tree_files, working_tree_paths)


def test_parse_tokens(repo_with_commits):
    resolver = SnapshotResolver(repo_with_commits)

    assert resolver.parse('WORKING_TREE') == SnapshotSource.working_tree()
    assert resolver.parse('INDEX').kind is SnapshotKind.INDEX

    source = resolver.parse('master')
    assert source.kind is SnapshotKind.COMMITTED_TREE
    assert source.commit == repo_with_commits.second_commit


def test_parse_unknown_reference(repo):
    with pytest.raises(UnknownRevision):
        SnapshotResolver(repo).parse('HEAD')


def test_committed_tree_snapshot(repo_with_commits):
    repo = repo_with_commits
    files = SnapshotResolver(repo).snapshot(SnapshotSource.committed_tree(repo.first_commit))

    assert files == {
        'a.txt': hash_blob_content(b'alpha\n'),
        'src/main.py': hash_blob_content(b'print("hi")\n'),
    }


def test_index_snapshot(repo_with_commits):
    files = SnapshotResolver(repo_with_commits).snapshot(SnapshotSource.index())
    assert set(files) == {'a.txt', 'src/main.py', 'src/util/helpers.py'}


def test_working_tree_snapshot_reads_disk(repo_with_commits, write_file):
    repo = repo_with_commits
    write_file(repo.work_tree, 'a.txt', 'changed\n')
    write_file(repo.work_tree, 'new.txt', 'new\n')

    files = SnapshotResolver(repo).snapshot(SnapshotSource.working_tree())

    assert files['a.txt'] == hash_blob_content(b'changed\n')
    assert 'new.txt' in files
    assert not any(path.startswith('.twig') for path in files)


def test_working_tree_snapshot_restricted_to_paths(repo_with_commits):
    repo = repo_with_commits
    (repo.work_tree / 'a.txt').unlink()

    files = SnapshotResolver(repo).snapshot(SnapshotSource.working_tree(), ['a.txt', 'src/main.py'])

    assert list(files) == ['src/main.py']


def test_working_tree_snapshot_in_bare_repository(bare_repo):
    from twig.errors import BareRepositoryWorkTreeOperation
    with pytest.raises(BareRepositoryWorkTreeOperation):
        SnapshotResolver(bare_repo).snapshot(SnapshotSource.working_tree())


def test_tree_files_prefix(repo_with_commits):
    repo = repo_with_commits
    tree_hash = repo.read_commit(repo.second_commit).tree
    src_tree = repo.read_tree(tree_hash).get('src').hash

    assert sorted(tree_files(repo, src_tree, 'src/')) == ['src/main.py', 'src/util/helpers.py']


def test_working_tree_paths(repo, write_file):
    write_file(repo.work_tree, 'b/x', '')
    write_file(repo.work_tree, 'a', '')

    assert working_tree_paths(repo.work_tree) == ['a', 'b/x']


def test_working_tree_paths_skip_symlinked_directories(repo, write_file):
    write_file(repo.work_tree, 'real/f.txt', 'f')
    (repo.work_tree / 'real' / 'loop').symlink_to(repo.work_tree / 'real', target_is_directory=True)
    (repo.work_tree / 'alias').symlink_to(repo.work_tree / 'real', target_is_directory=True)

    assert working_tree_paths(repo.work_tree) == ['real/f.txt']
