"""Unit tests for the diff engine."""

import pytest
from twig.errors import BareRepositoryWorkTreeOperation, UnknownRevision
from twig.operations.commit import commit
from twig.operations.diff import (DiffEngine, DiffRecord, DiffStatus, compare_snapshots,
                                  format_name_status, traversal_key)
from twig.operations.remove import RemovalEngine
from twig.operations.snapshot import SnapshotSource


def names(records):
    return [str(record) for record in records]


def test_compare_snapshots_statuses():
    old = {'kept': '1', 'changed': '2', 'gone': '3'}
    new = {'kept': '1', 'changed': '9', 'fresh': '4'}

    assert names(compare_snapshots(old, new)) == ['M changed', 'A fresh', 'D gone']


def test_compare_identical_snapshots():
    assert compare_snapshots({'a': '1'}, {'a': '1'}) == []


def test_traversal_order_files_before_subdirectories():
    paths = ['b/a/y', 'c', 'b/x', 'a/z', 'a.txt']
    assert sorted(paths, key=traversal_key) == ['a.txt', 'c', 'a/z', 'b/x', 'b/a/y']


def test_order_ignores_insertion_order():
    old = {}
    new = {'z': '1', 'd/f': '2', 'a': '3'}
    assert names(compare_snapshots(old, new)) == ['A a', 'A z', 'A d/f']


def test_format_name_status():
    records = [DiffRecord(DiffStatus.ADDED, 'a'), DiffRecord(DiffStatus.DELETED, 'b/c')]
    assert format_name_status(records) == 'A a\nD b/c\n'
    assert format_name_status([]) == '\n'


def test_no_changes(repo_with_commits):
    assert DiffEngine(repo_with_commits).diff_refs() == []


def test_index_vs_working_tree(repo_with_commits, write_file):
    repo = repo_with_commits
    write_file(repo.work_tree, 'a.txt', 'edited\n')
    write_file(repo.work_tree, 'untracked.txt', 'ignored\n')

    assert names(DiffEngine(repo).diff_refs()) == ['M a.txt']


def test_staged_file_deleted_from_disk(repo, write_file, stage):
    """A staged, never committed file removed from disk shows as deleted."""
    write_file(repo.work_tree, 'f', 'content\n')
    stage(repo, 'f')
    (repo.work_tree / 'f').unlink()

    assert names(DiffEngine(repo).diff_refs()) == ['D f']


def test_commit_vs_working_tree(repo_with_commits, write_file, stage):
    repo = repo_with_commits
    write_file(repo.work_tree, 'new.txt', 'new\n')
    stage(repo, 'new.txt')
    (repo.work_tree / 'src' / 'main.py').unlink()

    records = DiffEngine(repo).diff_refs(repo.first_commit)

    assert names(records) == ['A new.txt', 'D src/main.py', 'A src/util/helpers.py']


def test_commit_vs_commit_both_directions(repo, write_file, stage):
    write_file(repo.work_tree, 'base.txt', 'base\n')
    stage(repo, 'base.txt')
    commit(repo, 'base', timestamp=1)
    repo.refs.update('a', repo.refs.resolve_head())

    repo.refs.set_symbolic_head('b')
    repo.refs.update('b', repo.refs.resolve('a'))
    write_file(repo.work_tree, 'extra.txt', 'extra\n')
    stage(repo, 'extra.txt')
    commit(repo, 'extra', timestamp=2)

    engine = DiffEngine(repo)
    assert names(engine.diff_refs('a', 'b')) == ['A extra.txt']
    assert names(engine.diff_refs('b', 'a')) == ['D extra.txt']


def test_diff_by_hash_prefix(repo_with_commits):
    repo = repo_with_commits
    records = DiffEngine(repo).diff_refs(repo.first_commit[:7], repo.second_commit[:7])
    assert names(records) == ['A src/util/helpers.py']


def test_unknown_reference(repo_with_commits):
    with pytest.raises(UnknownRevision, match="ambiguous argument nope: unknown revision"):
        DiffEngine(repo_with_commits).diff_refs('nope')


def test_first_reference_is_validated_first(repo_with_commits):
    with pytest.raises(UnknownRevision, match="first"):
        DiffEngine(repo_with_commits).diff_refs('first', 'second')


def test_bare_repository_rejected(bare_repo):
    with pytest.raises(BareRepositoryWorkTreeOperation):
        DiffEngine(bare_repo).diff_refs()


def test_diff_index_vs_commit(repo_with_commits, write_file, stage):
    repo = repo_with_commits
    write_file(repo.work_tree, 'a.txt', 'staged\n')
    stage(repo, 'a.txt')

    engine = DiffEngine(repo)
    records = engine.diff(SnapshotSource.committed_tree(repo.second_commit), SnapshotSource.index())

    assert names(records) == ['M a.txt']


def test_modification_is_reported_in_both_directions(repo, write_file, commit_all):
    write_file(repo.work_tree, 'f', 'one\n')
    repo.refs.update('a', commit_all(repo, 'one'))
    write_file(repo.work_tree, 'f', 'two\n')
    repo.refs.update('b', commit_all(repo, 'two'))

    engine = DiffEngine(repo)
    assert names(engine.diff_refs('a', 'b')) == ['M f']
    assert names(engine.diff_refs('b', 'a')) == ['M f']


def test_swapping_arguments_swaps_added_and_deleted(repo, write_file, commit_all):
    write_file(repo.work_tree, 'keep.txt', 'v1\n')
    write_file(repo.work_tree, 'old.txt', 'old\n')
    repo.refs.update('a', commit_all(repo, 'before'))

    write_file(repo.work_tree, 'keep.txt', 'v2\n')
    RemovalEngine(repo).remove('old.txt', cwd=repo.work_tree)
    write_file(repo.work_tree, 'lib/new.py', 'new\n')
    repo.refs.update('b', commit_all(repo, 'after'))

    engine = DiffEngine(repo)
    assert names(engine.diff_refs('a', 'b')) == ['M keep.txt', 'D old.txt', 'A lib/new.py']
    assert names(engine.diff_refs('b', 'a')) == ['M keep.txt', 'A old.txt', 'D lib/new.py']
