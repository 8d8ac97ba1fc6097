"""Unit tests for branches."""

import pytest
from twig.errors import BranchExistsError, UnknownRevision
from twig.operations.branch import create_branch, list_branches


def test_create_branch_at_head(repo_with_commits):
    repo = repo_with_commits
    assert create_branch(repo, 'feature') == repo.second_commit
    assert repo.refs.resolve('feature') == repo.second_commit


def test_create_branch_on_unborn_head(repo):
    with pytest.raises(UnknownRevision, match="master"):
        create_branch(repo, 'feature')


def test_duplicate_branch(repo_with_commits):
    with pytest.raises(BranchExistsError, match="already exists"):
        create_branch(repo_with_commits, 'master')


def test_list_branches_marks_current(repo_with_commits):
    create_branch(repo_with_commits, 'feature')
    assert list_branches(repo_with_commits) == [('feature', False), ('master', True)]
