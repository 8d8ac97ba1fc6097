"""Integration tests for the add, commit and branch workflow."""

from click.testing import CliRunner
from twig.cli.main import cli


class TestCommitWorkflow:
    """Tests for staging, committing and branching from the command line."""

    def test_add_and_commit(self, repo, write_file, monkeypatch):
        write_file(repo.work_tree, 'a.txt', 'a\n')
        write_file(repo.work_tree, 'docs/b.md', 'b\n')
        monkeypatch.chdir(repo.work_tree)
        runner = CliRunner()

        result = runner.invoke(cli, ['add', 'a.txt', 'docs'])
        assert result.exit_code == 0
        assert 'Added 2 file(s)' in result.output

        result = runner.invoke(cli, ['commit', '-m', 'Initial', '--author', 'Jane <jane@example.com>'])
        assert result.exit_code == 0
        assert '[master ' in result.output
        assert 'Initial' in result.output
        assert repo.read_commit(repo.refs.resolve_head()).author == 'Jane <jane@example.com>'

    def test_add_missing_file(self, repo, monkeypatch):
        monkeypatch.chdir(repo.work_tree)

        result = CliRunner().invoke(cli, ['add', 'missing.txt'])

        assert result.exit_code == 1
        assert 'missing.txt did not match any files' in result.output

    def test_commit_nothing(self, repo_with_commits, monkeypatch):
        monkeypatch.chdir(repo_with_commits.work_tree)

        result = CliRunner().invoke(cli, ['commit', '-m', 'again'])

        assert result.exit_code == 1
        assert 'nothing to commit' in result.output

    def test_branch_create_and_list(self, repo_with_commits, monkeypatch):
        monkeypatch.chdir(repo_with_commits.work_tree)
        runner = CliRunner()

        result = runner.invoke(cli, ['branch', 'feature'])
        assert result.exit_code == 0
        assert "Created branch 'feature'" in result.output

        result = runner.invoke(cli, ['branch'])
        assert result.exit_code == 0
        assert result.output == '  feature\n* master\n'

    def test_branch_outside_repository(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = CliRunner().invoke(cli, ['branch'])

        assert result.exit_code == 1
        assert 'not a Twig repository' in result.output
