"""Unit tests for configuration."""

from twig.core.config import Config, get_config


def test_set_writes_indented_keys(repo):
    repo.config.set('user', 'name', 'Jane')
    assert repo.config_file.read_text() == '[core]\n  bare = false\n[user]\n  name = Jane\n'


def test_remote_sections_come_first(repo):
    repo.config.add_remote('origin', '../source')

    lines = repo.config_file.read_text().splitlines()
    assert lines[0] == '[remote "origin"]'
    assert lines[1] == '  url = ../source'
    assert lines[2] == '[core]'


def test_list_remotes(repo):
    repo.config.add_remote('origin', '../a')
    repo.config.add_remote('backup', '/srv/b')

    fresh = Config(repo.config_file)
    assert fresh.list_remotes() == {'origin': '../a', 'backup': '/srv/b'}
    assert fresh.get_remote_url('backup') == '/srv/b'
    assert fresh.get_remote_url('missing') is None


def test_is_bare(repo, bare_repo):
    assert Config(repo.config_file).is_bare() is False
    assert Config(bare_repo.config_file).is_bare() is True


def test_priority_env_over_repo_over_global(repo, monkeypatch):
    Config.GLOBAL_CONFIG_PATH.write_text('[user]\n  name = Global\n  email = g@example.com\n')
    repo.config.set('user', 'name', 'Local')

    config = get_config(repo)
    assert config.get('user', 'name') == 'Local'
    assert config.get('user', 'email') == 'g@example.com'
    assert config.get('user', 'missing', fallback='x') == 'x'

    monkeypatch.setenv('TWIG_USER_NAME', 'Env')
    assert config.get('user', 'name') == 'Env'


def test_unset(repo):
    repo.config.set('user', 'name', 'Jane')

    assert repo.config.unset('user', 'name') is True
    assert repo.config.unset('user', 'name') is False
    assert '[user]' not in repo.config_file.read_text()


def test_author_fallback(repo):
    assert repo.config.author() == 'Twig <twig@localhost>'


def test_author_from_identity(repo, monkeypatch):
    monkeypatch.setenv('TWIG_USER_NAME', 'Jane')
    monkeypatch.setenv('TWIG_USER_EMAIL', 'jane@example.com')
    assert repo.config.get_user_identity() == ('Jane', 'jane@example.com')
    assert repo.config.author() == 'Jane <jane@example.com>'


def test_global_set(tmp_path):
    config = Config()
    config.set('user', 'email', 'me@example.com', global_config=True)
    assert Config().get('user', 'email') == 'me@example.com'
