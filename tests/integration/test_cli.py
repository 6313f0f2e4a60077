"""Integration tests driving the command line."""

import os
import pytest
from click.testing import CliRunner
from minivcs.cli.main import cli
from minivcs.core.repository import Repository


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def in_repo(repo, monkeypatch):
    """Run commands from inside an initialized repository."""
    monkeypatch.chdir(repo.work_tree)
    return repo


def test_init_command(runner, temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    result = runner.invoke(cli, ['init'])

    assert result.exit_code == 0
    assert 'Initialized empty repository' in result.output
    assert (temp_dir / '.vcs').is_dir()


def test_init_command_with_directory(runner, temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    result = runner.invoke(cli, ['init', 'project'])

    assert result.exit_code == 0
    assert (temp_dir / 'project' / '.vcs').is_dir()


def test_init_twice(runner, in_repo):
    result = runner.invoke(cli, ['init'])
    assert result.exit_code != 0
    assert 'Already in a vcs directory.' in result.output


def test_init_too_many_operands(runner, temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    result = runner.invoke(cli, ['init', 'a', 'b'])
    assert result.exit_code != 0
    assert 'Incorrect operands.' in result.output


@pytest.mark.parametrize('args', [['add', 'a.txt'], ['commit', 'msg'], ['rm', 'a.txt'],
                                  ['log'], ['status']])
def test_commands_outside_repository(runner, temp_dir, monkeypatch, args):
    monkeypatch.chdir(temp_dir)
    result = runner.invoke(cli, args)
    assert result.exit_code != 0
    assert 'Not in an initialized vcs directory.' in result.output


def test_add_command(runner, in_repo):
    (in_repo.work_tree / 'a.txt').write_text('hello')
    result = runner.invoke(cli, ['add', 'a.txt'])

    assert result.exit_code == 0
    assert 'a.txt' in in_repo.load_index()


def test_add_from_subdirectory(runner, repo, monkeypatch):
    sub = repo.work_tree / 'sub'
    sub.mkdir()
    (sub / 'b.txt').write_text('b')
    monkeypatch.chdir(sub)

    result = runner.invoke(cli, ['add', 'b.txt'])
    assert result.exit_code == 0
    assert 'sub/b.txt' in repo.load_index()


def test_add_missing_file(runner, in_repo):
    result = runner.invoke(cli, ['add', 'missing.txt'])
    assert result.exit_code != 0
    assert 'File does not exist.' in result.output


@pytest.mark.parametrize('args', [['add'], ['add', 'a', 'b'], ['rm'], ['rm', 'a', 'b'],
                                  ['commit', 'a', 'b'], ['log', 'x'], ['status', 'x']])
def test_incorrect_operands(runner, in_repo, args):
    result = runner.invoke(cli, args)
    assert result.exit_code != 0
    assert 'Incorrect operands.' in result.output


def test_commit_command(runner, in_repo):
    (in_repo.work_tree / 'a.txt').write_text('hello')
    runner.invoke(cli, ['add', 'a.txt'])

    result = runner.invoke(cli, ['commit', 'first'])
    assert result.exit_code == 0
    assert 'Created commit' in result.output
    assert '(root commit)' in result.output
    assert in_repo.refs.read_head() is not None


@pytest.mark.parametrize('args', [['commit'], ['commit', '']])
def test_commit_without_message(runner, in_repo, args):
    in_repo.staging.stage('a.txt', b'x')
    result = runner.invoke(cli, args)
    assert result.exit_code != 0
    assert 'Please enter a commit message.' in result.output


def test_commit_nothing_staged(runner, in_repo):
    result = runner.invoke(cli, ['commit', 'empty'])
    assert result.exit_code != 0
    assert 'No changes added to the commit' in result.output


def test_commit_author_option(runner, in_repo):
    in_repo.staging.stage('a.txt', b'x')
    result = runner.invoke(cli, ['commit', 'msg', '--author', 'Jane <jane@example.com>'])
    assert result.exit_code == 0
    commit = in_repo.objects.get(in_repo.refs.read_head())
    assert commit.author == 'Jane <jane@example.com>'


def test_rm_command_deletes_committed_file(runner, in_repo):
    path = in_repo.work_tree / 'a.txt'
    path.write_text('hello')
    runner.invoke(cli, ['add', 'a.txt'])
    runner.invoke(cli, ['commit', 'first'])

    result = runner.invoke(cli, ['rm', 'a.txt'])
    assert result.exit_code == 0
    assert not path.exists()
    assert 'a.txt' not in in_repo.load_index()


def test_rm_cached_keeps_file(runner, in_repo):
    path = in_repo.work_tree / 'a.txt'
    path.write_text('hello')
    runner.invoke(cli, ['add', 'a.txt'])
    runner.invoke(cli, ['commit', 'first'])

    result = runner.invoke(cli, ['rm', '--cached', 'a.txt'])
    assert result.exit_code == 0
    assert path.exists()


def test_rm_untracked(runner, in_repo):
    result = runner.invoke(cli, ['rm', 'nothing.txt'])
    assert result.exit_code != 0
    assert 'No reason to remove the file.' in result.output


def test_log_without_commits(runner, in_repo):
    result = runner.invoke(cli, ['log'])
    assert result.exit_code == 0
    assert 'Your current branch main has no commits yet.' in result.output


def test_log_lists_commits(runner, repo_with_commits, monkeypatch):
    monkeypatch.chdir(repo_with_commits.work_tree)
    result = runner.invoke(cli, ['log'])

    assert result.exit_code == 0
    first, second = repo_with_commits.commit_ids
    assert result.output.index(second) < result.output.index(first)
    assert 'Date: Tue Nov 14 22:13:20 2023' in result.output
    assert 'Second commit' in result.output


def test_status_command(runner, in_repo):
    (in_repo.work_tree / 'new.txt').write_text('new')
    (in_repo.work_tree / 'staged.txt').write_text('staged')
    runner.invoke(cli, ['add', 'staged.txt'])

    result = runner.invoke(cli, ['status'])
    assert result.exit_code == 0
    assert 'Changes to be committed:' in result.output
    assert 'new file: staged.txt' in result.output
    assert 'Untracked files:' in result.output
    assert 'new.txt' in result.output


def test_status_clean(runner, repo_with_commits, monkeypatch):
    monkeypatch.chdir(repo_with_commits.work_tree)
    result = runner.invoke(cli, ['status'])
    assert 'nothing to commit' in result.output


def test_full_cli_session(runner, temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    assert runner.invoke(cli, ['init']).exit_code == 0
    (temp_dir / 'a.txt').write_text('hello')
    assert runner.invoke(cli, ['add', 'a.txt']).exit_code == 0
    assert runner.invoke(cli, ['commit', 'first']).exit_code == 0
    assert runner.invoke(cli, ['rm', 'a.txt']).exit_code == 0
    assert runner.invoke(cli, ['commit', 'second']).exit_code == 0

    repo = Repository(temp_dir)
    history = list(repo.commits.history())
    assert [c.message for _, c in history] == ['second', 'first']


def test_verbose_flag(runner, in_repo):
    result = runner.invoke(cli, ['-v', 'status'])
    assert result.exit_code == 0


def test_help_shows_banner(runner):
    result = runner.invoke(cli, ['--help'])
    assert result.exit_code == 0
    assert 'minivcs' in result.output


def test_file_replaced_by_directory_reports_layout_error(runner, in_repo):
    (in_repo.work_tree / 'a').write_text('file')
    assert runner.invoke(cli, ['add', 'a']).exit_code == 0

    (in_repo.work_tree / 'a').unlink()
    (in_repo.work_tree / 'a').mkdir()
    (in_repo.work_tree / 'a' / 'b').write_text('nested')
    assert runner.invoke(cli, ['add', 'a']).exit_code == 0

    result = runner.invoke(cli, ['commit', 'msg'])
    assert result.exit_code != 0
    assert isinstance(result.exception, SystemExit)
    assert "Invalid path layout at 'a'" in result.output
    assert 'Traceback' not in result.output


def test_corrupt_index_is_reported(runner, in_repo):
    in_repo.index_file.write_bytes(b'garbage')

    for args in (['status'], ['commit', 'msg'], ['add', '.']):
        result = runner.invoke(cli, args)
        assert result.exit_code != 0
        assert isinstance(result.exception, SystemExit)
        assert 'Index file is truncated' in result.output


def test_corrupt_head_is_reported(runner, in_repo):
    in_repo.head_file.write_text('not-a-commit-id\n')

    result = runner.invoke(cli, ['log'])
    assert result.exit_code != 0
    assert isinstance(result.exception, SystemExit)
    assert 'HEAD does not contain a valid commit id' in result.output


def test_missing_object_is_reported(runner, repo_with_commits, monkeypatch):
    monkeypatch.chdir(repo_with_commits.work_tree)
    first, _ = repo_with_commits.commit_ids
    repo_with_commits.objects.object_path(first).unlink()

    result = runner.invoke(cli, ['log'])
    assert result.exit_code != 0
    assert isinstance(result.exception, SystemExit)
    assert f'Object {first} not found' in result.output


def test_add_undecodable_name(runner, in_repo):
    (in_repo.work_tree / 'd').mkdir()
    raw_path = os.path.join(os.fsencode(in_repo.work_tree / 'd'), b'\xff.txt')
    try:
        with open(raw_path, 'wb') as f:
            f.write(b'raw')
    except OSError:
        pytest.skip("filesystem rejects names that are not UTF-8")

    result = runner.invoke(cli, ['add', 'd'])
    assert result.exit_code == 0
    assert 'd/' + os.fsdecode(b'\xff.txt') in in_repo.load_index()

    assert runner.invoke(cli, ['status']).exit_code == 0
    assert runner.invoke(cli, ['commit', 'odd']).exit_code == 0


def test_checkout_restores_file_from_head(runner, repo_with_commits, monkeypatch):
    repo = repo_with_commits
    monkeypatch.chdir(repo.work_tree)
    (repo.work_tree / 'file1.txt').unlink()

    result = runner.invoke(cli, ['checkout', '--', 'file1.txt'])
    assert result.exit_code == 0
    assert (repo.work_tree / 'file1.txt').read_text() == 'Hello, World!'


def test_checkout_from_commit_id(runner, repo_with_commits, monkeypatch):
    repo = repo_with_commits
    monkeypatch.chdir(repo.work_tree)
    first, _ = repo.commit_ids

    result = runner.invoke(cli, ['checkout', first, '--', 'file2.txt'])
    assert result.exit_code == 0
    assert not (repo.work_tree / 'file2.txt').exists()

    result = runner.invoke(cli, ['checkout', first, '--', 'file1.txt'])
    assert result.exit_code == 0
    assert (repo.work_tree / 'file1.txt').read_text() == 'Hello, World!'


def test_checkout_unknown_commit(runner, in_repo):
    result = runner.invoke(cli, ['checkout', 'dne', '--', 'f3.txt'])
    assert result.exit_code != 0
    assert 'No commit with ID dne exists.' in result.output


@pytest.mark.parametrize('args', [['checkout'], ['checkout', 'file.txt'],
                                  ['checkout', 'abc', '--'], ['checkout', '--'],
                                  ['checkout', 'a', 'b', '--', 'c'],
                                  ['checkout', '--', 'a', 'b']])
def test_checkout_incorrect_operands(runner, in_repo, args):
    result = runner.invoke(cli, args)
    assert result.exit_code != 0
    assert 'Incorrect operands.' in result.output


def test_checkout_outside_repository(runner, temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    result = runner.invoke(cli, ['checkout', '--', 'a.txt'])
    assert result.exit_code != 0
    assert 'Not in an initialized vcs directory.' in result.output
