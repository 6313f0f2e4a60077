"""Shared pytest fixtures for minivcs tests."""

import pytest
import tempfile
import shutil
from pathlib import Path
from minivcs.core.repository import Repository
from minivcs.core.objects import Blob, Tree, Commit


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path_factory):
    """Keep the user's environment and ~/.vcsconfig out of the tests."""
    monkeypatch.setenv('HOME', str(tmp_path_factory.mktemp('home')))
    monkeypatch.delenv('VCS_USER_NAME', raising=False)
    monkeypatch.delenv('VCS_USER_EMAIL', raising=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    return Repository(temp_dir).init()


@pytest.fixture
def repo_with_config(repo):
    """Create a repository with an author configured."""
    repo.config_file.write_text("""[user]
\tname = Test User
\temail = test@example.com
""")
    return repo


@pytest.fixture
def sample_blob():
    """Create a sample blob object."""
    return Blob(b"Hello, World!\n")


@pytest.fixture
def sample_tree(repo, sample_blob):
    """Create a sample tree with one blob."""
    blob_hash = repo.objects.put(sample_blob)
    tree = Tree()
    tree.add_entry('100644', 'blob', blob_hash, 'test.txt')
    return tree


@pytest.fixture
def sample_commit(sample_tree, repo):
    """Sample root commit object."""
    tree_hash = repo.objects.put(sample_tree)
    return Commit.create(
        tree_hash=tree_hash,
        parent_hash=None,
        author="Test User <test@example.com>",
        message="Test commit",
        timestamp=1700000000
    )


@pytest.fixture
def working_files(repo):
    """Create sample file structure in repository."""
    file1 = repo.work_tree / "test1.txt"
    file2 = repo.work_tree / "test2.txt"

    (repo.work_tree / "subdir").mkdir()
    file3 = repo.work_tree / "subdir" / "test3.txt"

    file1.write_text("Content 1")
    file2.write_text("Content 2")
    file3.write_text("Content 3")

    return {
        'file1': file1,
        'file2': file2,
        'file3': file3
    }


@pytest.fixture
def repo_with_commits(repo_with_config):
    """Repository with two commits: file1.txt, then file2.txt added."""
    repo = repo_with_config

    (repo.work_tree / "file1.txt").write_text("Hello, World!")
    repo.staging.add("file1.txt")
    first = repo.commits.commit("First commit", timestamp=1700000000)

    (repo.work_tree / "file2.txt").write_text("Second file")
    repo.staging.add("file2.txt")
    second = repo.commits.commit("Second commit", timestamp=1700000100)

    repo.commit_ids = [first, second]
    return repo
