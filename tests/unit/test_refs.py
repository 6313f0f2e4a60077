"""HEAD reference tests."""

import pytest
from minivcs.core.errors import CorruptObject, ObjectNotFound
from minivcs.core.hash import NULL_ID
from minivcs.core.objects import Blob


def test_read_head_fresh_repository(repo):
    assert repo.refs.read_head() is None


def test_read_head_missing_file(repo):
    repo.head_file.unlink()
    assert repo.refs.read_head() is None


def test_update_head(repo, sample_commit):
    commit_id = repo.objects.put(sample_commit)
    repo.refs.update_head(commit_id)

    assert repo.refs.read_head() == commit_id
    assert repo.head_file.read_text() == commit_id + '\n'


def test_update_head_missing_commit(repo):
    with pytest.raises(ObjectNotFound):
        repo.refs.update_head('a' * 64)
    assert repo.refs.read_head() is None


def test_update_head_rejects_non_commit(repo):
    blob_id = repo.objects.put(Blob(b'not a commit'))
    with pytest.raises(CorruptObject):
        repo.refs.update_head(blob_id)
    assert repo.refs.read_head() is None


def test_read_head_corrupt(repo):
    repo.head_file.write_text('garbage\n')
    with pytest.raises(CorruptObject):
        repo.refs.read_head()


def test_reset_head(repo, sample_commit):
    repo.refs.update_head(repo.objects.put(sample_commit))
    repo.refs.reset_head()
    assert repo.head_file.read_text() == NULL_ID + '\n'
    assert repo.refs.read_head() is None


def test_update_head_leaves_no_temporary_files(repo, sample_commit):
    repo.refs.update_head(repo.objects.put(sample_commit))
    assert not [p for p in repo.vcs_dir.iterdir() if p.name.startswith('.tmp')]
