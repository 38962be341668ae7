"""Tests for the git subprocess accessor (skipped without git)."""

import pytest

from git_critic.exceptions import ErrorKind, VcsError
from git_critic.vcs import GitRepository


class TestGitRepository:
    def test_resolve_and_head(self, git_repo):
        repo = GitRepository(str(git_repo))
        head = repo.head()
        assert len(head) == 40
        assert repo.resolve("HEAD") == head
        assert repo.resolve(head[:8]) == head

    def test_is_repository(self, git_repo, tmp_path):
        assert GitRepository(str(git_repo)).is_repository()
        plain = tmp_path / "plain"
        plain.mkdir()
        assert not GitRepository(str(plain)).is_repository()

    def test_bad_revision_raises(self, git_repo):
        with pytest.raises(VcsError) as exc:
            GitRepository(str(git_repo)).resolve("no-such-branch")
        assert exc.value.kind is ErrorKind.VCS_FAILURE
        assert not exc.value.recoverable

    def test_commit_time_is_commit_timestamp(self, git_repo, git):
        repo = GitRepository(str(git_repo))
        expected = int(git(git_repo, "show", "-s", "--format=%ct", "HEAD").strip())
        assert repo.commit_time("HEAD") == expected

    def test_read_file_at_commit(self, git_repo):
        repo = GitRepository(str(git_repo))
        assert repo.read_file("lib/Bar/Baz.pm", "HEAD") == "package Bar::Baz;\n"

    def test_read_missing_file_raises(self, git_repo):
        with pytest.raises(VcsError):
            GitRepository(str(git_repo)).read_file("nope.pm", "HEAD")

    def test_modified_and_changed_files(self, git_repo, git):
        repo = GitRepository(str(git_repo))
        first = repo.head()
        (git_repo / "lib" / "Foo.pm").write_text("package Foo;\n")
        (git_repo / "new.pl").write_text("untracked\n")

        assert repo.modified_files() == ["lib/Foo.pm"]
        assert repo.changed_files(first) == ["lib/Foo.pm"]

        git(git_repo, "commit", "-q", "-am", "second")
        assert repo.changed_files(first, "HEAD") == ["lib/Foo.pm"]
        assert repo.parent("HEAD") == first
        assert repo.head(1) == first
        assert repo.modified_files() == []
