"""Tests for building and consuming file queues."""

import pytest

from git_critic import file_queue
from git_critic.exceptions import FatalInputError
from git_critic.file_queue import FileQueue
from git_critic.vcs import GitRepository


class TestFileQueue:
    def test_single_pass_with_totals(self):
        queue = FileQueue(["a.pl", "b.pl", "c.pl"])
        assert queue.total == 3
        assert next(queue) == "a.pl"
        assert queue.completed == 1
        assert len(queue) == 2
        assert list(queue) == ["b.pl", "c.pl"]
        assert queue.completed == 3
        assert list(queue) == []

    def test_empty(self):
        queue = FileQueue([])
        assert queue.total == 0
        assert list(queue) == []


class TestLoaders:
    def test_from_input(self, tmp_path):
        f = tmp_path / "a.pl"
        f.write_text("1;\n")
        load = file_queue.from_input(str(f))
        assert load.ok
        assert list(load.require()) == [str(f)]

    def test_missing_input_is_reported(self, tmp_path):
        load = file_queue.from_input(str(tmp_path / "nope.pl"))
        assert not load.ok
        with pytest.raises(FatalInputError, match="nope.pl not found"):
            load.require()

    def test_from_lines_skips_blanks(self, tmp_path):
        for name in ("a.pl", "b.pl"):
            (tmp_path / name).write_text("1;\n")
        lines = [f"{tmp_path / 'a.pl'}\n", "\n", "   \n", f"  {tmp_path / 'b.pl'}  \n"]
        queue = file_queue.from_lines(lines).require()
        assert list(queue) == [str(tmp_path / "a.pl"), str(tmp_path / "b.pl")]

    def test_from_manifest_reports_every_missing_file(self, tmp_path):
        (tmp_path / "a.pl").write_text("1;\n")
        manifest = tmp_path / "MANIFEST"
        manifest.write_text(f"{tmp_path / 'a.pl'}\n{tmp_path / 'x.pl'}\n{tmp_path / 'y.pl'}\n")
        load = file_queue.from_manifest(str(manifest))
        assert load.missing == [str(tmp_path / "x.pl"), str(tmp_path / "y.pl")]
        assert load.queue.total == 3

    def test_missing_manifest(self, tmp_path):
        with pytest.raises(FatalInputError):
            file_queue.from_manifest(str(tmp_path / "MANIFEST"))

    def test_from_tree(self, git_repo):
        repo = GitRepository(str(git_repo))
        load = file_queue.from_tree(repo, "HEAD", r"\.p[lm]$")
        assert load.ok
        assert load.queue.revision == "HEAD"
        assert sorted(load.queue) == ["bin/run.pl", "lib/Bar/Baz.pm", "lib/Foo.pm"]

    def test_from_tree_unfiltered(self, git_repo):
        load = file_queue.from_tree(GitRepository(str(git_repo)), "HEAD")
        assert "README" in list(load.queue)
