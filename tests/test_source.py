"""Tests for cloning the reference source."""

import pytest

from errors import CloneFailedError
from orchestrator import clone_repo

URL = "https://github.com/stellar/soroban-examples.git"


class TestCloneRepo:
    """Test clone_repo."""

    def test_clones_into_destination(self, runner, tmp_path):
        """git clone runs shallow into the destination."""
        dest = tmp_path / "work" / "soroban-examples"
        assert clone_repo(URL, dest, runner, depth=1, git_bin="git") == dest

        call = runner.calls[0]
        assert call.command == "git"
        assert call.args == ["clone", "--depth", "1", URL, str(dest)]
        assert dest.parent.is_dir()

    def test_populated_destination_reused(self, runner, tmp_path):
        """A populated destination is reused without git."""
        dest = tmp_path / "soroban-examples"
        dest.mkdir()
        (dest / "README.md").write_text("examples")

        assert clone_repo(URL, dest, runner) == dest
        assert runner.calls == []

    def test_empty_destination_cloned(self, runner, tmp_path):
        """An empty destination is cloned into."""
        dest = tmp_path / "soroban-examples"
        dest.mkdir()
        clone_repo(URL, dest, runner)
        assert len(runner.calls) == 1

    def test_failure_raises(self, runner, tmp_path):
        """A failed clone raises CloneFailedError."""
        runner.on("clone", exit_status=128)
        with pytest.raises(CloneFailedError) as exc:
            clone_repo(URL, tmp_path / "dest", runner)
        assert exc.value.exit_status == 128
        assert exc.value.url == URL
