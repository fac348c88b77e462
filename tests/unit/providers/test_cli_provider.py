"""Tests for CliGitProvider."""

import asyncio
import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from nostr_git.exceptions import GitProviderError
from nostr_git.providers.cli_provider import CliGitProvider

REPO_DIR = "/srv/repos/alice/tools"
REPO_ARGS = ["git", "--git-dir", os.path.join(REPO_DIR, ".git"), "--work-tree", REPO_DIR]


def make_process(returncode: int = 0, stdout: bytes = b"", stderr: bytes = b"") -> MagicMock:
    """Create a mocked asyncio subprocess."""
    process = MagicMock()
    process.returncode = returncode
    process.communicate = AsyncMock(return_value=(stdout, stderr))
    process.kill = MagicMock()
    process.wait = AsyncMock(return_value=returncode)
    return process


def executed_commands(mock_exec) -> list:
    return [list(call.args) for call in mock_exec.call_args_list]


class TestListBranches:
    """Test branch listing."""

    @pytest.mark.asyncio
    async def test_list_local_branches(self):
        """Test local branch names are parsed from git output."""
        provider = CliGitProvider()
        process = make_process(stdout=b"main\n  dev\n\nfeature/x\n")

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)) as mock_exec:
            branches = await provider.list_branches(dir=REPO_DIR)

        assert branches == ["main", "dev", "feature/x"]
        assert executed_commands(mock_exec) == [
            REPO_ARGS + ["branch", "--list", "--format=%(refname:short)"]
        ]

    @pytest.mark.asyncio
    async def test_list_remote_branches_drops_head(self):
        """Test remote listing keeps origin/ names and drops origin/HEAD."""
        provider = CliGitProvider()
        process = make_process(stdout=b"origin\norigin/HEAD\norigin/main\norigin/feature\n")

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)) as mock_exec:
            branches = await provider.list_branches(dir=REPO_DIR, remote="origin")

        assert branches == ["origin/main", "origin/feature"]
        assert executed_commands(mock_exec) == [
            REPO_ARGS + ["branch", "-r", "--list", "origin/*", "--format=%(refname:short)"]
        ]

    @pytest.mark.asyncio
    async def test_clones_when_url_given_and_repo_missing(self, tmp_path):
        """Test clone-on-demand runs before listing."""
        # Arrange
        repo_dir = str(tmp_path / "owner" / "repo")
        provider = CliGitProvider()
        clone_process = make_process()
        list_process = make_process(stdout=b"main\n")

        # Act
        with patch(
            "asyncio.create_subprocess_exec",
            AsyncMock(side_effect=[clone_process, list_process]),
        ) as mock_exec:
            branches = await provider.list_branches(dir=repo_dir, url="https://example.com/r.git")

        # Assert
        assert branches == ["main"]
        commands = executed_commands(mock_exec)
        assert commands[0] == ["git", "clone", "https://example.com/r.git", repo_dir]
        assert commands[1][-3:] == ["branch", "--list", "--format=%(refname:short)"]
        assert (tmp_path / "owner").is_dir()

    @pytest.mark.asyncio
    async def test_skips_clone_when_repo_exists(self, tmp_path):
        """Test no clone happens when the directory already holds a repository."""
        (tmp_path / ".git").mkdir()
        provider = CliGitProvider()
        process = make_process(stdout=b"main\n")

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)) as mock_exec:
            await provider.list_branches(dir=str(tmp_path), url="https://example.com/r.git")

        assert mock_exec.call_count == 1
        assert "clone" not in executed_commands(mock_exec)[0]


class TestBranchMutations:
    """Test create, delete and rename commands."""

    @pytest.mark.asyncio
    async def test_branch_without_checkout(self):
        provider = CliGitProvider()

        with patch(
            "asyncio.create_subprocess_exec", AsyncMock(return_value=make_process())
        ) as mock_exec:
            await provider.branch(dir=REPO_DIR, ref="feature")

        assert executed_commands(mock_exec) == [REPO_ARGS + ["branch", "feature"]]

    @pytest.mark.asyncio
    async def test_branch_with_checkout(self):
        """Test checkout runs after the branch is created."""
        provider = CliGitProvider()

        with patch(
            "asyncio.create_subprocess_exec",
            AsyncMock(side_effect=[make_process(), make_process()]),
        ) as mock_exec:
            await provider.branch(dir=REPO_DIR, ref="feature", checkout=True)

        assert executed_commands(mock_exec) == [
            REPO_ARGS + ["branch", "feature"],
            REPO_ARGS + ["checkout", "feature"],
        ]

    @pytest.mark.asyncio
    async def test_delete_branch(self):
        provider = CliGitProvider()

        with patch(
            "asyncio.create_subprocess_exec", AsyncMock(return_value=make_process())
        ) as mock_exec:
            await provider.delete_branch(dir=REPO_DIR, ref="old")

        assert executed_commands(mock_exec) == [REPO_ARGS + ["branch", "-d", "old"]]

    @pytest.mark.asyncio
    async def test_rename_branch(self):
        provider = CliGitProvider()

        with patch(
            "asyncio.create_subprocess_exec", AsyncMock(return_value=make_process())
        ) as mock_exec:
            await provider.rename_branch(dir=REPO_DIR, oldref="master", ref="main")

        assert executed_commands(mock_exec) == [REPO_ARGS + ["branch", "-m", "master", "main"]]

    @pytest.mark.asyncio
    async def test_custom_git_binary(self):
        provider = CliGitProvider(git_binary="/usr/local/bin/git")

        with patch(
            "asyncio.create_subprocess_exec", AsyncMock(return_value=make_process())
        ) as mock_exec:
            await provider.delete_branch(dir=REPO_DIR, ref="old")

        assert executed_commands(mock_exec)[0][0] == "/usr/local/bin/git"


class TestErrors:
    """Test error reporting."""

    @pytest.mark.asyncio
    async def test_non_zero_exit_raises(self):
        """Test a failing git command raises GitProviderError with details."""
        # Arrange
        provider = CliGitProvider()
        process = make_process(
            returncode=128, stderr=b"fatal: a branch named 'main' already exists\n"
        )

        # Act
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(GitProviderError) as exc_info:
                await provider.branch(dir=REPO_DIR, ref="main", checkout=True)

        # Assert
        error = exc_info.value
        assert error.returncode == 128
        assert error.stderr == "fatal: a branch named 'main' already exists"
        assert error.command == REPO_ARGS + ["branch", "main"]
        assert "already exists" in str(error)

    @pytest.mark.asyncio
    async def test_failed_create_skips_checkout(self):
        provider = CliGitProvider()
        mock_exec = AsyncMock(return_value=make_process(returncode=1, stderr=b"fatal"))

        with patch("asyncio.create_subprocess_exec", mock_exec):
            with pytest.raises(GitProviderError):
                await provider.branch(dir=REPO_DIR, ref="main", checkout=True)

        assert mock_exec.call_count == 1

    @pytest.mark.asyncio
    async def test_timeout_kills_process(self):
        """Test a hung command is killed and reported."""
        # Arrange
        provider = CliGitProvider(timeout=1)
        process = make_process()
        process.communicate = AsyncMock(side_effect=asyncio.TimeoutError)

        # Act
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(GitProviderError, match="timed out after 1 seconds"):
                await provider.list_branches(dir=REPO_DIR)

        # Assert
        process.kill.assert_called_once()
        process.wait.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_git_binary_raises(self):
        provider = CliGitProvider(git_binary="no-such-git")

        with patch(
            "asyncio.create_subprocess_exec",
            AsyncMock(side_effect=FileNotFoundError("no-such-git")),
        ):
            with pytest.raises(GitProviderError, match="Failed to start git"):
                await provider.list_branches(dir=REPO_DIR)
