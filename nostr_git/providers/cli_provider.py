"""
Git provider backed by the git command line.
"""

import asyncio
import logging
import os
from typing import List, Optional

from nostr_git.config.config import GIT_BINARY, GIT_CLONE_TIMEOUT, GIT_COMMAND_TIMEOUT
from nostr_git.exceptions import GitProviderError
from nostr_git.providers.base import GitProvider

logger = logging.getLogger(__name__)

BRANCH_FORMAT = "--format=%(refname:short)"


class CliGitProvider(GitProvider):
    """Runs git operations through the ``git`` binary."""

    def __init__(
        self,
        git_binary: str = GIT_BINARY,
        timeout: int = GIT_COMMAND_TIMEOUT,
        clone_timeout: int = GIT_CLONE_TIMEOUT,
    ):
        """
        Initialize the provider.

        Args:
            git_binary: Path or name of the git executable
            timeout: Timeout in seconds for ordinary commands
            clone_timeout: Timeout in seconds for clone-on-demand
        """
        self.git_binary = git_binary
        self.timeout = timeout
        self.clone_timeout = clone_timeout

    def _repo_args(self, dir: str) -> List[str]:
        return [self.git_binary, "--git-dir", os.path.join(dir, ".git"), "--work-tree", dir]

    async def _run(self, cmd: List[str], timeout: Optional[int] = None) -> str:
        """
        Run a git command and return its stdout.

        Args:
            cmd: Command as list of strings
            timeout: Command timeout in seconds

        Returns:
            Decoded stdout

        Raises:
            GitProviderError: If git cannot be started, times out or exits non-zero
        """
        timeout = timeout or self.timeout
        logger.debug(f"Running git command: {' '.join(cmd)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise GitProviderError(f"Failed to start git: {e}", command=cmd) from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise GitProviderError(
                f"Command timed out after {timeout} seconds", command=cmd
            )

        stderr_text = stderr.decode("utf-8", errors="replace").strip()
        if process.returncode != 0:
            error_msg = f"Git command failed with exit code {process.returncode}: {stderr_text}"
            logger.error(error_msg)
            raise GitProviderError(
                error_msg, command=cmd, returncode=process.returncode, stderr=stderr_text
            )

        return stdout.decode("utf-8", errors="replace")

    @staticmethod
    def _parse_branch_lines(output: str) -> List[str]:
        return [line.strip() for line in output.splitlines() if line.strip()]

    async def _ensure_cloned(self, dir: str, url: str) -> None:
        """Clone ``url`` into ``dir`` unless it already holds a repository."""
        if os.path.isdir(os.path.join(dir, ".git")):
            return

        logger.info(f"Cloning {url} into {dir}")
        parent = os.path.dirname(dir)
        if parent:
            os.makedirs(parent, exist_ok=True)
        await self._run([self.git_binary, "clone", url, dir], timeout=self.clone_timeout)

    async def list_branches(
        self, dir: str, remote: Optional[str] = None, url: Optional[str] = None
    ) -> List[str]:
        """List local branches, or ``remote``'s branches as ``<remote>/<name>``."""
        if url:
            await self._ensure_cloned(dir, url)

        if remote:
            output = await self._run(
                self._repo_args(dir) + ["branch", "-r", "--list", f"{remote}/*", BRANCH_FORMAT]
            )
            # Drop the symbolic <remote>/HEAD ref and bare remote names
            return [
                name
                for name in self._parse_branch_lines(output)
                if name != remote and name != f"{remote}/HEAD"
            ]

        output = await self._run(self._repo_args(dir) + ["branch", "--list", BRANCH_FORMAT])
        return self._parse_branch_lines(output)

    async def branch(self, dir: str, ref: str, checkout: bool = False) -> None:
        await self._run(self._repo_args(dir) + ["branch", ref])
        logger.info(f"Branch {ref} created in {dir}")

        if checkout:
            await self._run(self._repo_args(dir) + ["checkout", ref])
            logger.info(f"Checked out branch {ref}")

    async def delete_branch(self, dir: str, ref: str) -> None:
        await self._run(self._repo_args(dir) + ["branch", "-d", ref])
        logger.info(f"Branch {ref} deleted from {dir}")

    async def rename_branch(self, dir: str, oldref: str, ref: str) -> None:
        await self._run(self._repo_args(dir) + ["branch", "-m", oldref, ref])
        logger.info(f"Branch {oldref} renamed to {ref} in {dir}")
