"""
Git provider interface.

Implementations run git operations against a working directory. All methods
are coroutines and raise provider-specific errors on failure; callers are
expected to let those errors propagate.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class GitProvider(ABC):
    """Abstract base class for git providers."""

    @abstractmethod
    async def list_branches(
        self, dir: str, remote: Optional[str] = None, url: Optional[str] = None
    ) -> List[str]:
        """
        List branch names.

        Args:
            dir: Repository working directory
            remote: Remote name; when set, list that remote's branches
                (names are returned as ``<remote>/<branch>``)
            url: Remote url the provider may clone from if ``dir`` is missing

        Returns:
            Branch names in provider order
        """
        pass

    @abstractmethod
    async def branch(self, dir: str, ref: str, checkout: bool = False) -> None:
        """
        Create a branch at the current HEAD.

        Args:
            dir: Repository working directory
            ref: New branch name
            checkout: Check out the new branch after creating it
        """
        pass

    @abstractmethod
    async def delete_branch(self, dir: str, ref: str) -> None:
        """Delete a local branch."""
        pass

    @abstractmethod
    async def rename_branch(self, dir: str, oldref: str, ref: str) -> None:
        """Rename local branch ``oldref`` to ``ref``."""
        pass
