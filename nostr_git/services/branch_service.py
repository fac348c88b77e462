"""
Branch Service for branch operations on Nostr-announced repositories.

Translates branch intents (list, create, delete, rename) into git provider
calls. Two directory schemes are in use:

- announcement-based listing resolves ``<root_dir>/<canonical repo key>``
- owner/repo operations resolve ``<root_dir>/<owner>/<repo>``

The two schemes are not guaranteed to address the same directory for the
same logical repository.
"""

import logging
import os
from typing import List, Optional

from nostr_git.config.config import GIT_DEFAULT_REMOTE, GIT_ROOT_DIR
from nostr_git.events.repo_announcement import (
    EventInput,
    assert_repo_announcement_event,
    parse_repo_announcement_event,
)
from nostr_git.exceptions import CanonicalKeyError, RepositoryPathError
from nostr_git.models.types import Branch, BranchListing, ListingOutcome
from nostr_git.providers.base import GitProvider
from nostr_git.providers.registry import get_git_provider
from nostr_git.utils.canonical_repo_key import canonical_repo_key

logger = logging.getLogger(__name__)

REMOTE_PREFIX = f"{GIT_DEFAULT_REMOTE}/"


class BranchService:
    """
    Facade for branch operations.

    Holds no state besides its configuration; every call reflects the
    provider's live state.
    """

    def __init__(self, root_dir: Optional[str] = None, git_provider: Optional[GitProvider] = None):
        """
        Initialize branch service.

        Args:
            root_dir: Base directory for repository working trees (defaults to GIT_ROOT_DIR)
            git_provider: Git provider (optional, uses the global provider if not provided)
        """
        self.root_dir = root_dir or GIT_ROOT_DIR
        self._git_provider = git_provider

    @property
    def git_provider(self) -> GitProvider:
        return self._git_provider or get_git_provider()

    def resolve_event_dir(self, owner_pubkey: str, repo_id: str, name: Optional[str] = None) -> str:
        """
        Resolve the working directory for an announced repository.

        The repo id is canonicalized directly; announcements that only carry
        a bare name fall back to ``<pubkey>:<name or repo_id>``.

        Raises:
            CanonicalKeyError: If neither identifier can be canonicalized
        """
        try:
            canonical_key = canonical_repo_key(repo_id)
        except CanonicalKeyError:
            fallback_id = f"{owner_pubkey}:{name or repo_id}"
            logger.debug(f"Repo id '{repo_id}' is not canonical, falling back to '{fallback_id}'")
            canonical_key = canonical_repo_key(fallback_id)

        return os.path.join(self.root_dir, canonical_key)

    def resolve_owner_repo_dir(self, owner: str, repo: str) -> str:
        """
        Resolve ``<root_dir>/<owner>/<repo>``.

        Raises:
            RepositoryPathError: If owner or repo is not a single path segment
        """
        for segment in (owner, repo):
            if (
                not segment
                or segment in (".", "..")
                or "/" in segment
                or "\\" in segment
                or os.path.isabs(segment)
            ):
                raise RepositoryPathError(
                    f"Invalid repository path segment '{segment}' for {owner}/{repo}"
                )
        return os.path.join(self.root_dir, owner, repo)

    async def list_branches_from_event(self, repo_event: EventInput) -> BranchListing:
        """
        List local and origin branches of an announced repository.

        Args:
            repo_event: Repository announcement event (model or raw dict)

        Returns:
            BranchListing with unique branch names, local branches first.
            ``outcome`` is LOCAL_ONLY if origin branches could not be listed.

        Raises:
            RepoAnnouncementValidationError: If the event is not a valid announcement
            CanonicalKeyError: If no canonical key can be derived
            Exception: Any provider error from the local listing

        Example:
            >>> listing = await service.list_branches_from_event(event)
            >>> listing.names()
            ['main', 'dev', 'feature']
        """
        nostr_event = assert_repo_announcement_event(repo_event)
        repo = parse_repo_announcement_event(nostr_event)

        dir = self.resolve_event_dir(nostr_event.pubkey, repo.repo_id, repo.name)
        logger.debug(f"Listing branches for {repo.address} in {dir}")

        git = self.git_provider
        local_branches = await git.list_branches(dir=dir)

        remote_branches: List[str] = []
        outcome = ListingOutcome.FULL
        remote_error = None
        try:
            remote_branches = await git.list_branches(dir=dir, remote=GIT_DEFAULT_REMOTE)
        except Exception as e:
            logger.warning(f"Could not list remote branches for {dir}: {e}")
            outcome = ListingOutcome.LOCAL_ONLY
            remote_error = str(e)

        # dict keeps insertion order: local branches first, then remote-only names
        all_branches = dict.fromkeys(local_branches)
        for branch in remote_branches:
            if branch.startswith(REMOTE_PREFIX):
                branch = branch[len(REMOTE_PREFIX):]
            all_branches.setdefault(branch)

        return BranchListing(
            branches=[Branch(name=name, is_head=False) for name in all_branches],
            outcome=outcome,
            remote_error=remote_error,
        )

    async def list_branches(self, dir: str, url: Optional[str] = None) -> List[Branch]:
        """
        List all branches in a repository directory.

        Args:
            dir: Repository working directory
            url: Remote url the provider may clone from when ``dir`` is missing

        Returns:
            One Branch per name, in provider order
        """
        branches = await self.git_provider.list_branches(dir=dir, url=url)
        return [Branch(name=name) for name in branches]

    async def create_branch(
        self, owner: str, repo: str, branch: str, checkout: bool = False
    ) -> None:
        """Create a new branch, optionally checking it out."""
        dir = self.resolve_owner_repo_dir(owner, repo)
        await self.git_provider.branch(dir=dir, ref=branch, checkout=checkout)

    async def delete_branch(self, owner: str, repo: str, branch: str) -> None:
        """Delete a branch."""
        dir = self.resolve_owner_repo_dir(owner, repo)
        await self.git_provider.delete_branch(dir=dir, ref=branch)

    async def rename_branch(self, owner: str, repo: str, old_branch: str, new_branch: str) -> None:
        """Rename a branch."""
        dir = self.resolve_owner_repo_dir(owner, repo)
        await self.git_provider.rename_branch(dir=dir, oldref=old_branch, ref=new_branch)


# Singleton instance for application-wide use
_branch_service_instance: Optional[BranchService] = None


def get_branch_service() -> BranchService:
    """
    Get singleton BranchService instance.

    Returns:
        BranchService: Shared service configured from the environment
    """
    global _branch_service_instance
    if _branch_service_instance is None:
        _branch_service_instance = BranchService()
    return _branch_service_instance


async def list_branches_from_event(repo_event: EventInput) -> BranchListing:
    return await get_branch_service().list_branches_from_event(repo_event)


async def list_branches(dir: str, url: Optional[str] = None) -> List[Branch]:
    return await get_branch_service().list_branches(dir=dir, url=url)


async def create_branch(owner: str, repo: str, branch: str, checkout: bool = False) -> None:
    await get_branch_service().create_branch(owner, repo, branch, checkout=checkout)


async def delete_branch(owner: str, repo: str, branch: str) -> None:
    await get_branch_service().delete_branch(owner, repo, branch)


async def rename_branch(owner: str, repo: str, old_branch: str, new_branch: str) -> None:
    await get_branch_service().rename_branch(owner, repo, old_branch, new_branch)
