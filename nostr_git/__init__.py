"""
Branch management for Nostr-announced git repositories.

Exposes the branch operations facade and the git provider abstraction it
delegates to.
"""

from nostr_git.models.types import Branch, BranchListing, ListingOutcome
from nostr_git.providers import GitProvider, get_git_provider, set_git_provider
from nostr_git.services.branch_service import (
    BranchService,
    create_branch,
    delete_branch,
    list_branches,
    list_branches_from_event,
    rename_branch,
)

__all__ = [
    "Branch",
    "BranchListing",
    "ListingOutcome",
    "BranchService",
    "GitProvider",
    "get_git_provider",
    "set_git_provider",
    "list_branches_from_event",
    "list_branches",
    "create_branch",
    "delete_branch",
    "rename_branch",
]
