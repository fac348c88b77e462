"""Data models for branches and repository announcements."""

from nostr_git.models.repo_announcement import NostrEvent, RepoAnnouncement
from nostr_git.models.types import Branch, BranchListing, ListingOutcome

__all__ = [
    "Branch",
    "BranchListing",
    "ListingOutcome",
    "NostrEvent",
    "RepoAnnouncement",
]
