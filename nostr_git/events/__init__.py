"""Nostr event validation and parsing."""

from nostr_git.events.repo_announcement import (
    assert_repo_announcement_event,
    parse_repo_announcement_event,
)

__all__ = [
    "assert_repo_announcement_event",
    "parse_repo_announcement_event",
]
