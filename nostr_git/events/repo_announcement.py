"""
Repository announcement (NIP-34, kind 30617) validation and parsing.
"""

import logging
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from nostr_git.config.config import REPO_ANNOUNCEMENT_KIND
from nostr_git.exceptions import RepoAnnouncementValidationError
from nostr_git.models.repo_announcement import NostrEvent, RepoAnnouncement

logger = logging.getLogger(__name__)

EventInput = Union[NostrEvent, Mapping[str, Any]]

# Tags whose every value (not just the first) is meaningful
MULTI_VALUE_TAGS = ("web", "clone", "relays", "maintainers")


def _coerce_event(event: EventInput) -> NostrEvent:
    """Build a NostrEvent from a model or a raw mapping.

    Raises:
        RepoAnnouncementValidationError: If the event is structurally invalid
    """
    if isinstance(event, NostrEvent):
        return event
    if not isinstance(event, Mapping):
        raise RepoAnnouncementValidationError(
            f"Expected a Nostr event, got {type(event).__name__}"
        )
    try:
        return NostrEvent.model_validate(dict(event))
    except ValidationError as e:
        raise RepoAnnouncementValidationError(f"Invalid Nostr event: {e}") from e


def assert_repo_announcement_event(event: EventInput) -> NostrEvent:
    """
    Check that an event is a repository announcement.

    Args:
        event: NostrEvent instance or raw event dictionary

    Returns:
        The validated NostrEvent

    Raises:
        RepoAnnouncementValidationError: If the event is malformed, has the wrong
            kind, or lacks a ``d`` tag
    """
    nostr_event = _coerce_event(event)

    if nostr_event.kind != REPO_ANNOUNCEMENT_KIND:
        raise RepoAnnouncementValidationError(
            f"Expected repository announcement kind {REPO_ANNOUNCEMENT_KIND}, "
            f"got {nostr_event.kind}"
        )

    repo_id = nostr_event.first_tag_value("d")
    if not repo_id or not repo_id.strip():
        raise RepoAnnouncementValidationError(
            "Repository announcement is missing a non-empty 'd' tag"
        )

    return nostr_event


def _collect_values(nostr_event: NostrEvent, tag_name: str) -> list[str]:
    """Collect all values of all tags named ``tag_name``, keeping order."""
    values: list[str] = []
    for tag in nostr_event.tags:
        if tag[0] != tag_name:
            continue
        for value in tag[1:]:
            value = value.strip()
            if value and value not in values:
                values.append(value)
    return values


def _find_earliest_unique_commit(nostr_event: NostrEvent) -> Optional[str]:
    for tag in nostr_event.tags:
        if tag[0] == "r" and len(tag) > 2 and tag[2] == "euc":
            return tag[1]
    return None


def parse_repo_announcement_event(event: EventInput) -> RepoAnnouncement:
    """
    Extract repository identity and metadata from an announcement event.

    The event is not re-validated beyond coercion; call
    assert_repo_announcement_event first.

    Args:
        event: NostrEvent instance or raw event dictionary

    Returns:
        RepoAnnouncement with repo_id, name and the multi-value tag lists
    """
    nostr_event = _coerce_event(event)

    multi_values = {name: _collect_values(nostr_event, name) for name in MULTI_VALUE_TAGS}

    announcement = RepoAnnouncement(
        repo_id=(nostr_event.first_tag_value("d") or "").strip(),
        owner_pubkey=nostr_event.pubkey,
        name=nostr_event.first_tag_value("name") or None,
        description=nostr_event.first_tag_value("description") or None,
        hashtags=nostr_event.tag_values("t"),
        earliest_unique_commit=_find_earliest_unique_commit(nostr_event),
        created_at=nostr_event.created_at,
        **multi_values,
    )
    logger.debug(f"Parsed repository announcement {announcement.address}")
    return announcement
