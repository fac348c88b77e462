"""
Nostr event and repository announcement models.

A repository announcement is a replaceable Nostr event of kind 30617 whose
tags describe the repository (``d`` identifier, name, clone urls, ...).
"""

import re
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from nostr_git.config.config import REPO_ANNOUNCEMENT_KIND

HEX_PUBKEY_PATTERN = re.compile(r"^[0-9a-f]{64}$")


class NostrEvent(BaseModel):
    """
    Raw Nostr event.

    Only the structure is checked here; signatures are never verified.
    """

    id: str = Field(default="", description="Event id (sha256 hex)")
    pubkey: str = Field(..., description="Publisher public key (64 hex chars)")
    created_at: int = Field(default=0, ge=0, description="Unix timestamp")
    kind: int = Field(..., ge=0, description="Event kind")
    tags: List[List[str]] = Field(default_factory=list, description="Event tags")
    content: str = Field(default="", description="Event content")
    sig: Optional[str] = Field(default=None, description="Schnorr signature (unverified)")

    @field_validator("pubkey")
    @classmethod
    def validate_pubkey(cls, v: str) -> str:
        """Normalize and validate the publisher key."""
        v = v.strip().lower()
        if not HEX_PUBKEY_PATTERN.match(v):
            raise ValueError("pubkey must be 64 hexadecimal characters")
        return v

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: List[List[str]]) -> List[List[str]]:
        """Every tag needs at least a name."""
        for tag in v:
            if not tag or not tag[0]:
                raise ValueError("tags must be non-empty lists starting with a tag name")
        return v

    def tag_values(self, name: str) -> List[str]:
        """Return the first value of every tag called ``name``."""
        return [tag[1] for tag in self.tags if tag[0] == name and len(tag) > 1]

    def first_tag_value(self, name: str) -> Optional[str]:
        values = self.tag_values(name)
        return values[0] if values else None


class RepoAnnouncement(BaseModel):
    """Repository identity and metadata extracted from an announcement event."""

    repo_id: str
    owner_pubkey: str
    name: Optional[str] = None
    description: Optional[str] = None
    web: List[str] = Field(default_factory=list)
    clone: List[str] = Field(default_factory=list)
    relays: List[str] = Field(default_factory=list)
    maintainers: List[str] = Field(default_factory=list)
    hashtags: List[str] = Field(default_factory=list)
    earliest_unique_commit: Optional[str] = None
    created_at: int = 0

    @property
    def address(self) -> str:
        """Replaceable event address (``kind:pubkey:d``)."""
        return f"{REPO_ANNOUNCEMENT_KIND}:{self.owner_pubkey}:{self.repo_id}"
