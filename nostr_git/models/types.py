"""
Shared types for branch operations.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional


class ListingOutcome(str, Enum):
    FULL = "full"
    LOCAL_ONLY = "local_only"


@dataclass
class Branch:
    name: str
    oid: Optional[str] = None
    is_head: bool = False


@dataclass
class BranchListing:
    """Result of listing branches for an announced repository.

    ``outcome`` is ``LOCAL_ONLY`` when the remote listing failed and only
    local branches could be collected; ``remote_error`` then holds the
    provider's error message.
    """

    branches: List[Branch] = field(default_factory=list)
    outcome: ListingOutcome = ListingOutcome.FULL
    remote_error: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.outcome is ListingOutcome.LOCAL_ONLY

    def names(self) -> List[str]:
        return [branch.name for branch in self.branches]

    def __iter__(self) -> Iterator[Branch]:
        return iter(self.branches)

    def __len__(self) -> int:
        return len(self.branches)
