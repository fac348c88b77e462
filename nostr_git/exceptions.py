"""Exceptions raised by nostr_git."""

from typing import Optional, Sequence


class NostrGitError(Exception):
    """Base class for all nostr_git errors."""

    pass


class RepoAnnouncementValidationError(NostrGitError, ValueError):
    """Raised when an event is not a structurally valid repository announcement."""

    pass


class CanonicalKeyError(NostrGitError, ValueError):
    """Raised when a repository identifier cannot be canonicalized."""

    pass


class GitProviderError(NostrGitError):
    """Raised when a git provider operation fails."""

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        super().__init__(message)
        self.command = list(command) if command else []
        self.returncode = returncode
        self.stderr = stderr


class RepositoryPathError(NostrGitError, ValueError):
    """Raised when an owner or repo name would resolve outside the storage root."""

    pass
