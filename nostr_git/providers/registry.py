"""Process-wide default git provider."""

import logging
from typing import Optional

from nostr_git.providers.base import GitProvider
from nostr_git.providers.cli_provider import CliGitProvider

logger = logging.getLogger(__name__)

# Global provider instance
_global_provider: Optional[GitProvider] = None


def get_git_provider() -> GitProvider:
    """Get or create the global git provider.

    Defaults to a CliGitProvider built from configuration.
    """
    global _global_provider
    if _global_provider is None:
        _global_provider = CliGitProvider()
        logger.debug("Created default CliGitProvider")
    return _global_provider


def set_git_provider(provider: GitProvider) -> None:
    """Replace the global git provider."""
    global _global_provider
    if not isinstance(provider, GitProvider):
        raise TypeError(f"Expected a GitProvider, got {type(provider).__name__}")
    _global_provider = provider
    logger.debug(f"Git provider set to {type(provider).__name__}")


def reset_git_provider() -> None:
    """Forget the global git provider so the next call builds a fresh one."""
    global _global_provider
    _global_provider = None
