"""
Git Provider Module

The git provider performs the actual git work against a working directory:
- Branch listing (local and remote)
- Branch creation, deletion and rename
- Clone-on-demand for listings seeded from a url
"""

from nostr_git.providers.base import GitProvider
from nostr_git.providers.cli_provider import CliGitProvider
from nostr_git.providers.registry import get_git_provider, reset_git_provider, set_git_provider

__all__ = [
    "GitProvider",
    "CliGitProvider",
    "get_git_provider",
    "set_git_provider",
    "reset_git_provider",
]
