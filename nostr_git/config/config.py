"""
Configuration module.

Settings are read once from the environment (and an optional .env file)
at import time.
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def get_int_env(key: str, default: int) -> int:
    """Get integer environment variable or raise if it is not a number."""
    value = os.getenv(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {value!r}")


# Base directory under which every repository working tree lives
GIT_ROOT_DIR = os.path.expanduser(os.getenv("GIT_ROOT_DIR", "~/nostr_git_repos"))

# Git CLI configuration
GIT_BINARY = os.getenv("GIT_BINARY", "git")
GIT_COMMAND_TIMEOUT = get_int_env("GIT_COMMAND_TIMEOUT", 60)
GIT_CLONE_TIMEOUT = get_int_env("GIT_CLONE_TIMEOUT", 300)
GIT_DEFAULT_REMOTE = os.getenv("GIT_DEFAULT_REMOTE", "origin")

# Constants
REPO_ANNOUNCEMENT_KIND = 30617
