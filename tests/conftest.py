"""Pytest configuration for tests.

Sets up Python path and fixtures for all tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to Python path so imports work correctly
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from nostr_git.providers.registry import reset_git_provider  # noqa: E402
from nostr_git.services import branch_service  # noqa: E402


@pytest.fixture(autouse=True)
def reset_global_singletons():
    """Keep the global provider and service from leaking between tests."""
    reset_git_provider()
    branch_service._branch_service_instance = None
    yield
    reset_git_provider()
    branch_service._branch_service_instance = None
