"""
Canonical repository keys.

A canonical key identifies a repository by its owner and name and selects
the repository's directory under the storage root. Accepted identifiers:

- ``<owner>/<name>``
- ``<owner>:<name>``

where ``owner`` is a 64-character hex public key or an ``npub1`` bech32 key.
Names may be display names: runs of characters outside ``[A-Za-z0-9._-]``
become a single ``-``. Path separators, empty names, ``.`` and ``..`` are
rejected. The canonical form is ``<owner>/<name>`` with hex owners lowercased.
"""

import re

from nostr_git.exceptions import CanonicalKeyError

HEX_OWNER_PATTERN = re.compile(r"^[0-9a-fA-F]{64}$")
NPUB_OWNER_PATTERN = re.compile(r"^npub1[02-9ac-hj-np-z]{58}$")
UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def _split_identifier(identifier: str) -> tuple[str, str]:
    """Split an identifier on the first '/' or ':' separator."""
    for separator in ("/", ":"):
        if separator in identifier:
            owner, name = identifier.split(separator, 1)
            return owner.strip(), name.strip()
    raise CanonicalKeyError(
        f"Repository identifier '{identifier}' has no owner. "
        f"Expected '<owner>/<name>' or '<owner>:<name>'"
    )


def _normalize_owner(owner: str) -> str:
    if HEX_OWNER_PATTERN.match(owner):
        return owner.lower()
    if NPUB_OWNER_PATTERN.match(owner):
        return owner
    raise CanonicalKeyError(f"Invalid repository owner '{owner}': expected hex pubkey or npub")


def _slugify_name(name: str) -> str:
    """Turn a display name into a single path segment ('Nostr Git' -> 'Nostr-Git')."""
    if "/" in name or "\\" in name:
        raise CanonicalKeyError(f"Invalid repository name '{name}': path separators are not allowed")

    slug = UNSAFE_NAME_CHARS.sub("-", name).strip("-")
    if not slug or slug in (".", ".."):
        raise CanonicalKeyError(f"Invalid repository name '{name}'")
    return slug


def canonical_repo_key(identifier: str) -> str:
    """
    Compute the canonical key for a repository identifier.

    Args:
        identifier: Repository identifier such as ``<pubkey>:<name>``

    Returns:
        Canonical key ``<owner>/<name>``

    Raises:
        CanonicalKeyError: If the identifier is empty or malformed

    Example:
        >>> canonical_repo_key("ABCD...EF:nostr-git")
        'abcd...ef/nostr-git'
    """
    if not isinstance(identifier, str) or not identifier.strip():
        raise CanonicalKeyError("Repository identifier cannot be empty")

    owner, name = _split_identifier(identifier.strip())
    return f"{_normalize_owner(owner)}/{_slugify_name(name)}"
