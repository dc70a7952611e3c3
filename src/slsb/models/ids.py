"""Short random identifiers for scenes, stages and package prefixes."""

from __future__ import annotations

import secrets
import string

ID_ALPHABET = string.ascii_letters + string.digits
ID_LENGTH = 8
PREFIX_LENGTH = 4


def new_id(size: int = ID_LENGTH) -> str:
    """Return a random alphanumeric token of *size* characters."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(size))


def new_prefix() -> str:
    """Return a namespace token for generated event names."""
    return new_id(PREFIX_LENGTH)
