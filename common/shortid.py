"""Short opaque identifiers used as primary keys for files, artifacts and tags."""

import secrets

from common.constants import (
    SHORTID_ALPHABET,
    SHORTID_MAX_LENGTH,
    SHORTID_MIN_LENGTH,
    SHORTID_MIN_VALID_LENGTH,
)

_ALPHABET_SET = frozenset(SHORTID_ALPHABET)


def generate(length: int = None) -> str:
    """
    Generate a new short identifier.

    Args:
        length: Exact length to generate. Defaults to a random length
                between SHORTID_MIN_LENGTH and SHORTID_MAX_LENGTH.

    Returns:
        Identifier made of URL-safe alphabet symbols
    """
    if length is None:
        length = SHORTID_MIN_LENGTH + secrets.randbelow(SHORTID_MAX_LENGTH - SHORTID_MIN_LENGTH + 1)
    if length < SHORTID_MIN_VALID_LENGTH:
        raise ValueError(f"Identifier length must be at least {SHORTID_MIN_VALID_LENGTH}")
    return ''.join(secrets.choice(SHORTID_ALPHABET) for _ in range(length))


def is_valid(identifier) -> bool:
    """
    Check that identifier looks like a short identifier.

    Returns:
        True for strings of at least SHORTID_MIN_VALID_LENGTH alphabet symbols
    """
    if not isinstance(identifier, str) or len(identifier) < SHORTID_MIN_VALID_LENGTH:
        return False
    return all(char in _ALPHABET_SET for char in identifier)
