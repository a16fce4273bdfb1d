"""Utility functions for the group blueprint."""

import secrets

from prayerlist.core.constants import (
    GROUP_CODE_ALPHABET,
    GROUP_CODE_MAX_LENGTH,
    GROUP_CODE_MIN_LENGTH,
)


def generate_group_code():
    """Generate a random 6-8 character alphanumeric join code."""
    length = GROUP_CODE_MIN_LENGTH + secrets.randbelow(
        GROUP_CODE_MAX_LENGTH - GROUP_CODE_MIN_LENGTH + 1
    )
    code = "".join(secrets.choice(GROUP_CODE_ALPHABET) for _ in range(length))
    return normalize_code(code)


def normalize_code(code):
    """Normalize a join code for storage and comparison."""
    return (code or "").strip().upper()


def membership_id(group_id, user_id):
    """Return the document id of the (group, user) membership."""
    return f"{group_id}_{user_id}"
