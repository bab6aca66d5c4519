"""
License key generation.

Keys are five groups of five characters from an alphabet without the
look-alike characters I, O, 0 and 1, e.g. ``7KQ2M-XW3PD-...``.
"""

import secrets

KEY_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
KEY_GROUPS = 5
KEY_GROUP_LENGTH = 5
UNIQUE_KEY_ATTEMPTS = 5


def generate_license_key() -> str:
    """
    Generate a license key in format: XXXXX-XXXXX-XXXXX-XXXXX-XXXXX.

    Returns:
        Generated license key string
    """
    groups = [
        "".join(secrets.choice(KEY_ALPHABET) for _ in range(KEY_GROUP_LENGTH))
        for _ in range(KEY_GROUPS)
    ]
    return "-".join(groups)


def generate_suffixed_license_key() -> str:
    """Key with an extra ``-XXXX`` hex group, used once plain attempts collide."""
    return f"{generate_license_key()}-{secrets.token_hex(2).upper()}"
