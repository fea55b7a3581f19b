"""Cache key derivation."""

import hashlib

KEY_LENGTH = 64


def derive_key(prompt: str) -> str:
    """Derive the cache key for a rendered prompt.

    Byte-identical prompts always map to the same key.

    Args:
        prompt: The fully rendered prompt text

    Returns:
        Lowercase hex SHA-256 digest (KEY_LENGTH characters)
    """
    return hashlib.sha256(prompt.encode("utf-8")).hexdigest()
