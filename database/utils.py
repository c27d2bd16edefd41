# database/utils.py
"""
Utility functions for converting values to and from their DB representation.
"""

from typing import Optional

# Characters with special meaning inside a LIKE / ILIKE pattern
LIKE_ESCAPE_CHAR = '\\'
_LIKE_SPECIAL_CHARS = (LIKE_ESCAPE_CHAR, '%', '_')


def to_buffer(address: str) -> bytes:
    """
    Converts a 0x-prefixed hex address to the binary form stored in BYTEA columns.

    Raises:
        ValueError: If the value is not valid hex
    """
    if address.startswith('0x'):
        address = address[2:]
    return bytes.fromhex(address.lower())


def from_buffer(value: Optional[bytes]) -> Optional[str]:
    """
    Converts a BYTEA value (bytes / memoryview) back to a 0x-prefixed lowercase hex string.
    """
    if value is None:
        return None
    return '0x' + bytes(value).hex()


def escape_like(value: str) -> str:
    """Escapes LIKE wildcards so user input only ever matches literally."""
    for char in _LIKE_SPECIAL_CHARS:
        value = value.replace(char, LIKE_ESCAPE_CHAR + char)
    return value
