"""Hash utilities for Twig."""

import hashlib

HASH_LENGTH = 40
HEX_DIGITS = frozenset('0123456789abcdef')


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 hash of data.

    Args:
        data: Bytes to hash

    Returns:
        40-character hex string
    """
    return hashlib.sha1(data).hexdigest()


def hash_blob_content(data: bytes) -> str:
    """
    Compute the object hash a blob with this content would have.

    Matches Blob(data).hash without building the object.

    Args:
        data: Raw file content

    Returns:
        40-character hex string
    """
    header = f"blob {len(data)}\0".encode()
    return hash_object(header + data)


def hash_file(filepath) -> str:
    """
    Compute the blob hash of a file's content.

    Args:
        filepath: Path to file

    Returns:
        40-character hex string
    """
    with open(filepath, 'rb') as f:
        return hash_blob_content(f.read())


def is_hash_prefix(value: str, min_length: int = 4) -> bool:
    """Check whether value could abbreviate an object hash."""
    return min_length <= len(value) <= HASH_LENGTH and all(c in HEX_DIGITS for c in value)
