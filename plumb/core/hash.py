"""Hash utilities for Plumb."""

import hashlib


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 hash of data.

    Args:
        data: Bytes to hash

    Returns:
        40-character hex string
    """
    return hashlib.sha1(data).hexdigest()


def hash_file(filepath: str) -> str:
    """
    Compute the blob hash of a file, as ``hash-object`` reports it.

    Args:
        filepath: Path to file

    Returns:
        40-character hex string
    """
    with open(filepath, 'rb') as f:
        return object_hash('blob', f.read())


def object_header(kind: str, size: int) -> bytes:
    """Build the ``<kind> <size>\\0`` header that prefixes every object."""
    return f"{kind} {size}\0".encode('ascii')


def canonical_form(kind: str, payload: bytes) -> bytes:
    """Return header + payload, the exact bytes an object's hash covers."""
    return object_header(kind, len(payload)) + payload


def object_hash(kind: str, payload: bytes) -> str:
    """
    Compute the identity of an object without storing it.

    Args:
        kind: Object kind name ('blob', 'tree' or 'commit')
        payload: Object payload

    Returns:
        40-character hex string
    """
    return hash_object(canonical_form(kind, payload))


def is_hex_hash(value: str) -> bool:
    """Check whether value is a full 40-character lowercase hex hash."""
    return len(value) == 40 and all(c in '0123456789abcdef' for c in value)
