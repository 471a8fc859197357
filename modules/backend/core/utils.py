"""
Core Utilities.

Shared utility functions used across the backend.
All modules should import utilities from this module.
"""

import re
from datetime import datetime, timezone
from pathlib import PurePosixPath
from uuid import uuid4

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application should be timezone-naive
    and assumed to be UTC. This ensures consistent behavior across
    the codebase and simplifies database storage.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def sanitize_filename(filename: str) -> str:
    """
    Reduce an uploaded filename to a safe single path segment.

    Directory components are dropped and runs of characters outside
    ``[A-Za-z0-9._-]`` collapse to a single dash.

    Args:
        filename: Original client-side filename

    Returns:
        Sanitized filename, ``"upload"`` if nothing usable remains
    """
    name = PurePosixPath(filename.replace("\\", "/")).name
    name = _UNSAFE_FILENAME_CHARS.sub("-", name).strip("-.")
    return name or "upload"


def derive_storage_path(filename: str, prefix: str = "images") -> str:
    """
    Build a unique blob storage path for an uploaded file.

    A random uuid4 token keeps paths distinct even for uploads of the
    same filename in the same instant.

    Args:
        filename: Original client-side filename
        prefix: Key prefix inside the blob store

    Returns:
        Path of the form ``<prefix>/<token>-<filename>``

    Example:
        >>> derive_storage_path("My Cat.png")  # doctest: +SKIP
        'images/3f0c...e1-My-Cat.png'
    """
    token = uuid4().hex
    safe_name = sanitize_filename(filename)
    prefix = prefix.strip("/")
    key = f"{token}-{safe_name}"
    return f"{prefix}/{key}" if prefix else key
