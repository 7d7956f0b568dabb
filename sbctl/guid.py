"""Owner GUID creation."""

from __future__ import annotations

import os
import uuid

from .fsutil import read_file, write_file


def create_uuid() -> bytes:
    """Return a new random UUID in its textual form."""
    return str(uuid.uuid4()).encode("ascii")


def create_guid(guid_path: str) -> bytes:
    """Return the GUID stored at ``guid_path``, creating one if it is missing."""
    try:
        os.stat(guid_path)
    except FileNotFoundError:
        value = create_uuid()
        write_file(guid_path, value, 0o644)
        return value
    return read_file(guid_path)