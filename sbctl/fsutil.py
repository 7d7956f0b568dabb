"""File system helpers shared by the rest of the package."""

from __future__ import annotations

import os
import shutil
import stat
from typing import BinaryIO

_MSDOS_MAGIC = b"MZ"


def write_file(path: str, data: bytes, mode: int = 0o644) -> None:
    """Write ``data`` to ``path``, creating it with ``mode`` or truncating it."""
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
    with os.fdopen(fd, "wb") as handle:
        handle.write(data)


def read_file(path: str) -> bytes:
    """Return the whole content of ``path``."""
    with open(path, "rb") as handle:
        return handle.read()


def create_directory(path: str) -> None:
    """Create ``path`` and any missing parents."""
    os.makedirs(path, exist_ok=True)


def read_or_create_file(path: str) -> bytes:
    """Read ``path``; if it does not exist, create it empty and return no data."""
    try:
        return read_file(path)
    except FileNotFoundError:
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, "wb"):
            pass
        return b""


def check_msdos(stream: BinaryIO) -> bool:
    """Tell whether the stream starts with the MS-DOS executable magic."""
    header = b""
    while len(header) < len(_MSDOS_MAGIC):
        chunk = stream.read(len(_MSDOS_MAGIC) - len(header))
        if not chunk:
            return False
        header += chunk
    return header == _MSDOS_MAGIC


def copy_file(src: str, dst: str) -> None:
    """Copy the content of ``src`` to ``dst`` and give it the mode of ``src``."""
    with open(src, "rb") as source:
        fd = os.open(dst, os.O_RDWR | os.O_CREAT | os.O_TRUNC, 0o644)
        with os.fdopen(fd, "wb") as target:
            shutil.copyfileobj(source, target)
    os.chmod(dst, stat.S_IMODE(os.stat(src).st_mode))


def copy_directory(src: str, dst: str) -> None:
    """Copy a tree: directories are created, files are copied."""
    info = os.lstat(src)
    if not stat.S_ISDIR(info.st_mode):
        copy_file(src, dst)
        return
    os.makedirs(dst, mode=stat.S_IMODE(info.st_mode), exist_ok=True)
    with os.scandir(src) as entries:
        children = sorted(entries, key=lambda entry: entry.name)
    for entry in children:
        copy_directory(entry.path, os.path.join(dst, entry.name))


def _normalize_checked(path: str) -> str:
    return "/".join(path.split("/")[2:])


class CheckedPaths:
    """Paths already examined, compared without their first directory."""

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def add(self, path: str) -> None:
        self._seen.add(_normalize_checked(path))

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        return _normalize_checked(path) in self._seen

    def __len__(self) -> int:
        return len(self._seen)