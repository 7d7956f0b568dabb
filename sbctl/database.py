"""The JSON database of files that are to be signed."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterator

from .fsutil import read_or_create_file, write_file


class DatabaseError(Exception):
    """The file database could not be read or parsed."""


@dataclass
class SigningEntry:
    """A file to sign and where the signed copy is written."""

    file: str = ""
    output_file: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"file": self.file, "output_file": self.output_file}

    @classmethod
    def from_dict(cls, data: Any) -> "SigningEntry":
        if not isinstance(data, dict):
            raise DatabaseError(f"failed to parse json: expected an object, got {data!r}")
        values = {}
        for key, attr in (("file", "file"), ("output_file", "output_file")):
            value = data.get(key, "")
            if value is None:
                value = ""
            if not isinstance(value, str):
                raise DatabaseError(f"failed to parse json: {key} must be a string")
            values[attr] = value
        return cls(**values)


def read_file_database(dbpath: str) -> dict[str, SigningEntry]:
    """Read the database at ``dbpath``, creating an empty one if missing."""
    raw = read_or_create_file(dbpath)
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except (ValueError, UnicodeDecodeError) as exc:
        raise DatabaseError(f"failed to parse json: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DatabaseError("failed to parse json: expected an object")
    return {key: SigningEntry.from_dict(value) for key, value in data.items()}


def write_file_database(dbpath: str, files: dict[str, SigningEntry]) -> None:
    """Write the database to ``dbpath`` as indented JSON."""
    payload = {key: entry.to_dict() for key, entry in files.items()}
    text = json.dumps(payload, indent=4, sort_keys=True, ensure_ascii=False)
    write_file(dbpath, text.encode("utf-8"), 0o644)


def iter_signing_entries(dbpath: str) -> Iterator[SigningEntry]:
    """Yield every entry of the database at ``dbpath``."""
    try:
        files = read_file_database(dbpath)
    except (OSError, DatabaseError) as exc:
        raise DatabaseError(f"couldn't open database {dbpath}: {exc}") from exc
    yield from files.values()