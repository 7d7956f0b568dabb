"""The Secure Boot key hierarchy."""

from __future__ import annotations

from enum import IntEnum


class Hierarchy(IntEnum):
    """A level of the Secure Boot key hierarchy."""

    PK = 1
    KEK = 2
    DB = 3
    DBX = 4

    def description(self) -> str:
        return _DESCRIPTIONS[self]

    def __str__(self) -> str:
        return _NAMES[self]


_NAMES = {
    Hierarchy.PK: "PK",
    Hierarchy.KEK: "KEK",
    Hierarchy.DB: "db",
    Hierarchy.DBX: "dbx",
}

_DESCRIPTIONS = {
    Hierarchy.PK: "Platform Key",
    Hierarchy.KEK: "Key Exchange Key",
    Hierarchy.DB: "Database Key",
    Hierarchy.DBX: "Forbidden Database",
}