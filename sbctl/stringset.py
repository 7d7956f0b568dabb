"""A string option restricted to a set of allowed values."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class StringSet:
    """A string value that may only take one of ``allowed``."""

    allowed: list[str] = field(default_factory=list)
    value: str = ""

    def __post_init__(self) -> None:
        if self.allowed is None:
            self.allowed = []

    def set(self, value: str) -> None:
        if value not in self.allowed:
            raise ValueError(f"{value} is not included in {','.join(self.allowed)}")
        self.value = value

    def type_name(self) -> str:
        return "[" + ",".join(self.allowed) + "]"

    def __str__(self) -> str:
        return self.value