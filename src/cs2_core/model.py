"""Structural node model: the untyped tree between CS2 text and typed records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union


# ---------------------------------------------------------------------------
# Leaf nodes
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Scalar:
    """Raw textual value, e.g. ``BR 01``, ``-1`` or ``0x4001``."""
    text: str
    line: int | None = field(default=None, compare=False)


@dataclass(slots=True)
class Block:
    """Fixed-size binary payload written as hex byte pairs."""
    data: bytes
    line: int | None = field(default=None, compare=False)


# ---------------------------------------------------------------------------
# Record
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Entry:
    key: str
    value: Node


@dataclass(slots=True)
class Record:
    """Ordered group of child entries; keys may repeat.

    Repeated keys form an implicit list. Entry order is the source order
    and is what the writer emits, so no associative container is used.
    """

    entries: list[Entry] = field(default_factory=list)
    line: int | None = field(default=None, compare=False)

    def append(self, key: str, value: Node) -> Node:
        self.entries.append(Entry(key, value))
        return value

    def get_all(self, key: str) -> list[Node]:
        return [e.value for e in self.entries if e.key == key]

    def get(self, key: str) -> Node | None:
        """First node stored under *key*, or ``None``."""
        for e in self.entries:
            if e.key == key:
                return e.value
        return None

    def keys(self) -> list[str]:
        """Distinct keys in order of first appearance."""
        seen: dict[str, None] = {}
        for e in self.entries:
            seen.setdefault(e.key, None)
        return list(seen)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


Node = Union[Scalar, Block, Record]


def is_section_key(key: str) -> bool:
    """``[name]`` keys open a top-level section."""
    return len(key) > 2 and key.startswith("[") and key.endswith("]")
