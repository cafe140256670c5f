"""Parser and writer settings."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable


DEFAULT_BLOCK_KEYS: frozenset[str] = frozenset()


@dataclass(frozen=True)
class CS2Options:
    """Per-call settings for scanning, tree building and rendering.

    strict:          raise ``UnterminatedGroup`` for a group header left
                     without any child line at end of input
    max_depth:       deepest dot level accepted before ``DepthExceeded``
    block_keys:      keys whose single-line values are read as hex byte
                     blocks (wrapped blocks are recognised without them)
    block_wrap:      bytes per line when rendering a block
    comment_prefix:  lines starting with this marker are skipped
    """

    strict: bool = False
    max_depth: int = 32
    block_keys: frozenset[str] = field(default=DEFAULT_BLOCK_KEYS)
    block_wrap: int = 16
    comment_prefix: str = "#"

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")
        if self.block_wrap < 1:
            raise ValueError(f"block_wrap must be positive, got {self.block_wrap}")
        if not isinstance(self.block_keys, frozenset):
            object.__setattr__(self, "block_keys", frozenset(self.block_keys))

    def with_block_keys(self, keys: Iterable[str]) -> CS2Options:
        """Return a copy that also treats *keys* as block markers."""
        extra = frozenset(keys)
        if extra <= self.block_keys:
            return self
        return replace(self, block_keys=self.block_keys | extra)
