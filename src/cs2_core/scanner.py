"""Line scanner: reduces CS2 text to a stream of depth-tagged line tokens.

A CS2 line looks like one of::

    lokomotive              group header, depth 0
     .name=BR 01            scalar, depth 1
     ..nr=3                 scalar, depth 2
     .blocks=00 01 02       block marker with hex byte pairs
     ..03 04                block continuation line (depth + 1, no '=')
    [lokomotive]            top-level section header

Leading whitespace is not significant; depth is the run of leading dots.

Keys in ``CS2Options.block_keys`` are always read as blocks. Any other
scalar whose value is a run of hex bytes becomes a block once a
continuation line follows it, so wrapped blocks parse without a marker.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from .errors import MalformedLine
from .hexcodec import is_byte_run, parse_bytes
from .model import is_section_key
from .options import CS2Options


# ---------------------------------------------------------------------------
# LineToken
# ---------------------------------------------------------------------------

class TokenKind(Enum):
    Header = auto()    # key
    Scalar = auto()    # key=value
    Block = auto()     # block_key=hex pairs
    Section = auto()   # [name]


@dataclass(slots=True)
class LineToken:
    kind: TokenKind
    depth: int
    key: str
    value: str | None = None
    data: bytes | None = None
    line: int = 0


def _bad_key(key: str) -> bool:
    return not key or any(c.isspace() or c in "[]" for c in key)


# ---------------------------------------------------------------------------
# LineScanner
# ---------------------------------------------------------------------------

class LineScanner:
    """Lazy, restartable token stream over one CS2 text.

    Every ``iter()`` starts a fresh scan of the same text.
    """

    def __init__(self, text: str, options: CS2Options | None = None) -> None:
        self.text = text
        self.options = options or CS2Options()

    def __iter__(self) -> Iterator[LineToken]:
        return self._scan()

    def _scan(self) -> Iterator[LineToken]:
        block_keys = self.options.block_keys
        comment = self.options.comment_prefix
        # block, or byte-run scalar, that may still take continuation lines
        pending: LineToken | None = None

        for lineno, raw in enumerate(self.text.split("\n"), start=1):
            body = raw.rstrip("\r").lstrip()
            if not body.strip() or (comment and body.startswith(comment)):
                continue

            rest = body.lstrip(".")
            depth = len(body) - len(rest)

            if pending is not None:
                if depth == pending.depth + 1 and "=" not in rest and is_byte_run(rest):
                    if pending.kind is TokenKind.Scalar:
                        pending = LineToken(
                            TokenKind.Block,
                            pending.depth,
                            pending.key,
                            data=parse_bytes(pending.value),
                            line=pending.line,
                        )
                    pending.data += parse_bytes(rest)
                    continue
                yield pending
                pending = None

            if rest.startswith("["):
                yield self._section(rest, depth, lineno)
                continue

            eq = rest.find("=")
            if eq == -1:
                key = rest.rstrip()
                if _bad_key(key):
                    raise MalformedLine(f"invalid group header {raw.strip()!r}", line=lineno)
                yield LineToken(TokenKind.Header, depth, key, line=lineno)
                continue

            key, value = rest[:eq], rest[eq + 1:]
            if _bad_key(key):
                raise MalformedLine(f"invalid key in {raw.strip()!r}", line=lineno)
            if key in block_keys:
                try:
                    data = parse_bytes(value)
                except ValueError as exc:
                    raise MalformedLine(f"block {key!r}: {exc}", line=lineno) from None
                pending = LineToken(TokenKind.Block, depth, key, data=data, line=lineno)
                continue
            token = LineToken(TokenKind.Scalar, depth, key, value=value, line=lineno)
            if is_byte_run(value):
                pending = token
                continue
            yield token

        if pending is not None:
            yield pending

    @staticmethod
    def _section(rest: str, depth: int, lineno: int) -> LineToken:
        name = rest.rstrip()
        if depth:
            raise MalformedLine(f"section header {name!r} must not be indented", line=lineno)
        if not is_section_key(name) or _bad_key(name[1:-1]):
            raise MalformedLine(f"invalid section header {name!r}", line=lineno)
        return LineToken(TokenKind.Section, 0, name, line=lineno)


def scan(text: str, options: CS2Options | None = None) -> LineScanner:
    return LineScanner(text, options)
