"""Reader layer: builds the structural tree from scanned line tokens."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from .errors import DepthExceeded, UnexpectedIndent, UnterminatedGroup
from .model import Block, Record, Scalar
from .options import CS2Options
from .scanner import LineScanner, LineToken, TokenKind

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Frame:
    depth: int  # dot depth of the header; children sit at depth + 1
    record: Record
    key: str


# ---------------------------------------------------------------------------
# Tree building
# ---------------------------------------------------------------------------

def build_tree(tokens: Iterable[LineToken], options: CS2Options | None = None) -> Record:
    """Fold a token stream into one root Record.

    Open groups are tracked on an explicit stack, so nesting depth never
    turns into Python recursion. A ``[section]`` header closes everything
    and becomes the base frame for the depth-0 lines that follow it.
    """
    options = options or CS2Options()
    root = Record()
    stack = [_Frame(-1, root, "")]
    base = 1  # frames below this index are never popped by indentation

    for tok in tokens:
        if tok.depth > options.max_depth:
            raise DepthExceeded(
                f"nesting depth {tok.depth} exceeds limit {options.max_depth}",
                line=tok.line,
            )

        if tok.kind is TokenKind.Section:
            section = Record(line=tok.line)
            root.append(tok.key, section)
            del stack[1:]
            stack.append(_Frame(-1, section, tok.key))
            base = 2
            continue

        while len(stack) > base and stack[-1].depth >= tok.depth:
            stack.pop()

        top = stack[-1]
        if tok.depth > top.depth + 1:
            raise UnexpectedIndent(
                f"{tok.key!r} at depth {tok.depth} has no enclosing group at depth {tok.depth - 1}",
                line=tok.line,
            )

        if tok.kind is TokenKind.Scalar:
            top.record.append(tok.key, Scalar(tok.value or "", line=tok.line))
        elif tok.kind is TokenKind.Block:
            top.record.append(tok.key, Block(tok.data or b"", line=tok.line))
        else:
            group = Record(line=tok.line)
            top.record.append(tok.key, group)
            stack.append(_Frame(tok.depth, group, tok.key))

    open_groups = stack[base:]
    if open_groups:
        innermost = open_groups[-1]
        if options.strict and not innermost.record.entries:
            raise UnterminatedGroup(
                f"group {innermost.key!r} ends with the input before any field",
                line=innermost.record.line,
            )
        logger.debug("flushing %d open group(s) at end of input", len(open_groups))

    return root


def parse(text: str, options: CS2Options | None = None) -> Record:
    """Parse CS2 *text* into an untyped structural tree."""
    options = options or CS2Options()
    return build_tree(LineScanner(text, options), options)
