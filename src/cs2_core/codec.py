"""Codec: text ↔ typed value in one call."""

from __future__ import annotations

import logging
from typing import Any

from .decoder import decode
from .encoder import encode
from .options import CS2Options
from .reader import parse
from .typedef import TypeDef
from .writer import render

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def from_text(text: str, typedef: TypeDef, options: CS2Options | None = None) -> Any:
    """Parse CS2 *text* and decode the ``typedef.name`` record.

    Every byte-block member key of *typedef* is scanned as a block marker
    in addition to ``options.block_keys``.
    """
    options = (options or CS2Options()).with_block_keys(typedef.block_keys())
    root = parse(text, options)
    logger.debug("parsed %d top-level entries while decoding %r", len(root), typedef.name)
    return decode(root, typedef)


def to_text(value: Any, typedef: TypeDef, options: CS2Options | None = None) -> str:
    """Encode *value* with *typedef* and render it as CS2 text."""
    root = encode(value, typedef)
    return render(root, options)
