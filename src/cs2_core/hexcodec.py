"""Hexadecimal helpers: ``0x`` integers and hex byte pairs.

Two integer conventions are used by CS2 files and they are not
interchangeable:

    strict   ``0x4001``  prefix plus exactly *width* digits, zero padded
    compact  ``0x5``     prefix plus the minimal number of digits

All parse functions raise ``ValueError``; the bridges attach field paths.
"""

from __future__ import annotations

import re

_HEX_INT_RE = re.compile(r"^0[xX]([0-9a-fA-F]+)$")
_HEX_BYTE_RE = re.compile(r"^[0-9a-fA-F]{1,2}$")


# ---------------------------------------------------------------------------
# Integers
# ---------------------------------------------------------------------------

def format_strict(value: int, width: int) -> str:
    if value < 0 or value >> (4 * width):
        raise ValueError(f"{value} does not fit in {width} hex digits")
    return f"0x{value:0{width}x}"


def format_compact(value: int) -> str:
    if value < 0:
        raise ValueError(f"negative value {value} has no hex form")
    return f"0x{value:x}"


def parse_strict(text: str, width: int) -> int:
    m = _HEX_INT_RE.match(text)
    if m is None:
        raise ValueError(f"expected 0x-prefixed hex literal, got {text!r}")
    digits = m.group(1)
    if len(digits) != width:
        raise ValueError(
            f"expected exactly {width} hex digits, got {len(digits)} in {text!r}"
        )
    return int(digits, 16)


def parse_compact(text: str, max_width: int | None = None) -> int:
    m = _HEX_INT_RE.match(text)
    if m is None:
        raise ValueError(f"expected 0x-prefixed hex literal, got {text!r}")
    digits = m.group(1)
    if max_width is not None and len(digits) > max_width:
        raise ValueError(
            f"expected at most {max_width} hex digits, got {len(digits)} in {text!r}"
        )
    return int(digits, 16)


# ---------------------------------------------------------------------------
# Byte pairs
# ---------------------------------------------------------------------------

def is_byte_run(text: str) -> bool:
    """True if *text* is one or more whitespace separated hex bytes."""
    parts = text.split()
    return bool(parts) and all(_HEX_BYTE_RE.match(p) for p in parts)


def parse_bytes(text: str) -> bytes:
    """``"00 1f a"`` → ``b"\\x00\\x1f\\x0a"``."""
    out = bytearray()
    for part in text.split():
        if not _HEX_BYTE_RE.match(part):
            raise ValueError(f"invalid hex byte {part!r}")
        out.append(int(part, 16))
    return bytes(out)


def format_bytes(data: bytes) -> str:
    return " ".join(f"{b:02x}" for b in data)
