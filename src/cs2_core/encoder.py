"""Serialization bridge: typed value + TypeDef → structural tree."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .errors import BlockSizeMismatch, TypeMismatch
from .hexcodec import format_compact, format_strict
from .model import Block, Node, Record, Scalar
from .typedef import Kind, MemberDef, TypeDef, int_bounds, is_integer


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def encode(value: Any, typedef: TypeDef) -> Record:
    """Return a root Record holding *value* under ``typedef.name``."""
    root = Record()
    root.append(typedef.name, encode_record(value, typedef, typedef.name))
    return root


def encode_record(value: Any, typedef: TypeDef, path: str = "") -> Record:
    """Emit *value*'s members in declaration order.

    skip_default members equal to their default, and optional members
    holding ``None``, produce no entry at all.
    """
    path = path or typedef.name
    record = Record()
    for member in typedef.members:
        item = _read(value, member, f"{path}.{member.key}")
        if item is None and member.is_optional:
            continue
        if member.skip_default and item == member.make_default():
            continue
        if member.multi:
            if not isinstance(item, (list, tuple)):
                raise TypeMismatch(
                    f"expected a list, got {type(item).__name__}", path=f"{path}.{member.key}"
                )
            for i, element in enumerate(item):
                record.append(
                    member.key, _encode_value(element, member, f"{path}.{member.key}[{i}]")
                )
        else:
            record.append(member.key, _encode_value(item, member, f"{path}.{member.key}"))
    return record


def _read(value: Any, member: MemberDef, path: str) -> Any:
    try:
        if isinstance(value, Mapping):
            return value[member.name]
        return getattr(value, member.name)
    except (KeyError, AttributeError):
        raise TypeMismatch(f"value has no member {member.name!r}", path=path) from None


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------

def _encode_value(item: Any, member: MemberDef, path: str) -> Node:
    kind = member.kind

    if kind is Kind.Record:
        return encode_record(item, member.typedef, path)

    if kind is Kind.Bytes:
        if not isinstance(item, (bytes, bytearray)):
            raise TypeMismatch(f"expected bytes, got {type(item).__name__}", path=path)
        if len(item) != member.hint.width:
            raise BlockSizeMismatch(
                f"expected {member.hint.width} bytes, got {len(item)}", path=path
            )
        return Block(bytes(item))

    if kind is Kind.Text:
        if not isinstance(item, str):
            raise TypeMismatch(f"expected str, got {type(item).__name__}", path=path)
        if "\n" in item or "\r" in item:
            raise TypeMismatch("text values cannot span lines", path=path)
        return Scalar(item)

    if kind is Kind.Bool:
        if not isinstance(item, bool):
            raise TypeMismatch(f"expected bool, got {type(item).__name__}", path=path)
        return Scalar("1" if item else "0")

    if is_integer(kind):
        return Scalar(_format_int(item, member, path))

    raise TypeMismatch(f"cannot encode {kind.name}", path=path)


def _format_int(item: Any, member: MemberDef, path: str) -> str:
    kind = member.kind
    if not isinstance(item, int) or isinstance(item, bool):
        raise TypeMismatch(f"expected {kind.name} integer, got {type(item).__name__}", path=path)
    lo, hi = int_bounds(kind)
    if not lo <= item <= hi:
        raise TypeMismatch(f"{item} out of range for {kind.name}", path=path)
    if not member.hint.is_hex:
        return str(item)
    # hint widths match the kind, so an in-range value always fits
    if member.hint.compact:
        return format_compact(item)
    return format_strict(item, member.hex_width)
