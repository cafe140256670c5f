"""Deserialization bridge: structural tree + TypeDef → typed value."""

from __future__ import annotations

import logging
import re
from typing import Any

from .errors import BlockSizeMismatch, HexFormatError, MissingField, TypeMismatch
from .hexcodec import parse_bytes, parse_compact, parse_strict
from .model import Block, Node, Record, Scalar
from .typedef import Kind, MemberDef, TypeDef, hex_digits, int_bounds, is_signed

logger = logging.getLogger(__name__)

_UNSIGNED_RE = re.compile(r"^[0-9]+$")
_SIGNED_RE = re.compile(r"^-?[0-9]+$")


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def decode(root: Record, typedef: TypeDef) -> Any:
    """Decode the record stored under ``typedef.name`` in *root*."""
    nodes = root.get_all(typedef.name)
    if not nodes:
        raise MissingField(f"no {typedef.name!r} record in input", path=typedef.name)
    if len(nodes) > 1:
        raise TypeMismatch(
            f"{typedef.name!r} appears {len(nodes)} times at top level",
            path=typedef.name,
            line=nodes[1].line,
        )
    node = nodes[0]
    if not isinstance(node, Record):
        raise TypeMismatch("expected a group, found a value", path=typedef.name, line=node.line)
    return decode_record(node, typedef, typedef.name)


def decode_record(record: Record, typedef: TypeDef, path: str = "") -> Any:
    """Decode one Record against *typedef* and build the typed value.

    Unknown keys are skipped; the first failing member aborts the decode.
    """
    path = path or typedef.name
    fields: dict[str, Any] = {}
    for member in typedef.members:
        fields[member.name] = _decode_member(record, member, f"{path}.{member.key}")

    known = {m.key for m in typedef.members}
    for key in record.keys():
        if key not in known:
            logger.debug("%s: ignoring unknown key %r", path, key)

    return typedef.factory(**fields)


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------

def _decode_member(record: Record, member: MemberDef, path: str) -> Any:
    nodes = record.get_all(member.key)

    if not nodes:
        if member.has_default:
            return member.make_default()
        raise MissingField(f"required field {member.key!r} is missing", path=path, line=record.line)

    if member.multi:
        return [
            _decode_value(node, member, f"{path}[{i}]")
            for i, node in enumerate(nodes)
        ]

    if len(nodes) > 1:
        raise TypeMismatch(
            f"{member.key!r} appears {len(nodes)} times but is not a list",
            path=path,
            line=nodes[1].line,
        )
    return _decode_value(nodes[0], member, path)


def _decode_value(node: Node, member: MemberDef, path: str) -> Any:
    kind = member.kind

    if kind is Kind.Record:
        if not isinstance(node, Record):
            raise TypeMismatch("expected a group, found a value", path=path, line=node.line)
        return decode_record(node, member.typedef, path)

    if isinstance(node, Record):
        raise TypeMismatch("expected a value, found a group", path=path, line=node.line)

    if kind is Kind.Bytes:
        return _decode_block(node, member, path)

    if isinstance(node, Block):
        raise TypeMismatch("expected a value, found a byte block", path=path, line=node.line)

    text = node.text
    if kind is Kind.Text:
        return text
    if kind is Kind.Bool:
        if text not in ("0", "1"):
            raise TypeMismatch(f"expected 0 or 1, got {text!r}", path=path, line=node.line)
        return text == "1"
    if member.hint.is_hex:
        return _decode_hex(node, member, path)
    return _decode_int(node, kind, path)


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

def _decode_int(node: Scalar, kind: Kind, path: str) -> int:
    text = node.text
    pattern = _SIGNED_RE if is_signed(kind) else _UNSIGNED_RE
    if not pattern.match(text):
        raise TypeMismatch(f"expected {kind.name} integer, got {text!r}", path=path, line=node.line)
    value = int(text)
    _check_range(value, kind, path, node.line)
    return value


def _decode_hex(node: Scalar, member: MemberDef, path: str) -> int:
    try:
        if member.hint.compact:
            value = parse_compact(node.text, member.hint.width or hex_digits(member.kind))
        else:
            value = parse_strict(node.text, member.hex_width)
    except ValueError as exc:
        raise HexFormatError(str(exc), path=path, line=node.line) from None
    _check_range(value, member.kind, path, node.line)
    return value


def _check_range(value: int, kind: Kind, path: str, line: int | None) -> None:
    lo, hi = int_bounds(kind)
    if not lo <= value <= hi:
        raise TypeMismatch(f"{value} out of range for {kind.name}", path=path, line=line)


def _decode_block(node: Block | Scalar, member: MemberDef, path: str) -> bytes:
    if isinstance(node, Block):
        data = node.data
    else:
        # key was not registered as a block marker when the text was scanned
        try:
            data = parse_bytes(node.text)
        except ValueError as exc:
            raise TypeMismatch(str(exc), path=path, line=node.line) from None
    size = member.hint.width
    if len(data) != size:
        raise BlockSizeMismatch(
            f"expected {size} bytes, got {len(data)}", path=path, line=node.line
        )
    return data
