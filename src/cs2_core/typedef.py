"""TypeDef and MemberDef: schema descriptors consumed by the bridges."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable

from .errors import SchemaError
from .model import is_section_key


_KEY_RE = re.compile(r"^[^\s=.#\[\]][^\s=\[\]]*$")


# ---------------------------------------------------------------------------
# NoDefault: singleton for members without a declared default
# ---------------------------------------------------------------------------

class _NoDefaultType:
    _instance: _NoDefaultType | None = None

    def __new__(cls) -> _NoDefaultType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NoDefault"

    def __bool__(self) -> bool:
        return False


NoDefault = _NoDefaultType()


# ---------------------------------------------------------------------------
# Kind
# ---------------------------------------------------------------------------

class Kind(Enum):
    Text = auto()
    Bool = auto()
    U8 = auto()
    U16 = auto()
    U32 = auto()
    U64 = auto()
    I8 = auto()
    I16 = auto()
    I32 = auto()
    I64 = auto()
    Bytes = auto()
    Record = auto()


# kind → (bits, signed)
_INT_KINDS: dict[Kind, tuple[int, bool]] = {
    Kind.U8: (8, False),
    Kind.U16: (16, False),
    Kind.U32: (32, False),
    Kind.U64: (64, False),
    Kind.I8: (8, True),
    Kind.I16: (16, True),
    Kind.I32: (32, True),
    Kind.I64: (64, True),
}


def is_integer(kind: Kind) -> bool:
    return kind in _INT_KINDS


def is_signed(kind: Kind) -> bool:
    return _INT_KINDS.get(kind, (0, False))[1]


def int_bounds(kind: Kind) -> tuple[int, int]:
    bits, signed = _INT_KINDS[kind]
    if signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


def hex_digits(kind: Kind) -> int:
    """Full-width hex digit count of an integer kind."""
    return _INT_KINDS[kind][0] // 4


# ---------------------------------------------------------------------------
# Hint
# ---------------------------------------------------------------------------

class HintKind(Enum):
    Plain = auto()
    Hex = auto()
    HexOptional = auto()
    Block = auto()


@dataclass(frozen=True, slots=True)
class Hint:
    """Per-member encoding choice.

    ``width`` is the hex digit count for strict hex (``None`` means the full
    width of the integer kind), an upper digit bound for compact hex, and
    the exact byte count for blocks.
    """

    kind: HintKind = HintKind.Plain
    width: int | None = None
    compact: bool = False

    def __post_init__(self) -> None:
        if self.kind is HintKind.Block:
            if self.width is None or self.width <= 0:
                raise SchemaError(f"fixed block needs a positive size, got {self.width}")
        elif self.width is not None and self.width <= 0:
            raise SchemaError(f"hex width must be positive, got {self.width}")
        if self.compact and self.kind not in (HintKind.Hex, HintKind.HexOptional):
            raise SchemaError("compact applies to hex hints only")

    @property
    def is_hex(self) -> bool:
        return self.kind in (HintKind.Hex, HintKind.HexOptional)


PLAIN = Hint()


def plain() -> Hint:
    return PLAIN


def hex_strict(width: int | None = None) -> Hint:
    return Hint(HintKind.Hex, width)


def hex_compact() -> Hint:
    return Hint(HintKind.Hex, compact=True)


def hex_optional(width: int | None = None, compact: bool = False) -> Hint:
    return Hint(HintKind.HexOptional, width, compact)


def fixed_block(size: int) -> Hint:
    return Hint(HintKind.Block, size)


# ---------------------------------------------------------------------------
# MemberDef
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class MemberDef:
    name: str  # attribute / keyword name on the typed value
    kind: Kind
    rename: str | None = None  # key written in CS2 text, if not name
    skip_default: bool = False  # omit when equal to the default; default when absent
    hint: Hint = PLAIN
    typedef: TypeDef | None = None  # nested schema for Kind.Record
    multi: bool = False  # repeated key → list
    optional: bool = False  # value may be None
    default: Any = NoDefault
    default_factory: Callable[[], Any] | None = None

    def __post_init__(self) -> None:
        self._check()

    @property
    def key(self) -> str:
        return self.rename if self.rename is not None else self.name

    @property
    def is_optional(self) -> bool:
        return self.optional or self.hint.kind is HintKind.HexOptional

    @property
    def has_default(self) -> bool:
        return (
            self.skip_default
            or self.is_optional
            or self.default is not NoDefault
            or self.default_factory is not None
        )

    @property
    def hex_width(self) -> int:
        """Digit count used for strict hex output."""
        if self.hint.width is not None:
            return self.hint.width
        return hex_digits(self.kind)

    def make_default(self) -> Any:
        """Value a missing member decodes to (and that skip_default omits)."""
        if self.default_factory is not None:
            return self.default_factory()
        if self.default is not NoDefault:
            return self.default
        if self.is_optional:
            return None
        if self.multi:
            return []
        return _empty_value(self)

    # -- Validation -----------------------------------------------------

    def _check(self) -> None:
        where = f"member {self.name!r}"
        if not self.name.isidentifier():
            raise SchemaError(f"{where}: name must be an identifier")
        if not _KEY_RE.match(self.key):
            raise SchemaError(f"{where}: invalid CS2 key {self.key!r}")
        if (self.kind is Kind.Record) != (self.typedef is not None):
            raise SchemaError(f"{where}: record members need a typedef and only they may have one")
        if self.multi and self.is_optional:
            raise SchemaError(f"{where}: a list member cannot also be optional")
        if self.default is not NoDefault and self.default_factory is not None:
            raise SchemaError(f"{where}: default and default_factory are exclusive")

        hint = self.hint
        if hint.is_hex:
            if not is_integer(self.kind) or is_signed(self.kind):
                raise SchemaError(f"{where}: hex hints need an unsigned integer kind, not {self.kind.name}")
            if hint.width is not None and hint.width != hex_digits(self.kind):
                raise SchemaError(
                    f"{where}: hex width {hint.width} does not match {self.kind.name} "
                    f"({hex_digits(self.kind)} digits)"
                )
        if (hint.kind is HintKind.Block) != (self.kind is Kind.Bytes):
            raise SchemaError(f"{where}: byte members need a fixed_block hint and only they may have one")
        if self.kind is Kind.Record and hint != PLAIN:
            raise SchemaError(f"{where}: record members take no encoding hint")
        if (
            self.kind is Kind.Record
            and self.skip_default
            and not self.multi
            and not self.is_optional
            and self.default is NoDefault
            and self.default_factory is None
        ):
            raise SchemaError(f"{where}: skip_default on a record needs an explicit default")


def _empty_value(member: MemberDef) -> Any:
    kind = member.kind
    if kind is Kind.Text:
        return ""
    if kind is Kind.Bool:
        return False
    if kind is Kind.Bytes:
        return bytes(member.hint.width or 0)
    if is_integer(kind):
        return 0
    raise SchemaError(f"member {member.name!r}: no implicit default for {kind.name}")


# ---------------------------------------------------------------------------
# TypeDef
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TypeDef:
    """Schema for one record.

    ``name`` is the key the record is stored under at top level, either a
    plain key (``lokomotive``) or a section header (``[lokomotive]``).
    ``factory`` builds the typed value from keyword arguments.
    """

    name: str
    members: tuple[MemberDef, ...]
    factory: Callable[..., Any] = field(default=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.members, tuple):
            object.__setattr__(self, "members", tuple(self.members))
        if not (_KEY_RE.match(self.name) or is_section_key(self.name)):
            raise SchemaError(f"typedef: invalid record name {self.name!r}")
        keys: set[str] = set()
        names: set[str] = set()
        for m in self.members:
            if m.key in keys:
                raise SchemaError(f"typedef {self.name!r}: duplicate key {m.key!r}")
            if m.name in names:
                raise SchemaError(f"typedef {self.name!r}: duplicate member {m.name!r}")
            keys.add(m.key)
            names.add(m.name)

    def member(self, name: str) -> MemberDef | None:
        for m in self.members:
            if m.name == name:
                return m
        return None

    def block_keys(self) -> frozenset[str]:
        """Keys of every byte-block member, nested records included.

        A key that some other member in the schema uses for a non-byte
        value is left out, so its scalars are never read as blocks.
        """
        blocks: set[str] = set()
        others: set[str] = set()
        self._collect_keys(blocks, others, set())
        return frozenset(blocks - others)

    def _collect_keys(self, blocks: set[str], others: set[str], seen: set[int]) -> None:
        if id(self) in seen:
            return
        seen.add(id(self))
        for m in self.members:
            if m.kind is Kind.Bytes:
                blocks.add(m.key)
            else:
                others.add(m.key)
                if m.typedef is not None:
                    m.typedef._collect_keys(blocks, others, seen)
