"""CS2 Core: codec between the CS2 text format and typed records."""

from .codec import from_text, to_text
from .decoder import decode, decode_record
from .encoder import encode, encode_record
from .errors import (
    BlockSizeMismatch,
    CS2Error,
    DecodeError,
    DepthExceeded,
    HexFormatError,
    MalformedLine,
    MissingField,
    ParseError,
    SchemaError,
    TypeMismatch,
    UnexpectedIndent,
    UnterminatedGroup,
)
from .model import Block, Entry, Node, Record, Scalar
from .options import CS2Options
from .reader import build_tree, parse
from .scanner import LineScanner, LineToken, TokenKind, scan
from .typedef import (
    Hint,
    HintKind,
    Kind,
    MemberDef,
    NoDefault,
    TypeDef,
    fixed_block,
    hex_compact,
    hex_optional,
    hex_strict,
    plain,
)
from .writer import render

__all__ = [
    "from_text",
    "to_text",
    "parse",
    "build_tree",
    "render",
    "scan",
    "decode",
    "decode_record",
    "encode",
    "encode_record",
    "CS2Options",
    "LineScanner",
    "LineToken",
    "TokenKind",
    "Block",
    "Entry",
    "Node",
    "Record",
    "Scalar",
    "Hint",
    "HintKind",
    "Kind",
    "MemberDef",
    "NoDefault",
    "TypeDef",
    "fixed_block",
    "hex_compact",
    "hex_optional",
    "hex_strict",
    "plain",
    "CS2Error",
    "ParseError",
    "DecodeError",
    "MalformedLine",
    "UnexpectedIndent",
    "UnterminatedGroup",
    "DepthExceeded",
    "TypeMismatch",
    "HexFormatError",
    "BlockSizeMismatch",
    "MissingField",
    "SchemaError",
]
