"""Error hierarchy for CS2 Core."""

from __future__ import annotations


class CS2Error(Exception):
    """Base class for every error raised by the codec.

    ``line`` is the 1-based source line when the error comes from parsed
    text, ``path`` the dotted field path when it comes from a bridge.
    """

    def __init__(
        self,
        message: str,
        *,
        line: int | None = None,
        path: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.path = path

    def __str__(self) -> str:
        location = []
        if self.line is not None:
            location.append(f"line {self.line}")
        if self.path:
            location.append(self.path)
        if location:
            return f"{', '.join(location)}: {self.message}"
        return self.message


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

class ParseError(CS2Error):
    pass


class MalformedLine(ParseError):
    pass


class UnexpectedIndent(ParseError):
    pass


class UnterminatedGroup(ParseError):
    pass


class DepthExceeded(ParseError):
    pass


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

class DecodeError(CS2Error):
    pass


class TypeMismatch(DecodeError):
    pass


class HexFormatError(DecodeError):
    pass


class BlockSizeMismatch(DecodeError):
    pass


class MissingField(DecodeError):
    pass


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

class SchemaError(CS2Error):
    """Raised once, when a schema descriptor is built inconsistently."""
