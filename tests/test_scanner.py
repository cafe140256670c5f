"""Tests for the line scanner."""

import pytest

from cs2_core import CS2Options, MalformedLine
from cs2_core.scanner import LineScanner, TokenKind, scan


def kinds(text, options=None):
    return [(t.kind, t.depth, t.key) for t in scan(text, options)]


# ---------------------------------------------------------------------------
# Line shapes
# ---------------------------------------------------------------------------

def test_header_and_scalars():
    tokens = list(scan("lokomotive\n .name=BR 01\n .uid=0x1234\n"))
    assert [t.kind for t in tokens] == [TokenKind.Header, TokenKind.Scalar, TokenKind.Scalar]
    assert [t.depth for t in tokens] == [0, 1, 1]
    assert tokens[1].key == "name"
    assert tokens[1].value == "BR 01"
    assert tokens[2].value == "0x1234"

def test_depth_is_dot_count():
    assert kinds(" ..nr=1") == [(TokenKind.Scalar, 2, "nr")]

def test_leading_whitespace_ignored():
    assert kinds("        lokomotive\n         .name=Lok") == [
        (TokenKind.Header, 0, "lokomotive"),
        (TokenKind.Scalar, 1, "name"),
    ]

def test_value_kept_verbatim():
    token = next(iter(scan(" .name=a=b  ")))
    assert token.key == "name"
    assert token.value == "a=b  "

def test_empty_value():
    token = next(iter(scan(" .vorname=")))
    assert token.kind is TokenKind.Scalar
    assert token.value == ""

def test_crlf_line_endings():
    tokens = list(scan("lokomotive\r\n .name=Lok\r\n"))
    assert tokens[1].value == "Lok"

def test_section_header():
    assert kinds("[lokomotive]\nversion\n .minor=3") == [
        (TokenKind.Section, 0, "[lokomotive]"),
        (TokenKind.Header, 0, "version"),
        (TokenKind.Scalar, 1, "minor"),
    ]

def test_line_numbers():
    tokens = list(scan("\nlokomotive\n\n .name=Lok"))
    assert [t.line for t in tokens] == [2, 4]


# ---------------------------------------------------------------------------
# Skipped lines
# ---------------------------------------------------------------------------

def test_blank_lines_skipped():
    assert len(list(scan("\n\n   \nlokomotive\n\n"))) == 1

def test_comment_lines_skipped():
    assert kinds("# saved by CS2\nlokomotive\n  # note\n .name=x") == [
        (TokenKind.Header, 0, "lokomotive"),
        (TokenKind.Scalar, 1, "name"),
    ]

def test_custom_comment_prefix():
    options = CS2Options(comment_prefix="//")
    assert kinds("// hi\nlokomotive", options) == [(TokenKind.Header, 0, "lokomotive")]


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

BLOCKS = CS2Options(block_keys={"blocks"})

def test_block_marker():
    token = next(iter(scan(" .blocks=00 01 ff", BLOCKS)))
    assert token.kind is TokenKind.Block
    assert token.data == b"\x00\x01\xff"

def test_block_accepts_single_digit_bytes():
    token = next(iter(scan(" .blocks=0 0 a", BLOCKS)))
    assert token.data == b"\x00\x00\x0a"

def test_block_continuation_lines():
    text = " .blocks=00 01\n ..02 03\n ..04\n .name=x"
    tokens = list(scan(text, BLOCKS))
    assert tokens[0].data == b"\x00\x01\x02\x03\x04"
    assert tokens[1].key == "name"
    assert len(tokens) == 2

def test_block_at_end_of_input_is_flushed():
    tokens = list(scan("lok\n .blocks=01\n ..02", BLOCKS))
    assert tokens[-1].data == b"\x01\x02"

def test_no_default_block_keys():
    token = next(iter(scan(" .blocks=12")))
    assert token.kind is TokenKind.Scalar
    assert token.value == "12"

def test_non_block_key_stays_scalar():
    token = next(iter(scan(" .data=00 01")))
    assert token.kind is TokenKind.Scalar

def test_custom_block_keys():
    options = CS2Options(block_keys={"raster"})
    token = next(iter(scan(" .raster=00 01", options)))
    assert token.kind is TokenKind.Block

def test_bad_block_byte():
    with pytest.raises(MalformedLine) as exc:
        list(scan("lok\n .blocks=00 zz", BLOCKS))
    assert exc.value.line == 2

def test_wrapped_block_without_marker():
    tokens = list(scan("raster\n .pixels=00 01\n ..02\n ..03\n .name=x"))
    assert [t.kind for t in tokens] == [TokenKind.Header, TokenKind.Block, TokenKind.Scalar]
    assert tokens[1].key == "pixels"
    assert tokens[1].data == b"\x00\x01\x02\x03"
    assert tokens[1].line == 2

def test_byte_run_scalar_without_continuation_stays_scalar():
    tokens = list(scan("lok\n .nr=12\n .name=ab"))
    assert [t.kind for t in tokens] == [TokenKind.Header, TokenKind.Scalar, TokenKind.Scalar]
    assert [t.value for t in tokens[1:]] == ["12", "ab"]


# ---------------------------------------------------------------------------
# Malformed lines
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("text", [
    " .=value",
    " ..",
    "lok omotive",
    "[lokomotive",
    "[]",
    " .[lokomotive]",
    " .na me=x",
])
def test_malformed(text):
    with pytest.raises(MalformedLine):
        list(scan(text))


# ---------------------------------------------------------------------------
# Laziness / restart
# ---------------------------------------------------------------------------

def test_restartable():
    scanner = LineScanner("lokomotive\n .name=x")
    assert list(scanner) == list(scanner)

def test_lazy_until_iterated():
    scanner = scan("lok\n .=broken")
    it = iter(scanner)
    assert next(it).key == "lok"
    with pytest.raises(MalformedLine):
        next(it)
