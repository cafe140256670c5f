"""Locomotive records as stored in a CS2 ``lokomotive.cs2`` file."""

from dataclasses import dataclass, field
from typing import Optional

import pytest

from cs2_core import (
    HexFormatError,
    Kind,
    MemberDef,
    TypeDef,
    fixed_block,
    from_text,
    hex_compact,
    hex_optional,
    hex_strict,
    to_text,
)


@dataclass
class Funktion:
    nr: int
    typ: int
    dauer: int
    wert: int


@dataclass
class Funktion2:
    nr: int
    typ: Optional[int] = None
    dauer: int = 0
    wert: int = 0


@dataclass
class Lokomotive:
    name: str
    uid: int
    adresse: int
    vorname: str = ""
    mfxuid: Optional[int] = None
    funktionen: list = field(default_factory=list)
    funktionen_2: list = field(default_factory=list)
    blocks: Optional[bytes] = None


FUNKTION = TypeDef("funktionen", (
    MemberDef("nr", Kind.U8),
    MemberDef("typ", Kind.U16),
    MemberDef("dauer", Kind.I8),
    MemberDef("wert", Kind.U8),
), factory=Funktion)

FUNKTION_2 = TypeDef("funktionen_2", (
    MemberDef("nr", Kind.U8),
    MemberDef("typ", Kind.U16, optional=True, skip_default=True),
    MemberDef("dauer", Kind.I8),
    MemberDef("wert", Kind.U8),
), factory=Funktion2)

LOKOMOTIVE = TypeDef("lokomotive", (
    MemberDef("name", Kind.Text),
    MemberDef("vorname", Kind.Text, skip_default=True),
    MemberDef("uid", Kind.U16, hint=hex_strict()),
    MemberDef("mfxuid", Kind.U32, hint=hex_optional(), skip_default=True),
    MemberDef("adresse", Kind.U16, hint=hex_compact()),
    MemberDef("funktionen", Kind.Record, typedef=FUNKTION, multi=True, skip_default=True),
    MemberDef("funktionen_2", Kind.Record, typedef=FUNKTION_2, multi=True, skip_default=True),
    MemberDef("blocks", Kind.Bytes, hint=fixed_block(16), optional=True, skip_default=True),
), factory=Lokomotive)


SIMPLE = Lokomotive(name="Lok", uid=0x4001, adresse=5)

SIMPLE_TEXT = """\
lokomotive
 .name=Lok
 .uid=0x4001
 .adresse=0x5
"""

FULL_BODY = """\
 .funktionen
 ..nr=1
 ..typ=1
 ..dauer=-1
 ..wert=0
 .funktionen
 ..nr=2
 ..typ=2
 ..dauer=0
 ..wert=0
 .funktionen_2
 ..nr=16
 ..typ=16
 ..dauer=0
 ..wert=0
 .funktionen_2
 ..nr=17
 ..typ=17
 ..dauer=0
 ..wert=0
"""


def full(mfxuid=None):
    return Lokomotive(
        name="Lok",
        uid=0x4001,
        adresse=5,
        mfxuid=mfxuid,
        funktionen=[Funktion(1, 1, -1, 0), Funktion(2, 2, 0, 0)],
        funktionen_2=[Funktion2(16, 16), Funktion2(17, 17)],
        blocks=bytes(16),
    )


# ---------------------------------------------------------------------------
# Serialize
# ---------------------------------------------------------------------------

def test_serialize_simple():
    assert to_text(SIMPLE, LOKOMOTIVE) == SIMPLE_TEXT

def test_serialize_full():
    expected = SIMPLE_TEXT + FULL_BODY + " .blocks=" + " ".join(["00"] * 16) + "\n"
    assert to_text(full(), LOKOMOTIVE) == expected

def test_serialize_mfxuid_full_width():
    text = to_text(Lokomotive(name="Lok", uid=0x4001, adresse=5, mfxuid=0x1), LOKOMOTIVE)
    assert " .mfxuid=0x00000001\n" in text

def test_vorname_written_when_set():
    text = to_text(Lokomotive(name="Lok", vorname="Alt", uid=1, adresse=5), LOKOMOTIVE)
    assert text.startswith("lokomotive\n .name=Lok\n .vorname=Alt\n .uid=0x0001\n")


# ---------------------------------------------------------------------------
# Deserialize
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("text", [
    "lokomotive\n     .name=Lok\n     .uid=0x4001\n     .adresse=0x5",
    "\n    lokomotive\n     .name=Lok\n     .uid=0x4001\n     .adresse=0x5",
    "\n    lokomotive\n     .name=Lok\n     .uid=0x4001\n     .adresse=0x5\n    ",
    SIMPLE_TEXT,
])
def test_deserialize_simple(text):
    assert from_text(text, LOKOMOTIVE) == SIMPLE

def test_deserialize_full_legacy_blocks():
    body = "".join(f"         {line.lstrip()}\n" for line in FULL_BODY.splitlines())
    text = (
        "\n        lokomotive\n"
        "         .name=Lok\n"
        "         .uid=0x4001\n"
        "         .mfxuid=0xffcd995d\n"
        "         .adresse=0x5\n"
        + body +
        "         .blocks=0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0\n"
        "        "
    )
    assert from_text(text, LOKOMOTIVE) == full(mfxuid=0xffcd995d)

def test_full_roundtrip():
    expected = full(mfxuid=0xffcd995d)
    assert from_text(to_text(expected, LOKOMOTIVE), LOKOMOTIVE) == expected

def test_uid_width_enforced():
    with pytest.raises(HexFormatError):
        from_text("lokomotive\n .name=Lok\n .uid=0x401\n .adresse=0x5", LOKOMOTIVE)

def test_adresse_accepts_padded_hex():
    lok = from_text("lokomotive\n .name=Lok\n .uid=0x4001\n .adresse=0x0005", LOKOMOTIVE)
    assert lok.adresse == 5
