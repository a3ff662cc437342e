from __future__ import annotations

from dataclasses import dataclass

import pytest

from rdap.decoder import Decoder, DecoderError, decode
from rdap.models import (
    INT8,
    INT16,
    INT32,
    INT64,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    Autnum,
    DecodeData,
    Domain,
    DomainSearchResults,
    Entity,
    EntitySearchResults,
    ErrorResponse,
    Help,
    IPNetwork,
    ListKind,
    MapKind,
    Nameserver,
    NameserverSearchResults,
    OptionalKind,
    rdap_field,
)
from rdap.vcard import VCard


def run_decode(target, blob):
    return Decoder(blob, target).decode()


@dataclass
class Empty:
    pass


def test_decode_empty():
    assert run_decode(Empty, "{}") == Empty()


@dataclass
class WithDecodeData:
    decode_data: DecodeData | None = None
    s1: str = rdap_field("s1")
    s2: str = rdap_field("s2Name")
    sf: str = rdap_field("sF")


def test_decode_decode_data():
    x = run_decode(
        WithDecodeData,
        '{"s1": "S1", "s2Name": "S2", "sF": 1.5, "unknown": "value"}',
    )
    assert (x.s1, x.s2, x.sf) == ("S1", "S2", "1.5")
    assert x.decode_data is not None
    assert len(x.decode_data.notes("sF")) == 1
    assert len(x.decode_data.fields()) == 4
    assert x.decode_data.unknown_fields() == ["unknown"]
    assert x.decode_data.value("unknown") == "value"


def test_decode_data_note_text():
    x = run_decode(WithDecodeData, '{"sF": 1.5}')
    assert x.decode_data.notes("sF") == ["float64 to string conversion"]


@dataclass
class WithVCard:
    vcard: VCard | None = rdap_field("vCard", OptionalKind(VCard))


def test_decode_vcard():
    x = run_decode(
        WithVCard,
        """
        {"vCard": ["vcard", [
            ["version", {}, "text", "4.0"],
            ["fn", {}, "text", "First Last"]
        ]]}
        """,
    )
    assert x.vcard is not None
    assert len(x.vcard.properties) == 2
    assert x.vcard.name() == "First Last"


def test_decode_invalid_vcard_is_noted():
    result = decode('{"objectClassName": "entity", "vcardArray": ["nope"]}')
    assert isinstance(result, Entity)
    assert result.vcard is None
    assert result.decode_data.notes("vcardArray") == [
        "jCard error: structure is not a jCard (expected len=2 top level array)"
    ]


@dataclass
class WithSlice:
    s: list[str] = rdap_field("s", ListKind(str))


def test_decode_slice():
    assert run_decode(WithSlice, '{"s": ["a", "b"]}') == WithSlice(s=["a", "b"])


def test_decode_slice_skips_invalid_items():
    assert run_decode(WithSlice, '{"s": ["a", {}, "b"]}') == WithSlice(s=["a", "b"])


@dataclass
class WithMap:
    m: dict[str, str] = rdap_field("m", MapKind(str))


def test_decode_map():
    result = run_decode(WithMap, '{"m": {"a": "av", "b": "bv"}}')
    assert result == WithMap(m={"a": "av", "b": "bv"})


@dataclass
class Uints:
    a: int = rdap_field("a", UINT8)
    a_overflow: int = rdap_field("aOverflow", UINT8)
    b: int = rdap_field("b", UINT16)
    c: int = rdap_field("c", UINT32)
    d: int = rdap_field("d", UINT64)
    s: int = rdap_field("s", UINT8)
    bf: int = rdap_field("bF", UINT8)
    bt: int = rdap_field("bT", UINT8)
    n: int = rdap_field("n", UINT8)


def test_decode_uints():
    result = run_decode(
        Uints,
        """
        {"a": 100, "aOverflow": 256, "b": 200, "c": 42, "d": 43,
         "s": "10", "bF": false, "bT": true, "n": null}
        """,
    )
    assert result == Uints(a=100, a_overflow=0, b=200, c=42, d=43, s=10, bf=0, bt=1, n=0)


@dataclass
class Ints:
    a: int = rdap_field("a", INT8)
    a_underflow: int = rdap_field("aUnderflow", INT8)
    a_overflow: int = rdap_field("aOverflow", INT8)
    b: int = rdap_field("b", INT16)
    c: int = rdap_field("c", INT32)
    d: int = rdap_field("d", INT64)
    s: int = rdap_field("s", INT8)
    bf: int = rdap_field("bF", INT8)
    bt: int = rdap_field("bT", INT8)
    n: int = rdap_field("n", INT8)


def test_decode_ints():
    result = run_decode(
        Ints,
        """
        {"a": 100, "aUnderflow": -129, "aOverflow": 128, "b": 200, "c": 42,
         "d": 43, "s": "10", "bF": false, "bT": true, "n": null}
        """,
    )
    assert result == Ints(
        a=100, a_underflow=0, a_overflow=0, b=200, c=42, d=43, s=10, bf=0, bt=1, n=0
    )


@dataclass
class NotedUint:
    decode_data: DecodeData | None = None
    u: int = rdap_field("u", UINT8)


@pytest.mark.parametrize(
    "blob, note",
    [
        ('{"u": 300}', "error: number too large"),
        ('{"u": "-1"}', "error converting string to uint"),
        ('{"u": "abc"}', "error converting string to uint"),
        ('{"u": []}', "invalid JSON type, expecting float"),
    ],
)
def test_decode_uint_errors_are_noted(blob, note):
    result = run_decode(NotedUint, blob)
    assert result.u == 0
    assert note in result.decode_data.notes("u")


@dataclass
class Floats:
    f: float = rdap_field("f", float)
    f_ptr: float | None = rdap_field("fPtr", OptionalKind(float))
    s1: float = rdap_field("s1", float)
    s2: float = rdap_field("s2", float)
    bf: float = rdap_field("bF", float)
    bt: float = rdap_field("bT", float)
    n: float = rdap_field("n", float)


def test_decode_float64():
    result = run_decode(
        Floats,
        """
        {"f": 1.5, "fPtr": 1.5, "s1": "1.5", "s2": "-1.5",
         "bF": false, "bT": true, "n": null}
        """,
    )
    assert result == Floats(f=1.5, f_ptr=1.5, s1=1.5, s2=-1.5, bf=0.0, bt=1.0, n=0.0)


@dataclass
class Bools:
    b: bool = rdap_field("b", bool)
    b_ptr: bool | None = rdap_field("bPtr", OptionalKind(bool))
    sf: bool = rdap_field("sF", bool)
    st: bool = rdap_field("sT", bool)
    ff: bool = rdap_field("fF", bool)
    ft: bool = rdap_field("fT", bool)
    n: bool = rdap_field("n", bool)


def test_decode_bool():
    result = run_decode(
        Bools,
        """
        {"b": true, "bPtr": true, "sF": "false", "sT": "true",
         "fF": 0, "fT": 1, "n": null}
        """,
    )
    assert result == Bools(b=True, b_ptr=True, sf=False, st=True, ff=False, ft=True, n=False)


@dataclass
class Strings:
    s: str = rdap_field("s")
    s_ptr: str | None = rdap_field("sPtr", OptionalKind(str))
    bt: str = rdap_field("bT")
    bf: str = rdap_field("bF")
    f1: str = rdap_field("f1")
    f2: str = rdap_field("f2")
    n: str = rdap_field("n")


def test_decode_string():
    result = run_decode(
        Strings,
        """
        {"s": "test", "sPtr": "sptr", "bT": true, "bF": false,
         "f1": 1.0, "f2": -3.14, "n2": null}
        """,
    )
    assert result == Strings(
        s="test", s_ptr="sptr", bt="true", bf="false", f1="1", f2="-3.14", n=""
    )


@dataclass
class Inner:
    pass


@dataclass
class Mismatched:
    a: list[str] = rdap_field("a", ListKind(str))
    b: dict[str, str] = rdap_field("b", MapKind(str))
    c: Inner = rdap_field("c", Inner)


def test_decode_mismatched_types():
    result = run_decode(Mismatched, '{"a": {}, "b": [1, 2, 3], "c": false}')
    assert result == Mismatched(a=[], b={}, c=Inner())


@pytest.mark.parametrize(
    "blob, cls",
    [
        ('{"errorCode": 404, "objectClassName": "domain"}', ErrorResponse),
        ('{"objectClassName": "autnum"}', Autnum),
        ('{"objectClassName": "domain"}', Domain),
        ('{"objectClassName": "entity"}', Entity),
        ('{"objectClassName": "ip network"}', IPNetwork),
        ('{"objectClassName": "nameserver"}', Nameserver),
        ('{"domainSearchResults": []}', DomainSearchResults),
        ('{"entitySearchResults": []}', EntitySearchResults),
        ('{"nameserverSearchResults": []}', NameserverSearchResults),
        ('{"rdapConformance": ["rdap_level_0"]}', Help),
    ],
)
def test_top_level_type_selection(blob, cls):
    assert type(decode(blob)) is cls


def test_unrecognised_object_class_name():
    with pytest.raises(DecoderError, match="objectClassName is not recognised"):
        decode('{"objectClassName": "spaceship"}')


def test_object_class_name_not_string():
    with pytest.raises(DecoderError, match="objectClassName is not a string"):
        decode('{"objectClassName": 5}')


def test_invalid_json():
    with pytest.raises(DecoderError):
        decode("{not json")


def test_non_object_document():
    with pytest.raises(DecoderError):
        decode("[1, 2]")


def test_decode_domain():
    result = decode(
        """
        {
          "objectClassName": "domain",
          "rdapConformance": ["rdap_level_0"],
          "handle": "EXAMPLECOM",
          "ldhName": "example.com",
          "status": ["active"],
          "secureDNS": {"delegationSigned": false, "maxSigLife": 604800},
          "entities": [
            {"objectClassName": "entity", "handle": "R1", "roles": ["registrar"],
             "vcardArray": ["vcard", [["fn", {}, "text", "Example Registrar"]]]}
          ],
          "nameservers": [{"objectClassName": "nameserver", "ldhName": "ns1.example.com"}]
        }
        """
    )
    assert result.handle == "EXAMPLECOM"
    assert result.ldh_name == "example.com"
    assert result.conformance == ["rdap_level_0"]
    assert result.status == ["active"]
    assert result.secure_dns.delegation_signed is False
    assert result.secure_dns.zone_signed is None
    assert result.secure_dns.max_sig_life == 604800
    assert result.entities[0].roles == ["registrar"]
    assert result.entities[0].vcard.name() == "Example Registrar"
    assert result.nameservers[0].ldh_name == "ns1.example.com"
    assert result.decode_data.unknown_fields() == []


def test_error_response():
    result = decode('{"errorCode": "404", "title": "Not Found", "description": ["gone"]}')
    assert result.error_code == 404
    assert result.title == "Not Found"
    assert result.description == ["gone"]
    assert result.decode_data.notes("errorCode") == ["string to uint conversion"]


def test_nested_notes_stay_with_nested_object():
    result = decode('{"objectClassName": "domain", "network": {"handle": 7}}')
    assert result.network.handle == "7"
    assert result.network.decode_data.notes("handle") == ["float64 to string conversion"]
    assert result.decode_data.notes("handle") == []


def test_explicit_target_overrides_selection():
    result = Decoder('{"objectClassName": "domain", "handle": "H"}', Help).decode()
    assert isinstance(result, Help)
    assert result.decode_data.value("handle") == "H"
    assert sorted(result.decode_data.unknown_fields()) == ["handle", "objectClassName"]