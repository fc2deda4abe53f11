import pytest

from ndnfwd import tlv_types
from ndnfwd.components import (
    GenericNameComponent,
    NameComponent,
    SegmentNameComponent,
    VersionNameComponent,
)
from ndnfwd.name import Name, decode_name, name_from_string
from ndnfwd.tlv import Block, NdnError, NonExistentError, OutOfRangeError, UnexpectedTypeError


GO_NDN_SEG = bytes([0x08, 0x02, 0x67, 0x6F, 0x08, 0x03, 0x6E, 0x64, 0x6E, 0x21, 0x01, 0xAA])


def test_name_create():
    n = Name()
    assert n.encode().wire() == bytes([0x07, 0x00])
    assert str(n) == "/"


def test_decode_none():
    with pytest.raises(NonExistentError):
        decode_name(None)


def test_decode_empty_component():
    with pytest.raises(NdnError):
        decode_name(Block(0x07, bytes([0x08, 0x00])))


def test_decode_wrong_type():
    with pytest.raises(UnexpectedTypeError):
        decode_name(Block(0x08, bytes([0x08, 0x02, 0x67, 0x6F, 0x08, 0x03, 0x6E, 0x64, 0x6E])))


def test_decode():
    n = decode_name(Block(0x07, bytes([0x08, 0x02, 0x67, 0x6F, 0x08, 0x03, 0x6E, 0x64, 0x6E])))
    assert len(n) == 2
    assert n.at(0).tlv_type == tlv_types.GENERIC_NAME_COMPONENT
    assert n.at(0).value == b"go"
    assert str(n.at(0)) == "go"
    assert n.at(1).tlv_type == tlv_types.GENERIC_NAME_COMPONENT
    assert n.at(1).value == b"ndn"
    assert str(n.at(1)) == "ndn"
    assert str(n) == "/go/ndn"


def test_decode_unknown_component():
    n = decode_name(Block(0x07, bytes([0xDD, 0x02, 0x67, 0x6F, 0x08, 0x03, 0x6E, 0x64, 0x6E])))
    assert len(n) == 2
    assert n.at(0).tlv_type == 0xDD
    assert n.at(0).value == b"go"
    assert str(n.at(0)) == "221=go"
    assert n.at(1).tlv_type == tlv_types.GENERIC_NAME_COMPONENT
    assert str(n.at(1)) == "ndn"
    assert str(n) == "/221=go/ndn"


def test_components():
    n = Name()
    go = GenericNameComponent(b"go")
    n.append(go)
    assert len(n) == 1
    assert str(n.at(0)) == "go"

    n.append(GenericNameComponent(b"ndn"))
    assert len(n) == 2
    assert [str(c) for c in n] == ["go", "ndn"]

    n.append(go)
    assert len(n) == 3
    assert [str(c) for c in n] == ["go", "ndn", "go"]

    n.set(2, SegmentNameComponent(27))
    assert len(n) == 3
    assert n.at(2).tlv_type == tlv_types.SEGMENT_NAME_COMPONENT
    assert str(n.at(2)) == "seg=27"

    n.insert(2, go)
    assert len(n) == 4
    assert [str(c) for c in n] == ["go", "ndn", "go", "seg=27"]
    assert n.at(3).tlv_type == tlv_types.SEGMENT_NAME_COMPONENT

    index, matching = n.find(tlv_types.SEGMENT_NAME_COMPONENT)
    assert index == 3
    assert matching.tlv_type == tlv_types.SEGMENT_NAME_COMPONENT
    assert n.find(tlv_types.IMPLICIT_SHA256_DIGEST_COMPONENT) == (-1, None)

    n.erase(1)
    assert len(n) == 3
    assert n.at(3) is None
    assert [str(c) for c in n] == ["go", "go", "seg=27"]

    n.clear()
    assert len(n) == 0
    assert n.at(0) is None


def test_negative_index():
    n = name_from_string("/a/b/c")
    assert str(n.at(-1)) == "c"
    assert str(n.at(-3)) == "a"
    assert n.at(-4) is None


def test_out_of_range_mutations():
    n = name_from_string("/a/b")
    with pytest.raises(OutOfRangeError):
        n.erase(2)
    with pytest.raises(OutOfRangeError):
        n.set(-1, GenericNameComponent(b"x"))
    with pytest.raises(OutOfRangeError):
        n.insert(2, GenericNameComponent(b"x"))


def test_comparison():
    n = decode_name(Block(0x07, GO_NDN_SEG))
    assert len(n) == 3
    assert str(n.at(2)) == "seg=170"

    prefix = n.prefix(2)
    assert len(prefix) == 2
    assert str(prefix) == "/go/ndn"

    assert n == n
    assert prefix == prefix
    assert n != prefix
    assert prefix != n
    assert prefix.is_prefix_of(n)
    assert not n.is_prefix_of(prefix)

    n_ndn_go = decode_name(
        Block(0x07, bytes([0x08, 0x03, 0x6E, 0x64, 0x6E, 0x08, 0x02, 0x67, 0x6F, 0x21, 0x01, 0xAA]))
    )
    assert n != n_ndn_go
    assert n_ndn_go != n

    n1 = n.prefix(len(n))
    n1.set(1, GenericNameComponent(b"go"))
    assert not n.is_prefix_of(n1)
    assert not n1.is_prefix_of(n)
    assert n != n1
    assert n1 != n


def test_encode():
    n = decode_name(Block(0x07, GO_NDN_SEG))
    assert n.has_wire()
    assert n.encode().wire() == bytes([0x07, 0x0C]) + GO_NDN_SEG

    n.set(1, GenericNameComponent(b"go"))
    assert not n.has_wire()
    block = n.encode()
    assert n.has_wire()
    assert block.wire() == bytes(
        [0x07, 0x0B, 0x08, 0x02, 0x67, 0x6F, 0x08, 0x02, 0x67, 0x6F, 0x21, 0x01, 0xAA]
    )


def test_compare():
    n1 = decode_name(Block(0x07, GO_NDN_SEG))
    n2 = decode_name(Block(0x07, bytes([0x08, 0x02, 0x67, 0x6F, 0x08, 0x03, 0x6E, 0x64, 0x6E])))
    n3 = decode_name(Block(0x07, bytes([0x08, 0x02, 0x67, 0x6F, 0x08, 0x03, 0x6E, 0x64, 0x6F])))
    n4 = decode_name(Block(0x07, bytes([0x08, 0x02, 0x67, 0x6F, 0x09, 0x03, 0x6E, 0x64, 0x6E])))
    n5 = decode_name(
        Block(0x07, bytes([0x08, 0x02, 0x67, 0x6F, 0x09, 0x04, 0x6E, 0x64, 0x6E, 0x6E]))
    )

    assert n1.compare(n1) == 0
    assert n2.compare(n1) == -1
    assert n1.compare(n2) == 1
    assert n2.compare(n4) == -1
    assert n4.compare(n2) == 1
    assert n4.compare(n5) == -1
    assert n5.compare(n4) == 1
    assert n2.compare(n3) == -1
    assert n3.compare(n2) == 1


def test_escape():
    n = decode_name(
        Block(
            0x07,
            bytes(
                [0x08, 0x02, 0x67, 0x6F, 0x08, 0x03, 0x6E, 0x64, 0x6E,
                 0x08, 0x08, 0x30, 0x31, 0x32, 0x33, 0x24, 0x30, 0x2E, 0x2A]
            ),
        )
    )
    assert str(n) == "/go/ndn/0123%240.%2a"


def test_deep_copy_is_independent():
    n = name_from_string("/a/b")
    copied = n.deep_copy()
    assert copied == n
    copied.append(GenericNameComponent(b"c"))
    assert len(n) == 2
    assert str(copied) == "/a/b/c"


@pytest.mark.parametrize(
    "text",
    [
        "/localhost/nfd/strategy/best-route/v=1",
        "/go/ndn/seg=27",
        "/test/name/202=abc123",
        "/a/off=5/t=100/seq=9",
        "/go/ndn/0123%240.%2a",
    ],
)
def test_string_round_trip(text):
    assert str(name_from_string(text)) == text


def test_from_string_types():
    n = name_from_string("/test/v=1/202=abc123/8=x")
    assert isinstance(n.at(1), VersionNameComponent)
    assert n.at(1).number == 1
    assert n.at(2).tlv_type == 202
    assert n.at(2).value == b"abc123"
    assert n.at(3) == GenericNameComponent(b"x")
    assert n.at(2) == NameComponent(202, b"abc123")


@pytest.mark.parametrize("text", ["", "/"])
def test_from_string_empty(text):
    assert len(name_from_string(text)) == 0


@pytest.mark.parametrize(
    "text",
    ["/a=b=c", "/seg=abc", "/v=-1", "/%zz", "/%4", "/abc=1", "/70000=x", "/sha256digest=xyz"],
)
def test_from_string_errors(text):
    with pytest.raises(NdnError):
        name_from_string(text)


def test_from_string_digest():
    digest = "ab" * 32
    n = name_from_string(f"/a/sha256digest={digest}")
    assert n.at(1).tlv_type == tlv_types.IMPLICIT_SHA256_DIGEST_COMPONENT
    assert str(n) == f"/a/sha256digest={digest}"