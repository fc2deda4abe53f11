import pytest

from ndnfwd import tlv_types
from ndnfwd.components import (
    ByteOffsetNameComponent,
    GenericNameComponent,
    ImplicitSha256DigestComponent,
    KeywordNameComponent,
    NameComponent,
    ParametersSha256DigestComponent,
    SegmentNameComponent,
    SequenceNumNameComponent,
    TimestampNameComponent,
    VersionNameComponent,
    decode_name_component,
    escape_component,
    unescape_component,
)
from ndnfwd.tlv import (
    Block,
    BufferTooShortError,
    DecodeNameComponentError,
    NdnError,
    NonExistentError,
    OutOfRangeError,
)


def test_escape_matches_source_example():
    assert escape_component(bytes([0x30, 0x31, 0x32, 0x33, 0x24, 0x30, 0x2E, 0x2A])) == "0123%240.%2a"


def test_escape_keeps_unreserved():
    assert escape_component(b"go-ndn_1.0~") == "go-ndn_1.0~"


@pytest.mark.parametrize("raw", [b"go", b"a b/c", bytes(range(256)), b"%%"])
def test_escape_unescape_round_trip(raw):
    assert unescape_component(escape_component(raw)) == raw


@pytest.mark.parametrize("text", ["abc%4", "%", "ab%zz"])
def test_unescape_errors(text):
    with pytest.raises(NdnError):
        unescape_component(text)


def test_decode_generic():
    component = decode_name_component(Block(0x08, b"go"))
    assert isinstance(component, GenericNameComponent)
    assert component.tlv_type == tlv_types.GENERIC_NAME_COMPONENT
    assert component.value == b"go"
    assert str(component) == "go"


def test_decode_unknown_type():
    component = decode_name_component(Block(0xDD, b"go"))
    assert component.tlv_type == 0xDD
    assert component.value == b"go"
    assert str(component) == "221=go"


def test_decode_segment():
    component = decode_name_component(Block(0x21, b"\xaa"))
    assert isinstance(component, SegmentNameComponent)
    assert component.number == 170
    assert str(component) == "seg=170"


def test_decode_errors():
    with pytest.raises(NonExistentError):
        decode_name_component(None)
    with pytest.raises(BufferTooShortError):
        decode_name_component(Block(0x08, b""))
    with pytest.raises(DecodeNameComponentError):
        decode_name_component(Block(0x10000, b"x"))
    with pytest.raises(DecodeNameComponentError):
        decode_name_component(Block(0x21, bytes(9)))
    with pytest.raises(DecodeNameComponentError):
        decode_name_component(Block(0x01, b"short"))


@pytest.mark.parametrize(
    "cls, label",
    [
        (SegmentNameComponent, "seg"),
        (ByteOffsetNameComponent, "off"),
        (VersionNameComponent, "v"),
        (TimestampNameComponent, "t"),
        (SequenceNumNameComponent, "seq"),
    ],
)
def test_number_components_round_trip(cls, label):
    component = cls(27)
    assert str(component) == f"{label}=27"
    decoded = decode_name_component(component.encode())
    assert type(decoded) is cls
    assert decoded == component
    assert decoded.number == 27


def test_segment_wire():
    assert SegmentNameComponent(0xAA).encode().wire() == b"\x21\x01\xaa"


def test_segment_decode_keeps_raw_value():
    component = SegmentNameComponent.decode(b"\x00\x01")
    assert component.number == 1
    assert component.value == b"\x00\x01"


def test_number_setter_invalidates_wire():
    component = SegmentNameComponent(0xAA)
    first = component.encode().wire()
    component.number = 300
    assert component.number == 300
    assert component.encode().wire() != first
    assert decode_name_component(component.encode()).number == 300


def test_digest_components():
    digest = bytes(range(32))
    implicit = ImplicitSha256DigestComponent(digest)
    params = ParametersSha256DigestComponent(digest)
    assert str(implicit) == "sha256digest=" + digest.hex()
    assert str(params) == "params-sha256=" + digest.hex()
    assert implicit != params
    with pytest.raises(OutOfRangeError):
        ImplicitSha256DigestComponent(b"\x00" * 31)
    with pytest.raises(OutOfRangeError):
        implicit.value = b"\x00" * 33
    assert implicit.value == digest


def test_empty_values_rejected():
    with pytest.raises(NdnError):
        GenericNameComponent(b"")
    with pytest.raises(NdnError):
        KeywordNameComponent(b"")
    with pytest.raises(NdnError):
        NameComponent(0x99, b"")


def test_base_type_range():
    with pytest.raises(OutOfRangeError):
        NameComponent(0x10000, b"x")


def test_equality_across_classes():
    assert GenericNameComponent(b"go") == NameComponent(0x08, b"go")
    assert GenericNameComponent(b"go") != KeywordNameComponent(b"go")
    assert GenericNameComponent(b"go") != GenericNameComponent(b"ndn")


def test_deep_copy_is_independent():
    original = VersionNameComponent(5)
    clone = original.deep_copy()
    assert clone == original
    assert type(clone) is VersionNameComponent
    clone.number = 6
    assert original.number == 5
    assert clone.number == 6


def test_generic_value_setter():
    component = GenericNameComponent(b"go")
    component.value = b"ndn"
    assert str(component) == "ndn"
    assert decode_name_component(component.encode()).value == b"ndn"