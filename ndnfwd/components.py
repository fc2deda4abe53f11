"""NDN name components: the generic base type and its typed variants."""

from __future__ import annotations

import copy
from typing import Callable, Dict, Optional

from ndnfwd import tlv_types
from ndnfwd.tlv import (
    Block,
    BufferTooShortError,
    DecodeNameComponentError,
    NdnError,
    NonExistentError,
    OutOfRangeError,
    TooShortError,
    decode_nni,
    encode_nni,
)

_MAX_COMPONENT_TYPE = 0xFFFF
_DIGEST_LENGTH = 32
_UNRESERVED = frozenset(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~"
)


def escape_component(value: bytes) -> str:
    """Percent-encode every octet outside the URI unreserved set."""
    return "".join(
        chr(octet) if octet in _UNRESERVED else f"%{octet:02x}" for octet in bytes(value)
    )


def unescape_component(text: str) -> bytes:
    """Decode percent escapes in a component string into raw octets."""
    raw = text.encode("utf-8")
    out = bytearray()
    position = 0
    while position < len(raw):
        octet = raw[position]
        if octet != ord("%"):
            out.append(octet)
            position += 1
            continue
        if len(raw) <= position + 2:
            raise NdnError("incomplete escape sequence")
        try:
            out += bytes.fromhex(raw[position + 1 : position + 3].decode("ascii"))
        except (ValueError, UnicodeDecodeError) as exc:
            raise NdnError("could not decode escape sequence") from exc
        position += 3
    return bytes(out)


class NameComponent:
    """A name component of an arbitrary TLV type."""

    def __init__(self, tlv_type: int, value: bytes) -> None:
        if tlv_type < 0 or tlv_type > _MAX_COMPONENT_TYPE:
            raise OutOfRangeError()
        self._type = tlv_type
        self._wire: Optional[Block] = None
        self._value = self._accept(bytes(value))

    def _accept(self, value: bytes) -> bytes:
        """Validate a new value and return what is to be stored."""
        if not value:
            raise TooShortError()
        return value

    @property
    def tlv_type(self) -> int:
        return self._type

    @property
    def value(self) -> bytes:
        return self._value

    @value.setter
    def value(self, value: bytes) -> None:
        self._value = self._accept(bytes(value))
        self._wire = None

    def __str__(self) -> str:
        return f"{self._type}={escape_component(self._value)}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NameComponent):
            return NotImplemented
        return self._type == other.tlv_type and self._value == other.value

    def __hash__(self) -> int:
        return hash((self._type, self._value))

    def deep_copy(self) -> "NameComponent":
        """Return an independent copy of the component."""
        clone = copy.copy(self)
        clone._wire = None
        return clone

    def encode(self) -> Block:
        """Return the component as a block, with its wire encoding built."""
        if self._wire is None:
            self._wire = Block(self._type, self._value)
            self._wire.wire()
        return self._wire


class _DigestComponent(NameComponent):
    TLV_TYPE = 0
    _LABEL = ""

    def __init__(self, value: bytes) -> None:
        super().__init__(self.TLV_TYPE, value)

    def _accept(self, value: bytes) -> bytes:
        if len(value) != _DIGEST_LENGTH:
            raise OutOfRangeError()
        return value

    def __str__(self) -> str:
        return f"{self._LABEL}={self._value.hex()}"


class ImplicitSha256DigestComponent(_DigestComponent):
    """The implicit SHA-256 digest of a Data packet."""

    TLV_TYPE = tlv_types.IMPLICIT_SHA256_DIGEST_COMPONENT
    _LABEL = "sha256digest"

    def __init__(self, value: bytes) -> None:
        super().__init__(value)


class ParametersSha256DigestComponent(_DigestComponent):
    """The SHA-256 digest of an Interest's parameters."""

    TLV_TYPE = tlv_types.PARAMETERS_SHA256_DIGEST_COMPONENT
    _LABEL = "params-sha256"


class GenericNameComponent(NameComponent):
    """A generic name component."""

    TLV_TYPE = tlv_types.GENERIC_NAME_COMPONENT

    def __init__(self, value: bytes) -> None:
        super().__init__(self.TLV_TYPE, value)

    def __str__(self) -> str:
        return escape_component(self._value)


class KeywordNameComponent(NameComponent):
    """A component holding a well-known keyword."""

    TLV_TYPE = tlv_types.KEYWORD_NAME_COMPONENT

    def __init__(self, value: bytes) -> None:
        super().__init__(self.TLV_TYPE, value)

    def __str__(self) -> str:
        return escape_component(self._value)


class _NumberComponent(NameComponent):
    TLV_TYPE = 0
    _LABEL = ""

    def __init__(self, number: int) -> None:
        super().__init__(self.TLV_TYPE, encode_nni(number))

    @classmethod
    def decode(cls, value: bytes):
        """Build the component from a TLV value holding a non-negative integer."""
        component = cls.__new__(cls)
        NameComponent.__init__(component, cls.TLV_TYPE, value)
        return component

    def _accept(self, value: bytes) -> bytes:
        self._number = decode_nni(value)
        return value

    @property
    def number(self) -> int:
        return self._number

    @number.setter
    def number(self, number: int) -> None:
        self.value = encode_nni(number)

    def __str__(self) -> str:
        return f"{self._LABEL}={self._number}"


class SegmentNameComponent(_NumberComponent):
    """A component holding a segment number."""

    TLV_TYPE = tlv_types.SEGMENT_NAME_COMPONENT
    _LABEL = "seg"

    def __init__(self, number: int) -> None:
        super().__init__(number)

    @classmethod
    def decode(cls, value: bytes) -> "SegmentNameComponent":
        """Build a segment component from its TLV value."""
        return super().decode(value)


class ByteOffsetNameComponent(_NumberComponent):
    """A component holding a byte offset."""

    TLV_TYPE = tlv_types.BYTE_OFFSET_NAME_COMPONENT
    _LABEL = "off"


class VersionNameComponent(_NumberComponent):
    """A component holding a version number."""

    TLV_TYPE = tlv_types.VERSION_NAME_COMPONENT
    _LABEL = "v"


class TimestampNameComponent(_NumberComponent):
    """A component holding a Unix timestamp in microseconds."""

    TLV_TYPE = tlv_types.TIMESTAMP_NAME_COMPONENT
    _LABEL = "t"


class SequenceNumNameComponent(_NumberComponent):
    """A component holding a sequence number."""

    TLV_TYPE = tlv_types.SEQUENCE_NUM_NAME_COMPONENT
    _LABEL = "seq"


_DECODERS: Dict[int, Callable[[bytes], NameComponent]] = {
    tlv_types.IMPLICIT_SHA256_DIGEST_COMPONENT: ImplicitSha256DigestComponent,
    tlv_types.PARAMETERS_SHA256_DIGEST_COMPONENT: ParametersSha256DigestComponent,
    tlv_types.GENERIC_NAME_COMPONENT: GenericNameComponent,
    tlv_types.KEYWORD_NAME_COMPONENT: KeywordNameComponent,
    tlv_types.SEGMENT_NAME_COMPONENT: SegmentNameComponent.decode,
    tlv_types.BYTE_OFFSET_NAME_COMPONENT: ByteOffsetNameComponent.decode,
    tlv_types.VERSION_NAME_COMPONENT: VersionNameComponent.decode,
    tlv_types.TIMESTAMP_NAME_COMPONENT: TimestampNameComponent.decode,
    tlv_types.SEQUENCE_NUM_NAME_COMPONENT: SequenceNumNameComponent.decode,
}


def decode_name_component(block: Optional[Block]) -> NameComponent:
    """Decode a name component from a block, choosing the class by TLV type."""
    if block is None:
        raise NonExistentError()
    value = block.value
    if not value:
        raise BufferTooShortError()
    decoder = _DECODERS.get(block.tlv_type)
    try:
        if decoder is not None:
            return decoder(value)
        return NameComponent(block.tlv_type, value)
    except NdnError as exc:
        raise DecodeNameComponentError() from exc