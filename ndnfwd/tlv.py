"""TLV blocks and the variable-length number encodings used on the NDN wire."""

from __future__ import annotations

from bisect import bisect_right
from typing import Iterable, Optional, Tuple

MAX_NDN_PACKET_SIZE = 8800

_MAX_UINT8 = 0xFF
_MAX_UINT16 = 0xFFFF
_MAX_UINT32 = 0xFFFFFFFF
_MAX_UINT64 = 0xFFFFFFFFFFFFFFFF


class NdnError(ValueError):
    """Base class for errors raised while handling NDN data."""

    default_message = "NDN error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class DecodeNameComponentError(NdnError):
    default_message = "error decoding name component"


class NonExistentError(NdnError):
    default_message = "required value does not exist"


class OutOfRangeError(NdnError):
    default_message = "value outside of allowed range"


class TooLongError(NdnError):
    default_message = "value too long"


class TooShortError(NdnError):
    default_message = "value too short"


class BufferTooShortError(NdnError):
    default_message = "TLV length exceeds buffer size"


class MissingLengthError(NdnError):
    default_message = "missing TLV length"


class UnexpectedTypeError(NdnError):
    default_message = "unexpected TLV type"


class UnrecognizedCriticalError(NdnError):
    default_message = "unrecognized critical TLV type"


# ---------------------------------------------------------------------------
# Number encodings
# ---------------------------------------------------------------------------


def encode_varnum(value: int) -> bytes:
    """Encode a non-negative integer as a TLV variable-length number."""
    if value < 0 or value > _MAX_UINT64:
        raise OutOfRangeError()
    if value <= 0xFC:
        return bytes((value,))
    if value <= _MAX_UINT16:
        return b"\xfd" + value.to_bytes(2, "big")
    if value <= _MAX_UINT32:
        return b"\xfe" + value.to_bytes(4, "big")
    return b"\xff" + value.to_bytes(8, "big")


def decode_varnum(buf: bytes) -> Tuple[int, int]:
    """Decode a variable-length number, returning (value, bytes consumed)."""
    if len(buf) < 1:
        raise TooShortError()
    first = buf[0]
    if first <= 0xFC:
        return first, 1
    width = {0xFD: 2, 0xFE: 4, 0xFF: 8}[first]
    if len(buf) < width + 1:
        raise TooShortError()
    return int.from_bytes(bytes(buf[1 : width + 1]), "big"), width + 1


def _nni_width(value: int) -> int:
    if value < 0 or value > _MAX_UINT64:
        raise OutOfRangeError()
    if value <= _MAX_UINT8:
        return 1
    if value <= _MAX_UINT16:
        return 2
    if value <= _MAX_UINT32:
        return 4
    return 8


def encode_nni(value: int) -> bytes:
    """Encode a non-negative integer as a 1, 2, 4 or 8 octet TLV value."""
    return value.to_bytes(_nni_width(value), "big")


def encode_nni_block(tlv_type: int, value: int) -> "Block":
    """Build a block of the given type holding a non-negative integer."""
    return Block(tlv_type, encode_nni(value))


def nni_block_size(tlv_type: int, value: int) -> int:
    """Size of the type and value of a non-negative integer block.

    The length field is not counted.
    """
    return len(encode_varnum(tlv_type)) + _nni_width(value)


def decode_nni_block(block: Optional["Block"]) -> int:
    """Decode the non-negative integer held by a block."""
    if block is None:
        raise NonExistentError()
    value = block.value
    if len(value) < 1:
        raise BufferTooShortError()
    if len(value) > 8:
        raise TooLongError()
    return int.from_bytes(value, "big")


def decode_nni(value: bytes) -> int:
    """Decode a non-negative integer from a TLV value."""
    if len(value) > 8:
        raise TooLongError()
    if len(value) == 0:
        raise TooShortError()
    return int.from_bytes(bytes(value), "big")


def decode_type_length(buf: bytes) -> Tuple[int, int, int]:
    """Decode the type and length of a block, returning (type, length, total size)."""
    tlv_type, type_size = decode_varnum(buf)
    if tlv_type > _MAX_UINT32:
        raise OutOfRangeError("TLV type out of range")
    tlv_length, length_size = decode_varnum(buf[type_size:])
    return tlv_type, tlv_length, type_size + length_size + tlv_length


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------


class Block:
    """A TLV element with a type, a value or sub-elements, and a cached wire form."""

    def __init__(self, tlv_type: int, value: bytes = b"") -> None:
        self._type = tlv_type
        self._value = bytes(value)
        self._subelements: list[Block] = []
        self._wire = b""

    def __repr__(self) -> str:
        return f"Block(type=0x{self._type:x}, value={self._value!r}, subelements={len(self._subelements)})"

    @property
    def tlv_type(self) -> int:
        return self._type

    @tlv_type.setter
    def tlv_type(self, tlv_type: int) -> None:
        if tlv_type != self._type:
            self._type = tlv_type
            self._wire = b""

    @property
    def value(self) -> bytes:
        return self._value

    @value.setter
    def value(self, value: bytes) -> None:
        value = bytes(value)
        if value != self._value:
            self._value = value
            self._wire = b""

    @property
    def subelements(self) -> list["Block"]:
        return list(self._subelements)

    def __iter__(self):
        return iter(list(self._subelements))

    def append(self, block: "Block") -> None:
        """Add a sub-element at the end."""
        self._subelements.append(block)
        self._wire = b""

    def extend(self, blocks: Iterable["Block"]) -> None:
        """Add several sub-elements at the end."""
        for block in blocks:
            self.append(block)

    def clear(self) -> None:
        """Remove all sub-elements."""
        if self._subelements:
            self._subelements = []
            self._wire = b""

    def deep_copy(self) -> "Block":
        """Return an independent copy of the block and its sub-elements."""
        copied = Block(self._type, self._value)
        copied._subelements = [elem.deep_copy() for elem in self._subelements]
        copied._wire = self._wire
        return copied

    def encode(self) -> None:
        """Fold the sub-elements into the value and drop them."""
        if not self._subelements:
            return
        self._value = b"".join(elem.wire() for elem in self._subelements)
        self._subelements = []

    def erase(self, tlv_type: int) -> bool:
        """Remove the first sub-element of a type; return whether one was removed."""
        for index, elem in enumerate(self._subelements):
            if elem.tlv_type == tlv_type:
                del self._subelements[index]
                self._wire = b""
                return True
        return False

    def erase_all(self, tlv_type: int) -> int:
        """Remove every sub-element of a type; return how many were removed."""
        count = 0
        while self.erase(tlv_type):
            count += 1
        return count

    def find(self, tlv_type: int) -> Optional["Block"]:
        """Return the first sub-element of a type, or None."""
        return next((elem for elem in self._subelements if elem.tlv_type == tlv_type), None)

    def insert(self, block: "Block") -> None:
        """Insert a sub-element in ascending type order, after any of the same type."""
        position = bisect_right([elem.tlv_type for elem in self._subelements], block.tlv_type)
        self._subelements.insert(position, block)
        self._wire = b""

    def parse(self) -> None:
        """Split the value into sub-elements."""
        self._subelements = []
        value = self._value
        position = 0
        while position < len(value):
            block, length = decode_block(value[position:])
            self._subelements.append(block)
            position += length

    def wire(self) -> bytes:
        """Return the wire encoding, building and caching it if needed."""
        if not self._wire:
            if self._subelements:
                body = b"".join(elem.wire() for elem in self._subelements)
            else:
                body = self._value
            self._wire = encode_varnum(self._type) + encode_varnum(len(body)) + body
        return self._wire

    def has_wire(self) -> bool:
        return len(self._wire) > 0

    def size(self) -> int:
        """Size of the cached wire encoding."""
        return len(self._wire)

    def reset(self) -> None:
        """Clear the wire encoding, value and sub-elements."""
        self._wire = b""
        self._value = b""
        self._subelements = []


def decode_block(wire: bytes) -> Tuple[Block, int]:
    """Decode one block from the start of a buffer, returning (block, bytes consumed)."""
    wire = bytes(wire)
    tlv_type, type_size = decode_varnum(wire)
    if tlv_type > _MAX_UINT32:
        raise OutOfRangeError()
    if type_size == len(wire):
        raise MissingLengthError()
    tlv_length, length_size = decode_varnum(wire[type_size:])
    total = type_size + length_size + tlv_length
    if len(wire) < total:
        raise BufferTooShortError()
    block = Block(tlv_type, wire[type_size + length_size : total])
    block._wire = wire[:total]
    return block, total