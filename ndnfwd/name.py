"""NDN names: ordered sequences of name components."""

from __future__ import annotations

import re
from typing import Iterable, Iterator, List, Optional, Tuple

from ndnfwd import tlv_types
from ndnfwd.components import (
    ByteOffsetNameComponent,
    GenericNameComponent,
    ImplicitSha256DigestComponent,
    NameComponent,
    ParametersSha256DigestComponent,
    SegmentNameComponent,
    SequenceNumNameComponent,
    TimestampNameComponent,
    VersionNameComponent,
    decode_name_component,
    unescape_component,
)
from ndnfwd.tlv import (
    Block,
    NdnError,
    NonExistentError,
    OutOfRangeError,
    UnexpectedTypeError,
)

_DECIMAL = re.compile(r"[0-9]+")
_MAX_UINT16 = 0xFFFF
_MAX_UINT64 = 0xFFFFFFFFFFFFFFFF


class Name:
    """An NDN name made of an ordered list of components."""

    def __init__(self, components: Optional[Iterable[NameComponent]] = None) -> None:
        self._components: List[NameComponent] = list(components or ())
        self._wire: Optional[Block] = None
        self._cached: Optional[str] = None

    def _invalidate(self) -> None:
        self._wire = None
        self._cached = None

    def __str__(self) -> str:
        if self._cached is None:
            if not self._components:
                self._cached = "/"
            else:
                self._cached = "".join(f"/{component}" for component in self._components)
        return self._cached

    def __repr__(self) -> str:
        return f"Name({str(self)!r})"

    def __len__(self) -> int:
        return len(self._components)

    def __iter__(self) -> Iterator[NameComponent]:
        return iter(list(self._components))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Name):
            return NotImplemented
        return len(self) == len(other) and all(
            mine == theirs for mine, theirs in zip(self._components, other._components)
        )

    __hash__ = None  # type: ignore[assignment]

    def append(self, component: NameComponent) -> "Name":
        """Add a component at the end and return the name."""
        self._components.append(component)
        self._invalidate()
        return self

    def at(self, index: int) -> Optional[NameComponent]:
        """Return the component at an index (negative counts from the end), or None."""
        if index < -len(self._components) or index >= len(self._components):
            return None
        return self._components[index]

    def clear(self) -> None:
        """Remove all components."""
        if self._components:
            self._components = []
            self._invalidate()

    def compare(self, other: "Name") -> int:
        """Return -1, 0 or 1 following the canonical order of names."""
        if self == other:
            return 0
        if self.is_prefix_of(other):
            return -1
        if other.is_prefix_of(self):
            return 1
        for mine, theirs in zip(self._components, other._components):
            key_mine = (mine.tlv_type, len(mine.value), mine.value)
            key_theirs = (theirs.tlv_type, len(theirs.value), theirs.value)
            if key_mine < key_theirs:
                return -1
            if key_mine > key_theirs:
                return 1
        return 0

    def deep_copy(self) -> "Name":
        """Return an independent copy of the name."""
        return Name(component.deep_copy() for component in self._components)

    def erase(self, index: int) -> None:
        """Remove the component at an index."""
        if index < 0 or index >= len(self._components):
            raise OutOfRangeError()
        del self._components[index]
        self._invalidate()

    def find(self, tlv_type: int) -> Tuple[int, Optional[NameComponent]]:
        """Return the index and the first component of a type, or (-1, None)."""
        for index, component in enumerate(self._components):
            if component.tlv_type == tlv_type:
                return index, component
        return -1, None

    def has_wire(self) -> bool:
        return self._wire is not None

    def insert(self, index: int, component: NameComponent) -> None:
        """Insert a copy of a component before an existing index."""
        if index < 0 or index >= len(self._components):
            raise OutOfRangeError()
        self._components.insert(index, component.deep_copy())
        self._invalidate()

    def prefix(self, size: int) -> "Name":
        """Return a copy of the first ``size`` components."""
        return Name(component.deep_copy() for component in self._components[: max(size, 0)])

    def is_prefix_of(self, other: Optional["Name"]) -> bool:
        """Return whether this name is a prefix of another."""
        if other is None or len(self) > len(other):
            return False
        return all(mine == theirs for mine, theirs in zip(self._components, other._components))

    def set(self, index: int, component: NameComponent) -> None:
        """Replace the component at an index."""
        if index < 0 or index >= len(self._components):
            raise OutOfRangeError()
        self._components[index] = component
        self._invalidate()

    def encode(self) -> Block:
        """Return the name as a block, with its wire encoding built."""
        if self._wire is None:
            block = Block(tlv_types.NAME)
            for component in self._components:
                block.append(component.encode())
            block.wire()
            self._wire = block
        return self._wire


def decode_name(block: Optional[Block]) -> Name:
    """Decode a name from a Name block."""
    if block is None:
        raise NonExistentError()
    block.wire()
    if block.tlv_type != tlv_types.NAME:
        raise UnexpectedTypeError()
    if not block.subelements:
        block.parse()
    name = Name(decode_name_component(elem) for elem in block.subelements)
    name._wire = block
    return name


def _parse_uint(text: bytes, limit: int, message: str) -> int:
    decoded = text.decode("ascii", errors="replace")
    if not _DECIMAL.fullmatch(decoded) or int(decoded) > limit:
        raise NdnError(message)
    return int(decoded)


_NUMBER_KINDS = {
    "seg": (SegmentNameComponent, "SegmentNameComponent"),
    "off": (ByteOffsetNameComponent, "ByteOffsetNameComponent"),
    "v": (VersionNameComponent, "VersionNameComponent"),
    "t": (TimestampNameComponent, "TimestampNameComponent"),
    "seq": (SequenceNumNameComponent, "SequenceNumNameComponent"),
}

_DIGEST_KINDS = {
    "sha256digest": (ImplicitSha256DigestComponent, "ImplicitSha256DigestComponent"),
    "params-sha256": (ParametersSha256DigestComponent, "ParametersSha256DigestComponent"),
}


def _unescape(text: str) -> bytes:
    try:
        return unescape_component(text)
    except NdnError as exc:
        raise NdnError("error unescaping component value") from exc


def _component_from_string(text: str) -> NameComponent:
    if "=" not in text:
        return GenericNameComponent(_unescape(text))
    parts = text.split("=")
    if len(parts) != 2:
        raise NdnError("Name component has extraneous =")
    label, raw = parts
    value = _unescape(raw)

    if label in _DIGEST_KINDS:
        cls, kind = _DIGEST_KINDS[label]
        try:
            digest = bytes.fromhex(value.decode("ascii"))
        except (ValueError, UnicodeDecodeError) as exc:
            raise NdnError(f"{kind} is not a hex string") from exc
        return cls(digest)
    if label == "8":
        return GenericNameComponent(value)
    if label in _NUMBER_KINDS:
        cls, kind = _NUMBER_KINDS[label]
        return cls(_parse_uint(value, _MAX_UINT64, f"{kind} is not a decimal string"))
    tlv_type = _parse_uint(
        label.encode("utf-8"), _MAX_UINT16, f'unable to decode component type "{label}"'
    )
    return NameComponent(tlv_type, value)


def name_from_string(text: str) -> Name:
    """Parse a name from its URI form, such as ``/a/b/seg=3``."""
    name = Name()
    if not text:
        return name
    parts = text.split("/")[1:]
    if not parts:
        raise NdnError("name must begin with /")
    if not parts[0]:
        return name
    for part in parts:
        name.append(_component_from_string(part))
    return name