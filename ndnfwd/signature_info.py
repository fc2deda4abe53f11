"""SignatureInfo and InterestSignatureInfo elements."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from ndnfwd import tlv_types
from ndnfwd.security import SignatureType
from ndnfwd.tlv import (
    Block,
    NdnError,
    NonExistentError,
    UnrecognizedCriticalError,
    decode_nni_block,
    encode_nni_block,
)
from ndnfwd.tlv_types import is_critical

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)

# Position of each known element in the required order.
_ORDER = {
    tlv_types.SIGNATURE_TYPE: 1,
    tlv_types.KEY_LOCATOR: 2,
    tlv_types.SIGNATURE_NONCE: 3,
    tlv_types.SIGNATURE_TIME: 4,
    tlv_types.SIGNATURE_SEQ_NUM: 5,
}

_LABELS = {
    tlv_types.SIGNATURE_TYPE: "SignatureType",
    tlv_types.KEY_LOCATOR: "KeyLocator",
    tlv_types.SIGNATURE_NONCE: "SignatureNonce",
    tlv_types.SIGNATURE_TIME: "SignatureTime",
    tlv_types.SIGNATURE_SEQ_NUM: "SignatureSeqNum",
}

_INTEREST_ONLY = frozenset(
    (tlv_types.SIGNATURE_NONCE, tlv_types.SIGNATURE_TIME, tlv_types.SIGNATURE_SEQ_NUM)
)


def _as_signature_type(value: int) -> Union[SignatureType, int]:
    try:
        return SignatureType(value)
    except ValueError:
        return int(value)


def _to_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _milliseconds(moment: datetime) -> int:
    return (_to_utc(moment) - _EPOCH) // _MILLISECOND


class SignatureInfo:
    """The SignatureInfo of a Data packet or the InterestSignatureInfo of an Interest."""

    def __init__(
        self,
        signature_type: int = SignatureType.DIGEST_SHA256,
        is_interest: bool = False,
    ) -> None:
        self._signature_type = _as_signature_type(signature_type)
        self._is_interest = bool(is_interest)
        self._key_locator: Optional[Block] = None
        self._nonce: Optional[bytes] = None
        self._time: Optional[datetime] = None
        self._seq_num: Optional[int] = None
        self._wire: Optional[Block] = None

    @property
    def is_interest(self) -> bool:
        """True for an InterestSignatureInfo, False for a Data SignatureInfo."""
        return self._is_interest

    @property
    def signature_type(self) -> Union[SignatureType, int]:
        return self._signature_type

    @signature_type.setter
    def signature_type(self, value: int) -> None:
        self._signature_type = _as_signature_type(value)
        self._wire = None

    @property
    def key_locator(self) -> Optional[Block]:
        """The KeyLocator block, or None."""
        return self._key_locator

    @key_locator.setter
    def key_locator(self, block: Optional[Block]) -> None:
        self._key_locator = block
        self._wire = None

    @property
    def nonce(self) -> Optional[bytes]:
        return self._nonce

    @nonce.setter
    def nonce(self, value: Optional[bytes]) -> None:
        self._nonce = None if value is None else bytes(value)
        self._wire = None

    @property
    def time(self) -> Optional[datetime]:
        return self._time

    @time.setter
    def time(self, value: Optional[datetime]) -> None:
        self._time = None if value is None else _to_utc(value)
        self._wire = None

    @property
    def seq_num(self) -> Optional[int]:
        return self._seq_num

    @seq_num.setter
    def seq_num(self, value: Optional[int]) -> None:
        self._seq_num = value
        self._wire = None

    def __str__(self) -> str:
        head = "InterestSignatureInfo(" if self._is_interest else "SignatureInfo("
        parts = [f"SignatureType={int(self._signature_type)}"]
        if self._key_locator is not None:
            parts.append("KeyLocator")
        if self._nonce:
            parts.append(f"SignatureNonce=0x{self._nonce.hex()}")
        if self._time is not None:
            parts.append(f"SignatureTime={self._time.isoformat()}")
        if self._seq_num is not None:
            parts.append(f"SignatureSeqNum={self._seq_num}")
        return head + ", ".join(parts) + ")"

    def __repr__(self) -> str:
        return str(self)

    def encode(self) -> Block:
        """Return the element as a block, with its wire encoding built."""
        if self._wire is None:
            outer = (
                tlv_types.INTEREST_SIGNATURE_INFO
                if self._is_interest
                else tlv_types.SIGNATURE_INFO
            )
            block = Block(outer)
            block.append(encode_nni_block(tlv_types.SIGNATURE_TYPE, int(self._signature_type)))
            if self._key_locator is not None:
                if self._key_locator.tlv_type == tlv_types.KEY_LOCATOR:
                    block.append(self._key_locator)
                else:
                    block.append(Block(tlv_types.KEY_LOCATOR, self._key_locator.wire()))
            if self._is_interest:
                if self._nonce is not None:
                    block.append(Block(tlv_types.SIGNATURE_NONCE, self._nonce))
                if self._time is not None:
                    block.append(
                        encode_nni_block(tlv_types.SIGNATURE_TIME, _milliseconds(self._time))
                    )
                if self._seq_num is not None:
                    block.append(encode_nni_block(tlv_types.SIGNATURE_SEQ_NUM, self._seq_num))
            self._wire = block
        self._wire.wire()
        return self._wire

    def has_wire(self) -> bool:
        """Return whether an up-to-date wire encoding exists."""
        return self._wire is not None


def decode_signature_info(block: Optional[Block]) -> SignatureInfo:
    """Decode a SignatureInfo or InterestSignatureInfo block."""
    if block is None:
        raise NonExistentError()
    if block.tlv_type not in (tlv_types.SIGNATURE_INFO, tlv_types.INTEREST_SIGNATURE_INFO):
        raise NdnError("block must be SignatureInfo or InterestSignatureInfo")

    info = SignatureInfo(is_interest=block.tlv_type == tlv_types.INTEREST_SIGNATURE_INFO)
    if not block.subelements:
        block.parse()

    last_rank = 0
    for elem in block.subelements:
        kind = elem.tlv_type
        rank = _ORDER.get(kind)
        if rank is None:
            if is_critical(kind):
                raise UnrecognizedCriticalError()
            continue
        label = _LABELS[kind]
        if last_rank >= rank:
            raise NdnError(f"{label} is duplicate or out-of-order")
        last_rank = rank
        if kind in _INTEREST_ONLY and not info.is_interest:
            raise NdnError(f"{label} cannot be present in SignatureInfo for Data")

        if kind == tlv_types.KEY_LOCATOR:
            info._key_locator = elem
        elif kind == tlv_types.SIGNATURE_NONCE:
            info._nonce = elem.value
        else:
            try:
                number = decode_nni_block(elem)
            except NdnError as exc:
                raise NdnError(f"error decoding {label}") from exc
            if kind == tlv_types.SIGNATURE_TYPE:
                info._signature_type = _as_signature_type(number)
            elif kind == tlv_types.SIGNATURE_TIME:
                info._time = _EPOCH + number * _MILLISECOND
            else:
                info._seq_num = number

    info._wire = block
    return info