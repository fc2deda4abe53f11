"""Signature types and the signers the forwarder can apply itself."""

from __future__ import annotations

import hashlib
import hmac
from enum import IntEnum

from ndnfwd.tlv import NdnError


class SignatureType(IntEnum):
    """Signature types defined by the NDN packet format."""

    DIGEST_SHA256 = 0
    SIGNATURE_SHA256_WITH_RSA = 1
    SIGNATURE_SHA256_WITH_ECDSA = 3
    SIGNATURE_HMAC_WITH_SHA256 = 4
    SIGNATURE_NULL = 200


_UNSUPPORTED = {
    SignatureType.SIGNATURE_SHA256_WITH_RSA: "SignatureSha256WithRsa",
    SignatureType.SIGNATURE_SHA256_WITH_ECDSA: "SignatureSha256WithEcdsaType",
    SignatureType.SIGNATURE_HMAC_WITH_SHA256: "SignatureHmacWithSha256Type",
}


class DigestSha256:
    """A signer whose signature is the SHA-256 digest of the buffer."""

    def sign(self, buf: bytes) -> bytes:
        return hashlib.sha256(bytes(buf)).digest()

    def validate(self, buf: bytes, signature: bytes) -> bool:
        return hmac.compare_digest(self.sign(buf), bytes(signature))


def _resolve(signature_type: int) -> SignatureType:
    try:
        return SignatureType(signature_type)
    except ValueError as exc:
        raise NdnError("unknown SignatureType") from exc


def sign(signature_type: int, buf: bytes) -> bytes:
    """Sign a buffer with the signer for a signature type."""
    kind = _resolve(signature_type)
    if kind is SignatureType.DIGEST_SHA256:
        return DigestSha256().sign(buf)
    if kind is SignatureType.SIGNATURE_NULL:
        return b""
    raise NdnError(f"cannot sign {_UNSUPPORTED[kind]}")


def verify(signature_type: int, buf: bytes, signature: bytes) -> bool:
    """Check a signature over a buffer with the signer for a signature type."""
    kind = _resolve(signature_type)
    if kind is SignatureType.DIGEST_SHA256:
        return DigestSha256().validate(buf, signature)
    if kind is SignatureType.SIGNATURE_NULL:
        return True
    raise NdnError(f"cannot validate {_UNSUPPORTED[kind]}")