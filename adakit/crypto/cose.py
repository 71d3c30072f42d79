"""COSE structures for detached message signing (RFC 8152, CIP-8).

Only the subset needed for Ed25519 message signing is covered:

- protected/unprotected header maps
- the ``Signature1`` to-be-signed structure
- COSE_Sign1 envelopes
- OKP COSE_Key maps

All maps are encoded with canonical CBOR so the same inputs always give
the same bytes.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

import cbor2

from ..constants import (
    COSE_ALG_EDDSA,
    COSE_CRV_ED25519,
    COSE_HEADER_ALG,
    COSE_KEY_ALG,
    COSE_KEY_CRV,
    COSE_KEY_KTY,
    COSE_KEY_X,
    COSE_KTY_OKP,
)
from ..exceptions import SerializationError

__all__ = [
    "HeaderMap",
    "CoseSign1",
    "CoseKey",
    "sig_structure",
    "dumps",
    "loads",
]

Label = Union[int, str]

SIGNATURE1_CONTEXT = "Signature1"
ADDRESS_HEADER = "address"
HASHED_HEADER = "hashed"


def dumps(obj: Any) -> bytes:
    """Encode with canonical CBOR."""
    return cbor2.dumps(obj, canonical=True)


def loads(data: bytes) -> Any:
    """
    Decode CBOR.

    Raises:
        SerializationError: If data is not valid CBOR
    """
    try:
        return cbor2.loads(data)
    except (cbor2.CBORDecodeError, ValueError, TypeError) as e:
        raise SerializationError(f"Invalid CBOR: {e}") from e


@dataclass
class HeaderMap:
    """COSE header map keyed by integer or text labels."""

    headers: Dict[Label, Any] = field(default_factory=dict)

    def set_algorithm_id(self, algorithm: int) -> "HeaderMap":
        self.headers[COSE_HEADER_ALG] = algorithm
        return self

    def set_header(self, label: Label, value: Any) -> "HeaderMap":
        self.headers[label] = value
        return self

    @property
    def algorithm_id(self) -> Optional[int]:
        return self.headers.get(COSE_HEADER_ALG)

    def get(self, label: Label, default: Any = None) -> Any:
        return self.headers.get(label, default)

    def serialize(self) -> bytes:
        """Serialize for use as a protected header (empty map as empty bstr)."""
        if not self.headers:
            return b""
        return dumps(self.headers)

    @classmethod
    def deserialize(cls, data: bytes) -> "HeaderMap":
        if not data:
            return cls()
        decoded = loads(data)
        if not isinstance(decoded, dict):
            raise SerializationError("Protected header is not a map")
        return cls(dict(decoded))


def sig_structure(protected: bytes, payload: bytes, external_aad: bytes = b"") -> bytes:
    """Build the CBOR encoded ``Signature1`` structure that gets signed."""
    return dumps([SIGNATURE1_CONTEXT, protected, external_aad, payload])


@dataclass(frozen=True)
class CoseSign1:
    """COSE_Sign1 envelope: [protected, unprotected, payload, signature]."""

    protected: bytes
    unprotected: Dict[Label, Any]
    payload: Optional[bytes]
    signature: bytes

    @property
    def protected_headers(self) -> HeaderMap:
        return HeaderMap.deserialize(self.protected)

    def to_be_signed(self, payload: Optional[bytes] = None) -> bytes:
        """Signature1 structure; a detached payload must be supplied."""
        if payload is None:
            payload = self.payload
        if payload is None:
            raise SerializationError("Payload is detached and was not supplied")
        return sig_structure(self.protected, payload)

    def to_bytes(self) -> bytes:
        return dumps([self.protected, self.unprotected, self.payload, self.signature])

    @classmethod
    def from_bytes(cls, data: bytes) -> "CoseSign1":
        """
        Decode COSE_Sign1 (tagged or untagged).

        Raises:
            SerializationError: If structure is not a COSE_Sign1 array
        """
        decoded = loads(data)
        if isinstance(decoded, cbor2.CBORTag):
            decoded = decoded.value
        if not isinstance(decoded, list) or len(decoded) != 4:
            raise SerializationError("COSE_Sign1 must be a 4-element array")

        protected, unprotected, payload, signature = decoded
        if not isinstance(protected, bytes) or not isinstance(unprotected, dict):
            raise SerializationError("Invalid COSE_Sign1 headers")
        if payload is not None and not isinstance(payload, bytes):
            raise SerializationError("Invalid COSE_Sign1 payload")
        if not isinstance(signature, bytes):
            raise SerializationError("Invalid COSE_Sign1 signature")
        return cls(protected, dict(unprotected), payload, signature)


@dataclass(frozen=True)
class CoseKey:
    """OKP COSE_Key holding an Ed25519 public key."""

    public_key: bytes
    key_type: int = COSE_KTY_OKP
    algorithm: int = COSE_ALG_EDDSA
    curve: int = COSE_CRV_ED25519

    def to_bytes(self) -> bytes:
        return dumps({
            COSE_KEY_KTY: self.key_type,
            COSE_KEY_ALG: self.algorithm,
            COSE_KEY_CRV: self.curve,
            COSE_KEY_X: self.public_key,
        })

    @classmethod
    def from_bytes(cls, data: bytes) -> "CoseKey":
        """
        Decode COSE_Key.

        Raises:
            SerializationError: If the map lacks an Ed25519 OKP public key
        """
        decoded = loads(data)
        if not isinstance(decoded, dict):
            raise SerializationError("COSE_Key must be a map")

        key_type = decoded.get(COSE_KEY_KTY)
        curve = decoded.get(COSE_KEY_CRV)
        public_key = decoded.get(COSE_KEY_X)
        if key_type != COSE_KTY_OKP or curve != COSE_CRV_ED25519:
            raise SerializationError("COSE_Key is not an Ed25519 OKP key")
        if not isinstance(public_key, bytes):
            raise SerializationError("COSE_Key has no public key")
        return cls(
            public_key=public_key,
            key_type=key_type,
            algorithm=decoded.get(COSE_KEY_ALG, COSE_ALG_EDDSA),
            curve=curve,
        )
