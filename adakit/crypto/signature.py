"""Detached message signing for adakit (CIP-8 / CIP-30 signData)."""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from ..constants import COSE_ALG_EDDSA
from ..crypto.cose import ADDRESS_HEADER, HASHED_HEADER, CoseKey, CoseSign1, HeaderMap, sig_structure
from ..crypto.keys import PrivateKey, PublicKey
from ..exceptions import SerializationError, ValidationError
from ..types.common import HexStr, Payload
from ..utils.encoding import bytes_to_hex
from ..utils.validation import validate_hex

__all__ = [
    "SignedMessage",
    "sign_detached",
    "verify_detached",
    "decode_cose_sign1",
    "decode_cose_key",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignedMessage:
    """Hex encoded COSE_Sign1 envelope and matching COSE_Key."""

    signature: HexStr
    key: HexStr


def _payload_bytes(payload: Payload) -> bytes:
    if isinstance(payload, (bytes, bytearray)):
        return bytes(payload)
    return bytes.fromhex(validate_hex(payload, "payload"))


def sign_detached(
    address_hex: str,
    payload: Payload,
    private_key: Union[str, PrivateKey]
) -> SignedMessage:
    """
    Sign a payload for off-chain authentication.

    The protected header asserts EdDSA and carries the signer's address;
    the unprotected header only records that the payload is not hashed.

    Args:
        address_hex: Raw address bytes as hex
        payload: Message as hex text or bytes
        private_key: Bech32 signing key (ed25519e_sk / ed25519_sk) or PrivateKey

    Returns:
        SignedMessage with hex encoded COSE_Sign1 and COSE_Key

    Raises:
        CredentialDecodingError: If the private key cannot be decoded
        InputContractViolation: If address or payload hex is malformed
    """
    address = bytes.fromhex(validate_hex(address_hex, "address"))
    message = _payload_bytes(payload)
    key = private_key if isinstance(private_key, PrivateKey) else PrivateKey(private_key)

    protected = (
        HeaderMap()
        .set_algorithm_id(COSE_ALG_EDDSA)
        .set_header(ADDRESS_HEADER, address)
        .serialize()
    )
    unprotected = HeaderMap()

    signature = key.sign(sig_structure(protected, message))

    envelope = CoseSign1(
        protected=protected,
        unprotected={**unprotected.headers, HASHED_HEADER: False},
        payload=message,
        signature=signature,
    )
    cose_key = CoseKey(public_key=key.public_key().point)

    logger.debug(f"Signed {len(message)} byte payload")

    return SignedMessage(
        signature=bytes_to_hex(envelope.to_bytes()),
        key=bytes_to_hex(cose_key.to_bytes()),
    )


def decode_cose_sign1(signature_hex: str) -> CoseSign1:
    """Decode a hex COSE_Sign1 envelope."""
    return CoseSign1.from_bytes(bytes.fromhex(validate_hex(signature_hex, "signature")))


def decode_cose_key(key_hex: str) -> CoseKey:
    """Decode a hex COSE_Key."""
    return CoseKey.from_bytes(bytes.fromhex(validate_hex(key_hex, "key")))


def verify_detached(
    signature: Union[SignedMessage, str],
    key: Optional[str] = None,
    payload: Optional[Payload] = None,
    address_hex: Optional[str] = None
) -> bool:
    """
    Verify a detached signature.

    Args:
        signature: SignedMessage, or hex COSE_Sign1 (then ``key`` is required)
        key: Hex COSE_Key
        payload: Expected payload; required when the envelope detaches it
        address_hex: Expected signer address

    Returns:
        True if the envelope is well formed, matches the expectations given
        and the Ed25519 signature is valid
    """
    if isinstance(signature, SignedMessage):
        signature, key = signature.signature, signature.key
    if key is None:
        raise ValidationError("A COSE_Key is required to verify a bare COSE_Sign1")

    try:
        envelope = decode_cose_sign1(signature)
        cose_key = decode_cose_key(key)
        headers = envelope.protected_headers
    except (SerializationError, ValidationError) as e:
        logger.debug(f"Rejecting malformed signature: {e}")
        return False

    if headers.algorithm_id != COSE_ALG_EDDSA:
        return False

    if address_hex is not None:
        if headers.get(ADDRESS_HEADER) != bytes.fromhex(validate_hex(address_hex, "address")):
            return False

    message = envelope.payload
    if payload is not None:
        message = _payload_bytes(payload)
        if envelope.payload is not None and envelope.payload != message:
            return False
    if message is None:
        return False

    try:
        public_key = PublicKey(cose_key.public_key)
    except ValidationError:
        return False
    return public_key.verify(envelope.signature, envelope.to_be_signed(message))
