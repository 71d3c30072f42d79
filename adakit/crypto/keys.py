"""Key management for adakit."""

import hashlib
from typing import Union

from nacl.bindings import (
    crypto_core_ed25519_scalar_add,
    crypto_core_ed25519_scalar_mul,
    crypto_core_ed25519_scalar_reduce,
    crypto_scalarmult_ed25519_base_noclamp,
)
from nacl.exceptions import BadSignatureError
from nacl.signing import SigningKey, VerifyKey

from ..constants import EXTENDED_PRIVATE_KEY_HRP, PRIVATE_KEY_HRP
from ..exceptions import CredentialDecodingError, CryptoError, ValidationError
from ..types.common import Bech32Str, HexStr, KeyHash, PublicKeyBytes, Signature
from ..utils.encoding import blake2b_224, decode_bech32, encode_bech32, hex_to_bytes

__all__ = ["PrivateKey", "PublicKey"]

SEED_LENGTH = 32
EXTENDED_KEY_LENGTH = 64
PUBLIC_KEY_LENGTH = 32


class PrivateKey:
    """
    Ed25519 signing key.

    Wraps either a standard 32-byte Ed25519 seed or a 64-byte extended key
    (kL || kR) as produced by BIP32-Ed25519 derivation. Extended keys are
    already expanded and clamped, so signing uses the scalar directly.
    """

    def __init__(self, key: Union[bytes, str, "PrivateKey"]) -> None:
        """
        Initialize private key.

        Args:
            key: Raw key bytes (32 or 64), bech32 text, hex text, or another PrivateKey

        Raises:
            CredentialDecodingError: If key format is invalid
        """
        if isinstance(key, PrivateKey):
            self._secret = key._secret
            return

        if isinstance(key, str):
            if key.startswith((EXTENDED_PRIVATE_KEY_HRP, PRIVATE_KEY_HRP)):
                key = self._decode_bech32(key)
            else:
                try:
                    key = hex_to_bytes(key)
                except ValidationError as e:
                    raise CredentialDecodingError("Invalid private key encoding") from e

        if not isinstance(key, (bytes, bytearray)):
            raise CredentialDecodingError(f"Unsupported private key type: {type(key).__name__}")
        if len(key) not in (SEED_LENGTH, EXTENDED_KEY_LENGTH):
            raise CredentialDecodingError(f"Invalid private key length: {len(key)}")

        self._secret = bytes(key)

    @staticmethod
    def _decode_bech32(value: str) -> bytes:
        try:
            hrp, data = decode_bech32(value)
        except ValidationError as e:
            raise CredentialDecodingError(f"Invalid bech32 private key: {e}") from e

        expected = EXTENDED_KEY_LENGTH if hrp == EXTENDED_PRIVATE_KEY_HRP else SEED_LENGTH
        if hrp not in (EXTENDED_PRIVATE_KEY_HRP, PRIVATE_KEY_HRP) or len(data) != expected:
            raise CredentialDecodingError(f"Invalid bech32 private key prefix or length: {hrp}")
        return data

    @classmethod
    def from_bech32(cls, value: str) -> "PrivateKey":
        """
        Import private key from bech32 text (ed25519e_sk / ed25519_sk).

        Raises:
            CredentialDecodingError: If text cannot be decoded
        """
        return cls(cls._decode_bech32(value))

    @classmethod
    def generate(cls) -> "PrivateKey":
        """Create new random (non-extended) private key."""
        return cls(bytes(SigningKey.generate()))

    @property
    def is_extended(self) -> bool:
        """Check if key is a 64-byte extended key."""
        return len(self._secret) == EXTENDED_KEY_LENGTH

    @property
    def secret(self) -> bytes:
        """Get raw private key bytes."""
        return self._secret

    def hex(self) -> str:
        """Get private key as hex string."""
        return self._secret.hex()

    def to_bech32(self) -> Bech32Str:
        """Export private key as bech32 text."""
        hrp = EXTENDED_PRIVATE_KEY_HRP if self.is_extended else PRIVATE_KEY_HRP
        return Bech32Str(encode_bech32(hrp, self._secret))

    def public_key(self) -> "PublicKey":
        """
        Get corresponding public key.

        Returns:
            PublicKey instance
        """
        if self.is_extended:
            point = crypto_scalarmult_ed25519_base_noclamp(self._secret[:32])
        else:
            point = bytes(SigningKey(self._secret).verify_key)
        return PublicKey(point)

    def sign(self, message: bytes) -> Signature:
        """
        Sign message with Ed25519.

        Args:
            message: Message bytes (signed as-is, no pre-hashing)

        Returns:
            64-byte signature

        Raises:
            CryptoError: If signing fails
        """
        try:
            if not self.is_extended:
                return Signature(SigningKey(self._secret).sign(message).signature)
            return Signature(self._sign_extended(message))
        except Exception as e:
            raise CryptoError(f"Signing failed: {e}") from e

    def _sign_extended(self, message: bytes) -> bytes:
        kl, kr = self._secret[:32], self._secret[32:]
        public = crypto_scalarmult_ed25519_base_noclamp(kl)

        r = crypto_core_ed25519_scalar_reduce(hashlib.sha512(kr + message).digest())
        r_point = crypto_scalarmult_ed25519_base_noclamp(r)
        h = crypto_core_ed25519_scalar_reduce(
            hashlib.sha512(r_point + public + message).digest()
        )
        s = crypto_core_ed25519_scalar_add(crypto_core_ed25519_scalar_mul(h, kl), r)
        return r_point + s

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, PrivateKey):
            return False
        return self._secret == other._secret

    def __repr__(self) -> str:
        """String representation."""
        # Show first and last 4 chars of hex for security
        hex_str = self.hex()
        masked = f"{hex_str[:4]}...{hex_str[-4:]}"
        return f"PrivateKey({masked})"


class PublicKey:
    """Ed25519 verification key."""

    def __init__(self, key: Union[bytes, str, "PublicKey"]) -> None:
        """
        Initialize public key.

        Args:
            key: 32 raw bytes, hex string, or another PublicKey

        Raises:
            ValidationError: If key format is invalid
        """
        if isinstance(key, PublicKey):
            self._point = key._point
            return

        if isinstance(key, str):
            key = hex_to_bytes(key)
        if len(key) != PUBLIC_KEY_LENGTH:
            raise ValidationError(f"Invalid public key length: {len(key)}")

        self._point = PublicKeyBytes(bytes(key))

    @property
    def point(self) -> PublicKeyBytes:
        """Get public key as bytes."""
        return self._point

    def hex(self) -> HexStr:
        """Get public key as hex string."""
        return HexStr(self._point.hex())

    def hash(self) -> KeyHash:
        """Get Blake2b-224 key hash used as a credential."""
        return KeyHash(blake2b_224(self._point).hex())

    def verify(self, signature: bytes, message: bytes) -> bool:
        """
        Verify signature.

        Args:
            signature: 64-byte Ed25519 signature
            message: Signed message

        Returns:
            True if signature is valid
        """
        try:
            VerifyKey(self._point).verify(message, signature)
            return True
        except (BadSignatureError, ValueError, TypeError):
            return False

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, PublicKey):
            return False
        return self._point == other._point

    def __hash__(self) -> int:
        return hash(self._point)

    def __repr__(self) -> str:
        """String representation."""
        return f"PublicKey({self.hex()})"
