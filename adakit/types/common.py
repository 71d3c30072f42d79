"""Common type definitions for adakit."""

from typing import NewType, Union

__all__ = [
    "HexStr",
    "KeyHash",
    "ScriptHash",
    "TxHash",
    "Address",
    "Bech32Str",
    "PublicKeyBytes",
    "Signature",
    "Payload",
]

# Basic types
HexStr = NewType("HexStr", str)
"""Hexadecimal string representation."""

# Identifiers
KeyHash = NewType("KeyHash", str)
"""28-byte Blake2b-224 hash of a verification key, as lowercase hex."""

ScriptHash = NewType("ScriptHash", str)
"""28-byte Blake2b-224 hash of a script, as lowercase hex."""

TxHash = NewType("TxHash", str)
"""Transaction id (32-byte hash) as lowercase hex."""

Address = NewType("Address", str)
"""Bech32 address string."""

Bech32Str = NewType("Bech32Str", str)
"""Bech32 encoded key material."""

# Crypto types
PublicKeyBytes = NewType("PublicKeyBytes", bytes)
"""32-byte Ed25519 public key."""

Signature = NewType("Signature", bytes)
"""64-byte Ed25519 signature."""

# Type aliases
Payload = Union[HexStr, str, bytes]
"""Message payload as hex text or raw bytes."""
