"""Cryptographic utilities for adakit."""

from ..crypto.bip39 import generate_mnemonic, mnemonic_to_entropy
from ..crypto.hd import HDNode, harden
from ..crypto.keys import PrivateKey, PublicKey
from ..crypto.signature import (
    SignedMessage,
    sign_detached,
    verify_detached,
    decode_cose_sign1,
    decode_cose_key,
)

__all__ = [
    # Keys
    "PrivateKey",
    "PublicKey",
    "HDNode",
    "harden",
    "generate_mnemonic",
    "mnemonic_to_entropy",

    # Signatures
    "SignedMessage",
    "sign_detached",
    "verify_detached",
    "decode_cose_sign1",
    "decode_cose_key",
]
