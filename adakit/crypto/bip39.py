"""BIP39 mnemonic handling for adakit."""

import contextlib
from typing import Iterator

from bip_utils import (
    Bip39MnemonicDecoder,
    Bip39MnemonicGenerator,
    Bip39WordsNum,
    MnemonicChecksumError,
)

from ..exceptions import CredentialDecodingError, InputContractViolation

__all__ = ["generate_mnemonic", "mnemonic_to_entropy", "secret_buffer"]

_WORDS_NUM = {
    128: Bip39WordsNum.WORDS_NUM_12,
    160: Bip39WordsNum.WORDS_NUM_15,
    192: Bip39WordsNum.WORDS_NUM_18,
    224: Bip39WordsNum.WORDS_NUM_21,
    256: Bip39WordsNum.WORDS_NUM_24,
}


def generate_mnemonic(strength: int = 256) -> str:
    """Generate BIP39 mnemonic phrase (24 words by default)."""
    if strength not in _WORDS_NUM:
        raise ValueError("Strength must be 128, 160, 192, 224, or 256")

    return Bip39MnemonicGenerator().FromWordsNumber(_WORDS_NUM[strength]).ToStr()


def mnemonic_to_entropy(mnemonic: str) -> bytearray:
    """
    Decode mnemonic phrase to its entropy.

    Args:
        mnemonic: English BIP39 phrase

    Returns:
        Entropy bytes in a mutable buffer so callers can wipe it

    Raises:
        CredentialDecodingError: If a word is unknown, the word count is
            wrong or the checksum does not match
        InputContractViolation: If mnemonic is not a string
    """
    if not isinstance(mnemonic, str):
        raise InputContractViolation(f"Mnemonic must be a string, got {type(mnemonic).__name__}")

    mnemonic = " ".join(mnemonic.split())
    try:
        entropy = Bip39MnemonicDecoder().Decode(mnemonic)
    except MnemonicChecksumError as e:
        raise CredentialDecodingError(f"Invalid mnemonic checksum: {e}") from e
    except ValueError as e:
        raise CredentialDecodingError(f"Invalid mnemonic: {e}") from e

    return bytearray(entropy)


@contextlib.contextmanager
def secret_buffer(data: bytearray) -> Iterator[bytearray]:
    """Yield a secret buffer and overwrite it with zeros on exit."""
    try:
        yield data
    finally:
        for i in range(len(data)):
            data[i] = 0
