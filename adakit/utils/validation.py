"""Validation utilities for adakit."""

import re
from typing import Union

from ..constants import HARDENED_OFFSET, KEY_HASH_LENGTH, TX_HASH_LENGTH, AddressType, Network
from ..exceptions import InputContractViolation
from ..types.common import HexStr, KeyHash, TxHash

__all__ = [
    "is_valid_account_index",
    "validate_account_index",
    "validate_address_type",
    "validate_network",
    "is_valid_key_hash",
    "validate_key_hash",
    "is_valid_tx_hash",
    "validate_tx_hash",
    "is_valid_hex",
    "validate_hex",
]

# Regex patterns
KEY_HASH_PATTERN = re.compile(rf"^[0-9a-fA-F]{{{KEY_HASH_LENGTH * 2}}}$")
TX_HASH_PATTERN = re.compile(rf"^[0-9a-fA-F]{{{TX_HASH_LENGTH * 2}}}$")
HEX_PATTERN = re.compile(r"^(?:[0-9a-fA-F]{2})*$")


def is_valid_account_index(index: object) -> bool:
    """
    Check if value can be used as a hardened account index.

    Args:
        index: Candidate account index

    Returns:
        True for integers in [0, 2^31), False otherwise
    """
    # bool is an int subclass but never a meaningful index
    if isinstance(index, bool) or not isinstance(index, int):
        return False
    return 0 <= index < HARDENED_OFFSET


def validate_account_index(index: object) -> int:
    """
    Validate account index.

    Args:
        index: Candidate account index

    Returns:
        The index

    Raises:
        InputContractViolation: If index is not an integer in [0, 2^31)
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise InputContractViolation(
            f"Account index must be an integer, got {type(index).__name__}"
        )
    if not 0 <= index < HARDENED_OFFSET:
        raise InputContractViolation(f"Account index out of range: {index}")
    return index


def validate_address_type(address_type: Union[AddressType, str]) -> AddressType:
    """
    Normalize address type.

    Raises:
        InputContractViolation: If address type is unknown
    """
    try:
        return AddressType(address_type)
    except ValueError as e:
        raise InputContractViolation(f"Unknown address type: {address_type!r}") from e


def validate_network(network: Union[Network, str]) -> Network:
    """
    Normalize network.

    Raises:
        InputContractViolation: If network is unknown
    """
    try:
        return Network(network)
    except ValueError as e:
        raise InputContractViolation(f"Unknown network: {network!r}") from e


def is_valid_key_hash(key_hash: str) -> bool:
    """Check if value is a 28-byte hash in hex."""
    return isinstance(key_hash, str) and bool(KEY_HASH_PATTERN.match(key_hash))


def validate_key_hash(key_hash: str) -> KeyHash:
    """
    Validate key hash and return normalized form.

    Args:
        key_hash: Key hash to validate

    Returns:
        Normalized key hash (lowercase)

    Raises:
        InputContractViolation: If key hash is invalid
    """
    if not is_valid_key_hash(key_hash):
        raise InputContractViolation(f"Invalid key hash: {key_hash!r}")
    return KeyHash(key_hash.lower())


def is_valid_tx_hash(tx_hash: str) -> bool:
    """Check if value is a 32-byte transaction hash in hex."""
    return isinstance(tx_hash, str) and bool(TX_HASH_PATTERN.match(tx_hash))


def validate_tx_hash(tx_hash: str) -> TxHash:
    """
    Validate transaction hash and return normalized form.

    Raises:
        InputContractViolation: If transaction hash is invalid
    """
    if not is_valid_tx_hash(tx_hash):
        raise InputContractViolation(f"Invalid transaction hash: {tx_hash!r}")
    return TxHash(tx_hash.lower())


def is_valid_hex(value: str) -> bool:
    """Check if value is an even-length hex string."""
    return isinstance(value, str) and bool(HEX_PATTERN.match(value))


def validate_hex(value: str, name: str = "value") -> HexStr:
    """
    Validate hex text.

    Raises:
        InputContractViolation: If value is not even-length hex
    """
    if not is_valid_hex(value):
        raise InputContractViolation(f"Invalid hex {name}: {value!r}")
    return HexStr(value.lower())
