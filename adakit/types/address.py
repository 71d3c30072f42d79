"""Address-related type definitions for adakit."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from ..types.common import (
    Address as AddressStr,
    KeyHash,
    ScriptHash,
    TxHash,
)

__all__ = [
    "CredentialType",
    "Credential",
    "AddressKind",
    "AddressDetails",
    "UTXO",
]


class CredentialType(IntEnum):
    """Credential tags as used on the wire."""

    KEY_HASH = 0
    SCRIPT_HASH = 1


@dataclass(frozen=True)
class Credential:
    """Key-hash or script-hash credential."""

    type: CredentialType
    hash: str

    @classmethod
    def from_key_hash(cls, key_hash: str) -> "Credential":
        return cls(CredentialType.KEY_HASH, KeyHash(key_hash))

    @classmethod
    def from_script_hash(cls, script_hash: str) -> "Credential":
        return cls(CredentialType.SCRIPT_HASH, ScriptHash(script_hash))

    @property
    def is_key_hash(self) -> bool:
        """Check if credential is backed by a verification key."""
        return self.type == CredentialType.KEY_HASH

    @property
    def is_script_hash(self) -> bool:
        """Check if credential is backed by a script."""
        return self.type == CredentialType.SCRIPT_HASH


class AddressKind(IntEnum):
    """Shelley address header types (high nibble of the header byte)."""

    BASE_KEY_KEY = 0
    BASE_SCRIPT_KEY = 1
    BASE_KEY_SCRIPT = 2
    BASE_SCRIPT_SCRIPT = 3
    POINTER_KEY = 4
    POINTER_SCRIPT = 5
    ENTERPRISE_KEY = 6
    ENTERPRISE_SCRIPT = 7
    BYRON = 8
    REWARD_KEY = 14
    REWARD_SCRIPT = 15

    @property
    def is_base(self) -> bool:
        return self <= AddressKind.BASE_SCRIPT_SCRIPT

    @property
    def is_pointer(self) -> bool:
        return self in (AddressKind.POINTER_KEY, AddressKind.POINTER_SCRIPT)

    @property
    def is_enterprise(self) -> bool:
        return self in (AddressKind.ENTERPRISE_KEY, AddressKind.ENTERPRISE_SCRIPT)

    @property
    def is_reward(self) -> bool:
        return self in (AddressKind.REWARD_KEY, AddressKind.REWARD_SCRIPT)


@dataclass(frozen=True)
class AddressDetails:
    """Decoded address: header information and credentials."""

    kind: AddressKind
    network_id: int
    payment_credential: Optional[Credential] = None
    stake_credential: Optional[Credential] = None
    address: Optional[AddressStr] = None


@dataclass(frozen=True)
class UTXO:
    """Unspent transaction output owned by the wallet."""

    tx_hash: TxHash
    output_index: int
    address: AddressStr

    def __str__(self) -> str:
        """String representation as tx_hash#index."""
        return f"{self.tx_hash}#{self.output_index}"
