"""Transaction-related type definitions for adakit.

These types form a read-only view over a Shelley-era (and later)
transaction, limited to the parts that reference signing keys: inputs,
certificates, required signers, collateral inputs and the native scripts
carried in the witness set.

Certificates and native scripts are closed sum types. Each variant is a
frozen dataclass that carries its CDDL tag in ``kind``; consumers dispatch
on the class with ``match``.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Optional, Tuple, Union

from ..types.address import Credential
from ..types.common import KeyHash, TxHash

__all__ = [
    "TransactionInput",
    "CertificateKind",
    "Certificate",
    "StakeRegistration",
    "StakeDeregistration",
    "StakeDelegation",
    "PoolRegistration",
    "PoolRetirement",
    "GenesisKeyDelegation",
    "MIRPot",
    "MoveInstantaneousRewards",
    "UnsupportedCertificate",
    "NativeScriptKind",
    "NativeScript",
    "ScriptPubkey",
    "ScriptAll",
    "ScriptAny",
    "ScriptNofK",
    "InvalidBefore",
    "InvalidHereafter",
    "TransactionBody",
    "TransactionWitnessSet",
    "Transaction",
]


@dataclass(frozen=True)
class TransactionInput:
    """Reference to a transaction output being spent."""

    tx_hash: TxHash
    index: int

    def __str__(self) -> str:
        """String representation as tx_hash#index."""
        return f"{self.tx_hash}#{self.index}"


# --------------------------------------------------------------------------
# Certificates
# --------------------------------------------------------------------------

class CertificateKind(IntEnum):
    """Certificate tags (Shelley CDDL)."""

    STAKE_REGISTRATION = 0
    STAKE_DEREGISTRATION = 1
    STAKE_DELEGATION = 2
    POOL_REGISTRATION = 3
    POOL_RETIREMENT = 4
    GENESIS_KEY_DELEGATION = 5
    MOVE_INSTANTANEOUS_REWARDS = 6


@dataclass(frozen=True)
class Certificate:
    """Base class of all certificate variants."""

    @property
    def kind(self) -> int:
        raise NotImplementedError


@dataclass(frozen=True)
class StakeRegistration(Certificate):
    stake_credential: Credential

    @property
    def kind(self) -> int:
        return CertificateKind.STAKE_REGISTRATION


@dataclass(frozen=True)
class StakeDeregistration(Certificate):
    stake_credential: Credential

    @property
    def kind(self) -> int:
        return CertificateKind.STAKE_DEREGISTRATION


@dataclass(frozen=True)
class StakeDelegation(Certificate):
    stake_credential: Credential
    pool_key_hash: KeyHash

    @property
    def kind(self) -> int:
        return CertificateKind.STAKE_DELEGATION


@dataclass(frozen=True)
class PoolRegistration(Certificate):
    """Stake pool registration.

    Only the fields that identify keys are kept; pledge, cost, margin,
    relays and metadata are not part of this view.
    """

    operator: KeyHash
    vrf_key_hash: str = ""
    reward_account: str = ""
    pool_owners: Tuple[KeyHash, ...] = ()

    @property
    def kind(self) -> int:
        return CertificateKind.POOL_REGISTRATION


@dataclass(frozen=True)
class PoolRetirement(Certificate):
    pool_key_hash: KeyHash
    epoch: int

    @property
    def kind(self) -> int:
        return CertificateKind.POOL_RETIREMENT


@dataclass(frozen=True)
class GenesisKeyDelegation(Certificate):
    genesis_hash: str
    genesis_delegate_hash: str
    vrf_key_hash: str

    @property
    def kind(self) -> int:
        return CertificateKind.GENESIS_KEY_DELEGATION


class MIRPot(IntEnum):
    """Source pot of an instantaneous reward transfer."""

    RESERVES = 0
    TREASURY = 1


@dataclass(frozen=True)
class MoveInstantaneousRewards(Certificate):
    """Instantaneous reward transfer.

    ``target`` is either a mapping of stake credentials to lovelace deltas
    or a plain amount moved to the other pot.
    """

    pot: MIRPot
    target: Union[Dict[Credential, int], int]

    @property
    def kind(self) -> int:
        return CertificateKind.MOVE_INSTANTANEOUS_REWARDS

    @property
    def stake_credentials(self) -> Optional[Tuple[Credential, ...]]:
        """Credentials of the mapping target, or None for a pot transfer."""
        if isinstance(self.target, dict):
            return tuple(self.target)
        return None


@dataclass(frozen=True)
class UnsupportedCertificate(Certificate):
    """Any certificate kind this view does not model (e.g. Conway-era)."""

    tag: int
    payload: Tuple = ()

    @property
    def kind(self) -> int:
        return self.tag


# --------------------------------------------------------------------------
# Native scripts
# --------------------------------------------------------------------------

class NativeScriptKind(IntEnum):
    """Native script tags (Allegra CDDL)."""

    PUBKEY = 0
    ALL = 1
    ANY = 2
    N_OF_K = 3
    INVALID_BEFORE = 4
    INVALID_HEREAFTER = 5


@dataclass(frozen=True)
class NativeScript:
    """Base class of all native script variants."""

    @property
    def kind(self) -> int:
        raise NotImplementedError


@dataclass(frozen=True)
class ScriptPubkey(NativeScript):
    key_hash: KeyHash

    @property
    def kind(self) -> int:
        return NativeScriptKind.PUBKEY


@dataclass(frozen=True)
class ScriptAll(NativeScript):
    native_scripts: Tuple[NativeScript, ...] = ()

    @property
    def kind(self) -> int:
        return NativeScriptKind.ALL


@dataclass(frozen=True)
class ScriptAny(NativeScript):
    native_scripts: Tuple[NativeScript, ...] = ()

    @property
    def kind(self) -> int:
        return NativeScriptKind.ANY


@dataclass(frozen=True)
class ScriptNofK(NativeScript):
    n: int
    native_scripts: Tuple[NativeScript, ...] = ()

    @property
    def kind(self) -> int:
        return NativeScriptKind.N_OF_K


@dataclass(frozen=True)
class InvalidBefore(NativeScript):
    slot: int

    @property
    def kind(self) -> int:
        return NativeScriptKind.INVALID_BEFORE


@dataclass(frozen=True)
class InvalidHereafter(NativeScript):
    slot: int

    @property
    def kind(self) -> int:
        return NativeScriptKind.INVALID_HEREAFTER


# --------------------------------------------------------------------------
# Transaction
# --------------------------------------------------------------------------

@dataclass(frozen=True)
class TransactionBody:
    """Transaction body sections relevant to signing.

    Optional sections are None when the transaction omits them.
    """

    inputs: Tuple[TransactionInput, ...] = ()
    certificates: Optional[Tuple[Certificate, ...]] = None
    required_signers: Optional[Tuple[KeyHash, ...]] = None
    collateral: Optional[Tuple[TransactionInput, ...]] = None


@dataclass(frozen=True)
class TransactionWitnessSet:
    native_scripts: Optional[Tuple[NativeScript, ...]] = None


@dataclass(frozen=True)
class Transaction:
    """Read-only transaction view."""

    body: TransactionBody
    witness_set: TransactionWitnessSet = field(default_factory=TransactionWitnessSet)
