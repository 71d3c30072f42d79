"""Type definitions for adakit."""

# Common types
from ..types.common import (
    HexStr,
    KeyHash,
    ScriptHash,
    TxHash,
    Address,
    Bech32Str,
    PublicKeyBytes,
    Signature,
    Payload,
)

# Address types
from ..types.address import (
    CredentialType,
    Credential,
    AddressKind,
    AddressDetails,
    UTXO,
)

# Transaction types
from ..types.transaction import (
    TransactionInput,
    CertificateKind,
    Certificate,
    StakeRegistration,
    StakeDeregistration,
    StakeDelegation,
    PoolRegistration,
    PoolRetirement,
    GenesisKeyDelegation,
    MIRPot,
    MoveInstantaneousRewards,
    UnsupportedCertificate,
    NativeScriptKind,
    NativeScript,
    ScriptPubkey,
    ScriptAll,
    ScriptAny,
    ScriptNofK,
    InvalidBefore,
    InvalidHereafter,
    TransactionBody,
    TransactionWitnessSet,
    Transaction,
)

__all__ = [
    # Common
    "HexStr",
    "KeyHash",
    "ScriptHash",
    "TxHash",
    "Address",
    "Bech32Str",
    "PublicKeyBytes",
    "Signature",
    "Payload",

    # Address
    "CredentialType",
    "Credential",
    "AddressKind",
    "AddressDetails",
    "UTXO",

    # Transaction
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
