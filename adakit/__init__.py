"""
adakit

Cardano wallet core for Python: CIP-1852 key and address derivation,
signer discovery for transactions and CIP-8 detached message signing.
"""

from .constants import AddressType, Network
from .exceptions import (
    AdakitError,
    ValidationError,
    InputContractViolation,
    ScriptDepthError,
    AddressError,
    CryptoError,
    CredentialDecodingError,
    SerializationError,
)
from .crypto import (
    PrivateKey,
    PublicKey,
    HDNode,
    generate_mnemonic,
    SignedMessage,
    sign_detached,
    verify_detached,
)
from .modules import (
    WalletOptions,
    WalletIdentity,
    derive_wallet,
    derive_account_key,
    discover_signers,
    collect_signer_candidates,
)
from .types import (
    Address,
    KeyHash,
    Credential,
    AddressDetails,
    UTXO,
    Transaction,
    TransactionBody,
    TransactionWitnessSet,
    TransactionInput,
)
from .utils.cbor import decode_transaction
from .utils.encoding import decode_address, encode_address

__version__ = "1.0.0"

__all__ = [
    # Network
    "Network",
    "AddressType",

    # Exceptions
    "AdakitError",
    "ValidationError",
    "InputContractViolation",
    "ScriptDepthError",
    "AddressError",
    "CryptoError",
    "CredentialDecodingError",
    "SerializationError",

    # Crypto
    "PrivateKey",
    "PublicKey",
    "HDNode",
    "generate_mnemonic",
    "SignedMessage",
    "sign_detached",
    "verify_detached",

    # Wallet
    "WalletOptions",
    "WalletIdentity",
    "derive_wallet",
    "derive_account_key",
    "discover_signers",
    "collect_signer_candidates",

    # Types
    "Address",
    "KeyHash",
    "Credential",
    "AddressDetails",
    "UTXO",
    "Transaction",
    "TransactionBody",
    "TransactionWitnessSet",
    "TransactionInput",

    # Codecs
    "decode_transaction",
    "decode_address",
    "encode_address",
]
