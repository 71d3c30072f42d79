"""Decoding of CBOR encoded transactions into the adakit transaction view.

Only the parts of the transaction that reference signing keys are read:

- body key 0: inputs
- body key 4: certificates
- body key 13: collateral inputs
- body key 14: required signers
- witness set key 1: native scripts

Everything else (outputs, fee, mint, redeemers, ...) is skipped.
Sets encoded with CBOR tag 258 are read as arrays in their encoded order,
so ordered sets keep their source order and repeated entries survive.
"""

from typing import Any, Dict, List, Union

import cbor2

from ..constants import KEY_HASH_LENGTH, MAX_NATIVE_SCRIPT_DEPTH, TX_HASH_LENGTH
from ..exceptions import ScriptDepthError, SerializationError
from ..types.address import Credential, CredentialType
from ..types.common import KeyHash, TxHash
from ..types.transaction import (
    Certificate,
    CertificateKind,
    GenesisKeyDelegation,
    InvalidBefore,
    InvalidHereafter,
    MIRPot,
    MoveInstantaneousRewards,
    NativeScript,
    NativeScriptKind,
    PoolRegistration,
    PoolRetirement,
    ScriptAll,
    ScriptAny,
    ScriptNofK,
    ScriptPubkey,
    StakeDelegation,
    StakeDeregistration,
    StakeRegistration,
    Transaction,
    TransactionBody,
    TransactionInput,
    TransactionWitnessSet,
    UnsupportedCertificate,
)
from ..utils.encoding import hex_to_bytes

__all__ = [
    "decode_transaction",
    "decode_certificate",
    "decode_native_script",
]

BODY_INPUTS = 0
BODY_CERTIFICATES = 4
BODY_COLLATERAL = 13
BODY_REQUIRED_SIGNERS = 14
WITNESS_NATIVE_SCRIPTS = 1

SET_TAG = 258


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise SerializationError(msg)


def _ordered_set(value: Any, immutable: bool) -> Any:
    # tag 258 without collapsing into a Python set
    return tuple(value) if immutable else list(value)


SEMANTIC_DECODERS = {SET_TAG: _ordered_set}


def _as_list(value: Any, what: str) -> List[Any]:
    if isinstance(value, cbor2.CBORTag):
        value = value.value
    _require(isinstance(value, (list, tuple)), f"{what} must be an array")
    return list(value)


def _hash(value: Any, length: int, what: str) -> str:
    _require(isinstance(value, bytes) and len(value) == length, f"{what} must be {length} bytes")
    return value.hex()


def _uint(value: Any, what: str) -> int:
    _require(isinstance(value, int) and not isinstance(value, bool) and value >= 0,
             f"{what} must be an unsigned integer")
    return value


def _credential(value: Any) -> Credential:
    items = _as_list(value, "credential")
    _require(len(items) == 2, "credential must be [tag, hash]")
    tag = items[0]
    _require(tag in (CredentialType.KEY_HASH, CredentialType.SCRIPT_HASH), f"unknown credential tag {tag!r}")
    return Credential(CredentialType(tag), _hash(items[1], KEY_HASH_LENGTH, "credential hash"))


def _input(value: Any) -> TransactionInput:
    items = _as_list(value, "input")
    _require(len(items) == 2, "input must be [tx_hash, index]")
    return TransactionInput(
        tx_hash=TxHash(_hash(items[0], TX_HASH_LENGTH, "input tx hash")),
        index=_uint(items[1], "input index"),
    )


def _key_hash(value: Any) -> KeyHash:
    return KeyHash(_hash(value, KEY_HASH_LENGTH, "key hash"))


def decode_certificate(value: Any) -> Certificate:
    """
    Decode one certificate array.

    Raises:
        SerializationError: If the certificate is malformed
    """
    items = _as_list(value, "certificate")
    _require(len(items) >= 1 and isinstance(items[0], int), "certificate must start with a tag")
    tag, fields = items[0], items[1:]

    if tag == CertificateKind.STAKE_REGISTRATION:
        return StakeRegistration(_credential(fields[0]))
    if tag == CertificateKind.STAKE_DEREGISTRATION:
        return StakeDeregistration(_credential(fields[0]))
    if tag == CertificateKind.STAKE_DELEGATION:
        _require(len(fields) == 2, "stake delegation must have 2 fields")
        return StakeDelegation(_credential(fields[0]), _key_hash(fields[1]))
    if tag == CertificateKind.POOL_REGISTRATION:
        # operator, vrf, pledge, cost, margin, reward account, owners, relays, metadata
        _require(len(fields) == 9, "pool registration must have 9 fields")
        reward_account = fields[5]
        _require(isinstance(reward_account, bytes), "pool reward account must be bytes")
        return PoolRegistration(
            operator=_key_hash(fields[0]),
            vrf_key_hash=_hash(fields[1], 32, "vrf key hash"),
            reward_account=reward_account.hex(),
            pool_owners=tuple(_key_hash(owner) for owner in _as_list(fields[6], "pool owners")),
        )
    if tag == CertificateKind.POOL_RETIREMENT:
        _require(len(fields) == 2, "pool retirement must have 2 fields")
        return PoolRetirement(_key_hash(fields[0]), _uint(fields[1], "epoch"))
    if tag == CertificateKind.GENESIS_KEY_DELEGATION:
        _require(len(fields) == 3, "genesis key delegation must have 3 fields")
        return GenesisKeyDelegation(
            genesis_hash=_hash(fields[0], KEY_HASH_LENGTH, "genesis hash"),
            genesis_delegate_hash=_hash(fields[1], KEY_HASH_LENGTH, "genesis delegate hash"),
            vrf_key_hash=_hash(fields[2], 32, "vrf key hash"),
        )
    if tag == CertificateKind.MOVE_INSTANTANEOUS_REWARDS:
        mir = _as_list(fields[0], "instantaneous rewards")
        _require(len(mir) == 2, "instantaneous rewards must be [pot, target]")
        pot = MIRPot(_uint(mir[0], "pot")) if mir[0] in (0, 1) else None
        _require(pot is not None, f"unknown reward pot {mir[0]!r}")
        target = mir[1]
        if isinstance(target, dict):
            target = {_credential(cred): delta for cred, delta in target.items()}
        else:
            target = _uint(target, "reward transfer amount")
        return MoveInstantaneousRewards(pot=pot, target=target)

    return UnsupportedCertificate(tag=tag, payload=tuple(fields))


def decode_native_script(value: Any, depth: int = 1) -> NativeScript:
    """
    Decode a native script tree.

    Raises:
        SerializationError: If the script is malformed
        ScriptDepthError: If the tree nests deeper than the supported depth
    """
    if depth > MAX_NATIVE_SCRIPT_DEPTH:
        raise ScriptDepthError(MAX_NATIVE_SCRIPT_DEPTH)

    items = _as_list(value, "native script")
    _require(len(items) >= 2 and isinstance(items[0], int), "native script must start with a tag")
    tag = items[0]

    def children(raw: Any) -> tuple:
        return tuple(decode_native_script(child, depth + 1) for child in _as_list(raw, "scripts"))

    if tag == NativeScriptKind.PUBKEY:
        return ScriptPubkey(_key_hash(items[1]))
    if tag == NativeScriptKind.ALL:
        return ScriptAll(children(items[1]))
    if tag == NativeScriptKind.ANY:
        return ScriptAny(children(items[1]))
    if tag == NativeScriptKind.N_OF_K:
        _require(len(items) == 3, "n-of-k script must be [3, n, scripts]")
        return ScriptNofK(_uint(items[1], "n"), children(items[2]))
    if tag == NativeScriptKind.INVALID_BEFORE:
        return InvalidBefore(_uint(items[1], "slot"))
    if tag == NativeScriptKind.INVALID_HEREAFTER:
        return InvalidHereafter(_uint(items[1], "slot"))

    raise SerializationError(f"Unknown native script tag: {tag}")


def _optional(section: Dict[Any, Any], key: int, what: str, decode) -> Any:
    if key not in section:
        return None
    return tuple(decode(item) for item in _as_list(section[key], what))


def decode_transaction(data: Union[bytes, str]) -> Transaction:
    """
    Decode a CBOR transaction into a Transaction view.

    Args:
        data: Transaction CBOR as bytes or hex

    Returns:
        Transaction

    Raises:
        ValidationError: If hex input is malformed
        SerializationError: If the CBOR does not describe a transaction
    """
    if isinstance(data, str):
        data = hex_to_bytes(data)

    try:
        decoded = cbor2.loads(data, semantic_decoders=SEMANTIC_DECODERS)
    except (cbor2.CBORDecodeError, ValueError, TypeError) as e:
        raise SerializationError(f"Invalid transaction CBOR: {e}") from e

    # [body, witness_set, (is_valid,) auxiliary_data]
    _require(isinstance(decoded, list) and len(decoded) in (3, 4), "transaction must be a 3 or 4 element array")
    body, witness_set = decoded[0], decoded[1]
    _require(isinstance(body, dict), "transaction body must be a map")
    _require(isinstance(witness_set, dict), "witness set must be a map")
    _require(BODY_INPUTS in body, "transaction body has no inputs")

    try:
        return Transaction(
            body=TransactionBody(
                inputs=tuple(_input(i) for i in _as_list(body[BODY_INPUTS], "inputs")),
                certificates=_optional(body, BODY_CERTIFICATES, "certificates", decode_certificate),
                required_signers=_optional(body, BODY_REQUIRED_SIGNERS, "required signers", _key_hash),
                collateral=_optional(body, BODY_COLLATERAL, "collateral", _input),
            ),
            witness_set=TransactionWitnessSet(
                native_scripts=_optional(
                    witness_set, WITNESS_NATIVE_SCRIPTS, "native scripts", decode_native_script
                ),
            ),
        )
    except IndexError as e:
        raise SerializationError(f"Truncated transaction field: {e}") from e
