"""Signer discovery for adakit.

Works out which of a wallet's own keys have to sign a transaction. Key
hashes are referenced from several independent places in a transaction;
each one is collected in source order:

1. spent inputs that resolve to one of the wallet's UTXOs
2. certificates (stake registration/deregistration/delegation, pool
   owners, instantaneous reward credentials)
3. native scripts in the witness set, every leaf of every script
4. the required signers list
5. collateral inputs, resolved like spent inputs

The candidates are then filtered down to the wallet's own key hashes.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..constants import MAX_NATIVE_SCRIPT_DEPTH
from ..exceptions import ScriptDepthError
from ..types.address import Credential, UTXO
from ..types.common import KeyHash
from ..types.transaction import (
    Certificate,
    MoveInstantaneousRewards,
    NativeScript,
    PoolRegistration,
    ScriptAll,
    ScriptAny,
    ScriptNofK,
    ScriptPubkey,
    StakeDelegation,
    StakeDeregistration,
    StakeRegistration,
    Transaction,
    TransactionInput,
)
from ..utils.encoding import decode_address
from ..utils.validation import validate_key_hash, validate_tx_hash

__all__ = [
    "discover_signers",
    "collect_signer_candidates",
    "key_hashes_from_inputs",
    "key_hashes_from_certificates",
    "key_hashes_from_native_scripts",
]

logger = logging.getLogger(__name__)


def _index_utxos(utxos: Iterable[UTXO]) -> Dict[Tuple[str, int], UTXO]:
    index: Dict[Tuple[str, int], UTXO] = {}
    for utxo in utxos:
        # first entry wins
        index.setdefault((validate_tx_hash(utxo.tx_hash), utxo.output_index), utxo)
    return index


def key_hashes_from_inputs(
    inputs: Optional[Sequence[TransactionInput]],
    own_utxos: Iterable[UTXO]
) -> List[KeyHash]:
    """
    Payment credential hashes of inputs that spend one of our UTXOs.

    Inputs we do not know about belong to someone else and are skipped.
    """
    utxos = _index_utxos(own_utxos)
    found: List[KeyHash] = []
    for tx_input in inputs or ():
        utxo = utxos.get((tx_input.tx_hash.lower(), tx_input.index))
        if utxo is None:
            continue
        credential = decode_address(utxo.address).payment_credential
        if credential is not None:
            found.append(KeyHash(credential.hash))
    return found


def _key_hash_of(credential: Credential) -> List[KeyHash]:
    if credential.is_key_hash:
        return [KeyHash(credential.hash)]
    return []


def key_hashes_from_certificates(
    certificates: Optional[Sequence[Certificate]]
) -> List[KeyHash]:
    """Key hashes that certificates require a witness from."""
    found: List[KeyHash] = []
    for cert in certificates or ():
        match cert:
            case StakeRegistration(stake_credential=credential):
                found.extend(_key_hash_of(credential))
            case StakeDeregistration(stake_credential=credential):
                found.extend(_key_hash_of(credential))
            case StakeDelegation(stake_credential=credential):
                found.extend(_key_hash_of(credential))
            case PoolRegistration(pool_owners=owners):
                found.extend(owners)
            case MoveInstantaneousRewards():
                for credential in cert.stake_credentials or ():
                    found.extend(_key_hash_of(credential))
            case _:
                # Retirement, genesis delegation and later-era kinds
                pass
    return found


def key_hashes_from_native_scripts(
    scripts: Optional[Sequence[NativeScript]],
    max_depth: int = MAX_NATIVE_SCRIPT_DEPTH
) -> List[KeyHash]:
    """
    Every PubKey leaf of a native script forest, left to right.

    All children of All/Any/NofK nodes are visited regardless of the
    threshold, so the result covers every key that could take part.

    Raises:
        ScriptDepthError: If nesting exceeds ``max_depth``
    """
    found: List[KeyHash] = []
    # stack of (script, depth); children pushed reversed to keep leaf order
    stack = [(script, 1) for script in reversed(scripts or ())]
    while stack:
        script, depth = stack.pop()
        if depth > max_depth:
            raise ScriptDepthError(max_depth)

        match script:
            case ScriptPubkey(key_hash=key_hash):
                found.append(key_hash)
            case (
                ScriptAll(native_scripts=children)
                | ScriptAny(native_scripts=children)
                | ScriptNofK(native_scripts=children)
            ):
                stack.extend((child, depth + 1) for child in reversed(children))
            case _:
                # InvalidBefore / InvalidHereafter
                pass
    return found


def collect_signer_candidates(
    tx: Transaction,
    own_utxos: Iterable[UTXO]
) -> List[KeyHash]:
    """
    All key hashes referenced by a transaction, unfiltered and in source order.

    Args:
        tx: Transaction view
        own_utxos: UTXOs owned by the wallet

    Returns:
        Candidate key hashes (may contain duplicates and foreign keys)
    """
    utxos = list(own_utxos)
    body = tx.body

    candidates: List[KeyHash] = []
    candidates += key_hashes_from_inputs(body.inputs, utxos)
    candidates += key_hashes_from_certificates(body.certificates)
    candidates += key_hashes_from_native_scripts(tx.witness_set.native_scripts)
    candidates += list(body.required_signers or ())
    candidates += key_hashes_from_inputs(body.collateral, utxos)
    return candidates


def discover_signers(
    tx: Transaction,
    own_key_hashes: Iterable[KeyHash],
    own_utxos: Iterable[UTXO],
    deduplicate: bool = False
) -> List[KeyHash]:
    """
    Key hashes of this wallet that must sign a transaction.

    Args:
        tx: Transaction view
        own_key_hashes: Key hashes belonging to the wallet
        own_utxos: UTXOs belonging to the wallet
        deduplicate: Drop repeated hashes, keeping the first occurrence

    Returns:
        Own key hashes in the order they are referenced. A hash referenced
        from several places appears once per reference unless
        ``deduplicate`` is set.

    Raises:
        InputContractViolation: If an own key hash or UTXO hash is not
            hex of the right length
        ScriptDepthError: If a native script is nested too deeply
    """
    own = frozenset(validate_key_hash(key_hash) for key_hash in own_key_hashes)
    candidates = collect_signer_candidates(tx, own_utxos)

    signers = [key_hash for key_hash in candidates if key_hash in own]
    if deduplicate:
        signers = list(dict.fromkeys(signers))

    logger.debug(f"Discovered {len(signers)} own signers among {len(candidates)} candidates")
    return signers
