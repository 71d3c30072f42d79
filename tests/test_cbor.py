import cbor2
import pytest

from adakit.exceptions import ScriptDepthError, SerializationError
from adakit.modules.signers import discover_signers
from adakit.types.address import Credential, CredentialType, UTXO
from adakit.types.transaction import (
    MIRPot,
    MoveInstantaneousRewards,
    PoolRegistration,
    ScriptAll,
    ScriptNofK,
    ScriptPubkey,
    InvalidHereafter,
    StakeDelegation,
    StakeRegistration,
    TransactionInput,
    UnsupportedCertificate,
)
from adakit.utils.cbor import decode_transaction

K1 = bytes.fromhex("11" * 28)
K2 = bytes.fromhex("22" * 28)
K3 = bytes.fromhex("33" * 28)
TX_A = bytes.fromhex("aa" * 32)
TX_B = bytes.fromhex("bb" * 32)


def _encode(body, witness_set=None, is_valid=True):
    return cbor2.dumps([body, witness_set or {}, is_valid, None])


def test_minimal_transaction():
    tx = decode_transaction(_encode({0: [[TX_A, 1]], 1: [], 2: 170000}))
    assert tx.body.inputs == (TransactionInput("aa" * 32, 1),)
    assert tx.body.certificates is None
    assert tx.body.required_signers is None
    assert tx.body.collateral is None
    assert tx.witness_set.native_scripts is None


def test_hex_input_and_three_element_array():
    data = cbor2.dumps([{0: [[TX_A, 0]]}, {}, None])
    assert decode_transaction(data.hex()).body.inputs[0].index == 0


def test_signing_fields():
    body = {
        0: [[TX_A, 0]],
        4: [
            [0, [0, K1]],
            [2, [0, K2], K3],
            [3, K3, b"\x00" * 32, 1000, 340, cbor2.CBORTag(30, [1, 100]), b"\xe1" + K2, [K1, K2], [], None],
            [6, [0, {(0, K1): 5}]],
            [6, [1, 42]],
            [18, 1],
        ],
        13: [[TX_B, 2]],
        14: [K2],
    }
    witness_set = {1: [[1, [[0, K1], [3, 1, [[0, K2], [5, 9000]]]]]]}
    tx = decode_transaction(_encode(body, witness_set))

    certs = tx.body.certificates
    assert certs[0] == StakeRegistration(Credential(CredentialType.KEY_HASH, K1.hex()))
    assert certs[1] == StakeDelegation(Credential.from_key_hash(K2.hex()), K3.hex())
    assert isinstance(certs[2], PoolRegistration)
    assert certs[2].pool_owners == (K1.hex(), K2.hex())
    assert certs[3] == MoveInstantaneousRewards(MIRPot.RESERVES, {Credential.from_key_hash(K1.hex()): 5})
    assert certs[4] == MoveInstantaneousRewards(MIRPot.TREASURY, 42)
    assert certs[5] == UnsupportedCertificate(tag=18, payload=(1,))

    assert tx.body.collateral == (TransactionInput("bb" * 32, 2),)
    assert tx.body.required_signers == (K2.hex(),)
    assert tx.witness_set.native_scripts == (
        ScriptAll((
            ScriptPubkey(K1.hex()),
            ScriptNofK(1, (ScriptPubkey(K2.hex()), InvalidHereafter(9000))),
        )),
    )


def test_tagged_sets_keep_encoded_order():
    body = {
        0: cbor2.CBORTag(258, [[TX_B, 0], [TX_A, 5], [TX_A, 1]]),
        14: cbor2.CBORTag(258, [K3, K1, K2]),
    }
    tx = decode_transaction(_encode(body))
    assert [(i.tx_hash[:2], i.index) for i in tx.body.inputs] == [("bb", 0), ("aa", 5), ("aa", 1)]
    assert tx.body.required_signers == (K3.hex(), K1.hex(), K2.hex())


def test_tagged_certificates_keep_source_order():
    body = {
        0: [],
        4: cbor2.CBORTag(258, [[2, [0, K2], K1], [0, [0, K1]]]),
        14: cbor2.CBORTag(258, [K2, K1, K2]),
    }
    tx = decode_transaction(_encode(body))
    assert isinstance(tx.body.certificates[0], StakeDelegation)
    assert isinstance(tx.body.certificates[1], StakeRegistration)
    assert tx.body.required_signers == (K2.hex(), K1.hex(), K2.hex())
    assert discover_signers(tx, [K1.hex(), K2.hex()], []) == [
        K2.hex(), K1.hex(), K2.hex(), K1.hex(), K2.hex()
    ]


def test_decoded_transaction_discovery():
    own = "addr1qx2fxv2umyhttkxyxp8x0dlpdt3k6cwng5pxj3jhsydzer3n0d3vllmyqwsx5wktcd8cc3sq835lu7drv2xwl2wywfgse35a3x"
    payment = "9493315cd92eb5d8c4304e67b7e16ae36d61d34502694657811a2c8e"
    stake = "337b62cfff6403a06a3acbc34f8c46003c69fe79a3628cefa9c47251"
    body = {
        0: [[TX_A, 0], [TX_B, 0]],
        4: [[2, [0, bytes.fromhex(stake)], K3]],
    }
    tx = decode_transaction(_encode(body))
    signers = discover_signers(tx, [payment, stake], [UTXO("aa" * 32, 0, own)])
    assert signers == [payment, stake]


@pytest.mark.parametrize("data", [
    b"",
    b"\xff\xff",
    cbor2.dumps({0: []}),
    cbor2.dumps([{0: []}]),
    cbor2.dumps([[], {}, None]),
    cbor2.dumps([{1: []}, {}, None]),
    cbor2.dumps([{0: [[b"\x01", 0]]}, {}, None]),
    cbor2.dumps([{0: [], 4: [[0, [2, K1]]]}, {}, None]),
    cbor2.dumps([{0: [], 4: [[0]]}, {}, None]),
    cbor2.dumps([{0: []}, {1: [[9, 1]]}, None]),
])
def test_malformed_transactions(data):
    with pytest.raises(SerializationError):
        decode_transaction(data)


def test_deep_script_is_rejected():
    script = [0, K1]
    for _ in range(70):
        script = [1, [script]]
    with pytest.raises(ScriptDepthError):
        decode_transaction(_encode({0: []}, {1: [script]}))
