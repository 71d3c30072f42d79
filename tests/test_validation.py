import pytest

from adakit.constants import AddressType, Network
from adakit.utils import validation as v


def test_account_index_validation():
    assert v.is_valid_account_index(0)
    assert v.is_valid_account_index(2**31 - 1)
    assert not v.is_valid_account_index(2**31)
    assert not v.is_valid_account_index(-1)
    assert not v.is_valid_account_index(True)
    assert not v.is_valid_account_index(3.0)
    assert v.validate_account_index(12) == 12
    with pytest.raises(v.InputContractViolation):
        v.validate_account_index("1")


def test_enum_validation():
    assert v.validate_network("Testnet") is Network.TESTNET
    assert v.validate_network(Network.MAINNET) is Network.MAINNET
    assert v.validate_address_type("Enterprise") is AddressType.ENTERPRISE
    with pytest.raises(v.InputContractViolation):
        v.validate_network("mainnet")
    with pytest.raises(v.InputContractViolation):
        v.validate_address_type("Reward")


def test_key_hash_validation():
    key_hash = "AB" * 28
    assert v.is_valid_key_hash(key_hash)
    assert v.validate_key_hash(key_hash) == "ab" * 28
    assert not v.is_valid_key_hash("ab" * 32)
    with pytest.raises(v.InputContractViolation):
        v.validate_key_hash("xyz")


def test_tx_hash_validation():
    tx_hash = "a" * 64
    assert v.is_valid_tx_hash(tx_hash)
    assert v.validate_tx_hash(tx_hash) == tx_hash
    with pytest.raises(v.InputContractViolation):
        v.validate_tx_hash("a" * 56)


def test_hex_validation():
    assert v.is_valid_hex("")
    assert v.is_valid_hex("00ff")
    assert not v.is_valid_hex("0")
    assert not v.is_valid_hex(b"00")
    assert v.validate_hex("DEAD", "payload") == "dead"
    with pytest.raises(v.InputContractViolation):
        v.validate_hex("xx", "payload")
