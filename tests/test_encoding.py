import cbor2
import pytest
from bip_utils import Base58Encoder

from adakit.constants import Network
from adakit.exceptions import AddressError, ValidationError
from adakit.types.address import AddressKind, CredentialType
from adakit.utils.encoding import (
    hex_to_bytes, bytes_to_hex, blake2b_224, encode_bech32, decode_bech32,
    encode_address, decode_address, address_to_bytes
)

PAYMENT = bytes.fromhex("9493315cd92eb5d8c4304e67b7e16ae36d61d34502694657811a2c8e")
STAKE = bytes.fromhex("337b62cfff6403a06a3acbc34f8c46003c69fe79a3628cefa9c47251")
SCRIPT = bytes.fromhex("c37b1b5dc0669f1d3c61a6fddb2e8fde96be87b881c60bce8e8d542f")


def test_hex_bytes_roundtrip():
    data = b"\x00\x01deadbeef"
    hex_str = bytes_to_hex(data, prefix=True)
    assert hex_str.startswith("0x")
    assert hex_to_bytes(hex_str) == data
    with pytest.raises(ValidationError):
        hex_to_bytes("zzzz")


def test_blake2b_224():
    assert len(blake2b_224(b"")) == 28
    assert blake2b_224(b"").hex() == "836cc68931c2e4e3e838602eca1902591d216837bafddfe6f0c8cb07"


def test_bech32_roundtrip():
    data = b"\x07" * 64
    text = encode_bech32("ed25519e_sk", data)
    # longer than the 90 character limit of segwit bech32
    assert len(text) > 90
    assert decode_bech32(text) == ("ed25519e_sk", data)
    assert decode_bech32(text, hrp="ed25519e_sk")[1] == data
    with pytest.raises(ValidationError):
        decode_bech32(text, hrp="addr")
    with pytest.raises(ValidationError):
        decode_bech32(text[:-1] + ("q" if text[-1] != "q" else "p"))


def test_encode_address_vectors():
    assert encode_address(AddressKind.BASE_KEY_KEY, Network.MAINNET, PAYMENT, STAKE) == (
        "addr1qx2fxv2umyhttkxyxp8x0dlpdt3k6cwng5pxj3jhsydzer3n0d3vllmyqwsx5wktcd8cc3sq835lu7drv2xwl2wywfgse35a3x"
    )
    assert encode_address(AddressKind.ENTERPRISE_KEY, 0, PAYMENT) == (
        "addr_test1vz2fxv2umyhttkxyxp8x0dlpdt3k6cwng5pxj3jhsydzerspjrlsz"
    )
    assert encode_address(AddressKind.REWARD_KEY, Network.MAINNET, stake_hash=STAKE) == (
        "stake1uyehkck0lajq8gr28t9uxnuvgcqrc6070x3k9r8048z8y5gh6ffgw"
    )


def test_encode_address_rejects_bad_input():
    with pytest.raises(AddressError):
        encode_address(AddressKind.BASE_KEY_KEY, Network.MAINNET, PAYMENT)
    with pytest.raises(AddressError):
        encode_address(AddressKind.ENTERPRISE_KEY, Network.MAINNET, PAYMENT[:20])
    with pytest.raises(AddressError):
        encode_address(AddressKind.POINTER_KEY, Network.MAINNET, PAYMENT)


def test_decode_base_address():
    address = encode_address(AddressKind.BASE_KEY_KEY, Network.TESTNET, PAYMENT, STAKE)
    details = decode_address(address)
    assert details.kind == AddressKind.BASE_KEY_KEY
    assert details.network_id == 0
    assert details.payment_credential.type == CredentialType.KEY_HASH
    assert details.payment_credential.hash == PAYMENT.hex()
    assert details.stake_credential.hash == STAKE.hex()

    # hex form decodes to the same credentials
    same = decode_address(address_to_bytes(address).hex())
    assert same.payment_credential == details.payment_credential


def test_decode_script_addresses():
    details = decode_address(encode_address(AddressKind.BASE_SCRIPT_KEY, Network.MAINNET, SCRIPT, STAKE))
    assert details.payment_credential.is_script_hash
    assert details.stake_credential.is_key_hash

    enterprise = decode_address(encode_address(AddressKind.ENTERPRISE_SCRIPT, Network.MAINNET, SCRIPT))
    assert enterprise.payment_credential.is_script_hash
    assert enterprise.stake_credential is None

    reward = decode_address(encode_address(AddressKind.REWARD_SCRIPT, Network.MAINNET, stake_hash=SCRIPT))
    assert reward.payment_credential is None
    assert reward.stake_credential.is_script_hash


def test_decode_pointer_address():
    raw = bytes([0x41]) + PAYMENT + bytes([0x81, 0x00, 0x02, 0x03])
    details = decode_address(raw.hex())
    assert details.kind == AddressKind.POINTER_KEY
    assert details.payment_credential.hash == PAYMENT.hex()
    assert details.stake_credential is None


def test_decode_address_errors():
    with pytest.raises(AddressError):
        decode_address("addr1notanaddress")
    with pytest.raises(AddressError):
        decode_address("")
    with pytest.raises(AddressError):
        decode_address((bytes([0x91]) + PAYMENT).hex())
    with pytest.raises(AddressError):
        decode_address((bytes([0x61]) + PAYMENT[:10]).hex())


def _byron_address():
    payload = cbor2.dumps([PAYMENT, {}, 0])
    return Base58Encoder.Encode(cbor2.dumps([cbor2.CBORTag(24, payload), 1179124387]))


def test_decode_byron_address():
    details = decode_address(_byron_address())
    assert details.kind == AddressKind.BYRON
    assert details.payment_credential is None
    assert details.stake_credential is None

    # not base58 at all, or base58 that is not a CBOR array
    with pytest.raises(AddressError):
        decode_address("0OIl-notbase58")
    with pytest.raises(AddressError):
        decode_address(Base58Encoder.Encode(b"\x61" + PAYMENT))
