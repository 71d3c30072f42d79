import pytest

from adakit.crypto.bip39 import generate_mnemonic, mnemonic_to_entropy, secret_buffer
from adakit.crypto.hd import HDNode, harden
from adakit.crypto.keys import PrivateKey, PublicKey
from adakit.exceptions import CredentialDecodingError, InputContractViolation

MNEMONIC = "test walk nut penalty hip pave soap entry language right filter choice"


def _master():
    return HDNode.from_entropy(mnemonic_to_entropy(MNEMONIC))


def test_harden():
    assert harden(0) == 0x80000000
    assert harden(1852) == 0x8000073C
    for bad in (-1, 2**31, 1.0, False):
        with pytest.raises(InputContractViolation):
            harden(bad)


def test_derive_path_matches_manual_derivation():
    master = _master()
    by_path = master.derive_path("m/1852'/1815'/0'/0/0")
    by_steps = master.derive_account(0).derive(0).derive(0)
    assert by_path.path_str == "m/1852'/1815'/0'/0/0"
    assert by_path.get_private_key() == by_steps.get_private_key()
    assert by_path.get_public_key() == by_steps.get_public_key()
    assert by_path.depth == 5


def test_derive_rejects_bad_index():
    master = _master()
    with pytest.raises(InputContractViolation):
        master.derive(2**32)
    with pytest.raises(InputContractViolation):
        master.derive_path("m/abc'")


def test_public_key_matches_private_key():
    node = _master().derive_path("m/1852'/1815'/0'/2/0")
    private = node.get_private_key()
    assert private.is_extended
    assert private.public_key() == node.get_public_key()
    assert node.get_public_key().hash() == "32c728d3861e164cab28cb8f006448139c8f1740ffb8e7aa9e5232dc"


def test_private_key_bech32_roundtrip():
    key = _master().derive_path("m/1852'/1815'/0'/0/0").get_private_key()
    text = key.to_bech32()
    assert text.startswith("ed25519e_sk1")
    assert PrivateKey(text) == key
    assert PrivateKey.from_bech32(text) == key

    plain = PrivateKey.generate()
    assert not plain.is_extended
    assert plain.to_bech32().startswith("ed25519_sk1")
    assert PrivateKey(plain.to_bech32()) == plain
    assert PrivateKey(plain.hex()) == plain


def test_private_key_rejects_garbage():
    for bad in ("ed25519e_sk1qqqq", "zz", b"\x01" * 31):
        with pytest.raises(CredentialDecodingError):
            PrivateKey(bad)


def test_extended_signature_verifies():
    key = _master().derive_path("m/1852'/1815'/0'/0/0").get_private_key()
    message = b"adakit"
    signature = key.sign(message)
    assert len(signature) == 64
    # deterministic
    assert key.sign(message) == signature
    assert key.public_key().verify(signature, message)
    assert not key.public_key().verify(signature, b"other")


def test_plain_signature_verifies():
    key = PrivateKey.generate()
    signature = key.sign(b"hello")
    assert key.public_key().verify(signature, b"hello")
    assert not PublicKey(b"\x00" * 32).verify(signature, b"hello")


def test_repr_masks_secret():
    key = PrivateKey(b"\x11" * 32)
    assert "1111...1111" in repr(key)
    assert key.hex() not in repr(key)


def test_generate_mnemonic():
    phrase = generate_mnemonic()
    assert len(phrase.split()) == 24
    assert len(mnemonic_to_entropy(phrase)) == 32
    assert len(generate_mnemonic(128).split()) == 12
    with pytest.raises(ValueError):
        generate_mnemonic(100)


def test_secret_buffer_is_wiped():
    buffer = mnemonic_to_entropy(MNEMONIC)
    with secret_buffer(buffer) as entropy:
        assert any(entropy)
    assert not any(buffer)
