"""Encoding and decoding utilities for adakit."""

import hashlib
import re
from typing import Optional, Tuple, Union

from bip_utils import Base58Decoder, Bech32Decoder, Bech32Encoder

from ..constants import ADDRESS_HRP, KEY_HASH_LENGTH, NETWORK_IDS, REWARD_HRP, Network
from ..exceptions import AddressError, ValidationError
from ..types.address import AddressDetails, AddressKind, Credential, CredentialType
from ..types.common import Address, HexStr

HEX_TEXT = re.compile(r"^(?:0x)?(?:[0-9a-fA-F]{2})*$")

# Byron addresses are CBOR arrays of [tagged payload, crc]
BYRON_CBOR_HEADER = 0x82

__all__ = [
    "hex_to_bytes",
    "bytes_to_hex",
    "blake2b_224",
    "encode_bech32",
    "decode_bech32",
    "split_bech32",
    "encode_address",
    "decode_address",
    "address_to_bytes",
]


def hex_to_bytes(hex_str: Union[HexStr, str]) -> bytes:
    """
    Convert hex string to bytes.

    Args:
        hex_str: Hex string with or without 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValidationError: If hex string is invalid
    """
    try:
        # Remove 0x prefix if present
        if isinstance(hex_str, str) and hex_str.startswith("0x"):
            hex_str = hex_str[2:]
        return bytes.fromhex(hex_str)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"Invalid hex string: {hex_str!r}") from e


def bytes_to_hex(data: bytes, prefix: bool = False) -> HexStr:
    """
    Convert bytes to hex string.

    Args:
        data: Bytes to encode
        prefix: Add 0x prefix

    Returns:
        Hex string
    """
    hex_str = data.hex()
    if prefix:
        hex_str = f"0x{hex_str}"
    return HexStr(hex_str)


def blake2b_224(data: bytes) -> bytes:
    """Blake2b digest truncated to 28 bytes, as used for key and script hashes."""
    return hashlib.blake2b(data, digest_size=KEY_HASH_LENGTH).digest()


def encode_bech32(hrp: str, data: bytes) -> str:
    """Encode raw bytes as a bech32 string (no length limit)."""
    return Bech32Encoder.Encode(hrp, data)


def split_bech32(value: str) -> Tuple[str, str]:
    """
    Split a bech32 string into human-readable part and data part.

    Raises:
        ValidationError: If no separator is present
    """
    sep = value.rfind("1")
    if sep < 1:
        raise ValidationError(f"Invalid bech32 string: {value!r}")
    return value[:sep].lower(), value[sep + 1:]


def decode_bech32(value: str, hrp: Optional[str] = None) -> Tuple[str, bytes]:
    """
    Decode a bech32 string.

    Args:
        value: Bech32 text
        hrp: Expected human-readable part (taken from the string if None)

    Returns:
        Tuple of (hrp, data)

    Raises:
        ValidationError: If the checksum, prefix or characters are invalid
    """
    actual_hrp, _ = split_bech32(value)
    if hrp is not None and actual_hrp != hrp:
        raise ValidationError(f"Wrong bech32 prefix: expected {hrp}, got {actual_hrp}")

    try:
        return actual_hrp, Bech32Decoder.Decode(actual_hrp, value)
    except Exception as e:
        raise ValidationError(f"Invalid bech32 string: {e}") from e


def _network_id(network: Union[Network, int]) -> int:
    if isinstance(network, Network):
        return NETWORK_IDS[network]
    return network


def _hrp_for(kind: AddressKind, network_id: int) -> str:
    network = Network.MAINNET if network_id == NETWORK_IDS[Network.MAINNET] else Network.TESTNET
    if kind.is_reward:
        return REWARD_HRP[network]
    return ADDRESS_HRP[network]


def encode_address(
    kind: AddressKind,
    network: Union[Network, int],
    payment_hash: Optional[bytes] = None,
    stake_hash: Optional[bytes] = None
) -> Address:
    """
    Encode credential hashes as a Shelley address.

    Args:
        kind: Address header type
        network: Target network or raw network id
        payment_hash: 28-byte payment credential hash
        stake_hash: 28-byte stake credential hash

    Returns:
        Bech32 address

    Raises:
        AddressError: If the hashes do not fit the address kind
    """
    network_id = _network_id(network)
    header = bytes([(int(kind) << 4) | (network_id & 0x0F)])

    if kind.is_base:
        parts = (payment_hash, stake_hash)
    elif kind.is_enterprise:
        parts = (payment_hash,)
    elif kind.is_reward:
        parts = (stake_hash,)
    else:
        raise AddressError(f"Cannot encode address kind: {kind.name}")

    for part in parts:
        if part is None or len(part) != KEY_HASH_LENGTH:
            raise AddressError(f"{kind.name} address requires {KEY_HASH_LENGTH}-byte hashes")

    return Address(encode_bech32(_hrp_for(kind, network_id), header + b"".join(parts)))


def address_to_bytes(address: str) -> bytes:
    """
    Get raw address bytes from bech32, hex or base58 (Byron) text.

    Raises:
        AddressError: If the address is none of these
    """
    if not isinstance(address, str):
        raise AddressError(f"Address must be text, got {type(address).__name__}")

    try:
        if address.lower().startswith(("addr", "stake")):
            return decode_bech32(address)[1]
        if HEX_TEXT.match(address):
            return hex_to_bytes(address)
    except ValidationError as e:
        raise AddressError(f"Invalid address: {address}") from e

    try:
        raw = Base58Decoder.Decode(address)
    except ValueError as e:
        raise AddressError(f"Invalid address: {address}") from e
    if not raw or raw[0] != BYRON_CBOR_HEADER:
        raise AddressError(f"Invalid Byron address: {address}")
    return raw


def _credential(data: bytes, is_script: bool) -> Credential:
    if len(data) != KEY_HASH_LENGTH:
        raise AddressError("Truncated address credential")
    return Credential(
        CredentialType.SCRIPT_HASH if is_script else CredentialType.KEY_HASH,
        data.hex(),
    )


def decode_address(address: str) -> AddressDetails:
    """
    Decode an address into its header and credentials.

    Args:
        address: Bech32, hex or base58 (Byron) encoded address

    Returns:
        AddressDetails with payment and/or stake credential; Byron
        addresses carry neither

    Raises:
        AddressError: If address is invalid
    """
    raw = address_to_bytes(address)
    if not raw:
        raise AddressError("Empty address")

    try:
        kind = AddressKind(raw[0] >> 4)
    except ValueError as e:
        raise AddressError(f"Unknown address header: {raw[0]:#04x}") from e
    network_id = raw[0] & 0x0F
    body = raw[1:]

    payment = None
    stake = None
    if kind.is_base:
        if len(body) != 2 * KEY_HASH_LENGTH:
            raise AddressError(f"Invalid base address length: {len(raw)}")
        payment = _credential(body[:KEY_HASH_LENGTH], bool(kind & 0b01))
        stake = _credential(body[KEY_HASH_LENGTH:], bool(kind & 0b10))
    elif kind.is_pointer:
        # Pointer (slot, tx index, cert index) follows; not a credential
        payment = _credential(body[:KEY_HASH_LENGTH], kind == AddressKind.POINTER_SCRIPT)
    elif kind.is_enterprise:
        if len(body) != KEY_HASH_LENGTH:
            raise AddressError(f"Invalid enterprise address length: {len(raw)}")
        payment = _credential(body, kind == AddressKind.ENTERPRISE_SCRIPT)
    elif kind.is_reward:
        if len(body) != KEY_HASH_LENGTH:
            raise AddressError(f"Invalid reward address length: {len(raw)}")
        stake = _credential(body, kind == AddressKind.REWARD_SCRIPT)

    return AddressDetails(
        kind=kind,
        network_id=network_id,
        payment_credential=payment,
        stake_credential=stake,
        address=Address(address),
    )
