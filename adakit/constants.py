"""Network parameters and protocol constants for adakit."""

from enum import Enum
from typing import Dict

__all__ = [
    "Network",
    "AddressType",
    "NETWORK_IDS",
    "ADDRESS_HRP",
    "REWARD_HRP",
    "HARDENED_OFFSET",
    "PURPOSE",
    "COIN_TYPE",
    "ROLE_EXTERNAL",
    "ROLE_STAKING",
    "KEY_HASH_LENGTH",
    "TX_HASH_LENGTH",
    "MAX_NATIVE_SCRIPT_DEPTH",
    "PRIVATE_KEY_HRP",
    "EXTENDED_PRIVATE_KEY_HRP",
    "COSE_HEADER_ALG",
    "COSE_KEY_KTY",
    "COSE_KEY_ALG",
    "COSE_KEY_CRV",
    "COSE_KEY_X",
    "COSE_ALG_EDDSA",
    "COSE_KTY_OKP",
    "COSE_CRV_ED25519",
]


class Network(str, Enum):
    """Cardano networks."""

    MAINNET = "Mainnet"
    TESTNET = "Testnet"

    @property
    def network_id(self) -> int:
        """Network id carried in the low nibble of an address header."""
        return NETWORK_IDS[self]


class AddressType(str, Enum):
    """Address styles a wallet can be derived for."""

    BASE = "Base"  # payment + stake credential
    ENTERPRISE = "Enterprise"  # payment credential only


NETWORK_IDS: Dict[Network, int] = {
    Network.MAINNET: 1,
    Network.TESTNET: 0,
}

ADDRESS_HRP: Dict[Network, str] = {
    Network.MAINNET: "addr",
    Network.TESTNET: "addr_test",
}

REWARD_HRP: Dict[Network, str] = {
    Network.MAINNET: "stake",
    Network.TESTNET: "stake_test",
}

# Key derivation (CIP-1852)
HARDENED_OFFSET = 0x80000000
PURPOSE = 1852
COIN_TYPE = 1815
ROLE_EXTERNAL = 0
ROLE_STAKING = 2

KEY_HASH_LENGTH = 28
TX_HASH_LENGTH = 32

# Native scripts nested deeper than this are rejected
MAX_NATIVE_SCRIPT_DEPTH = 64

# Bech32 prefixes for signing keys (CIP-5)
PRIVATE_KEY_HRP = "ed25519_sk"
EXTENDED_PRIVATE_KEY_HRP = "ed25519e_sk"

# COSE labels and values (RFC 8152)
COSE_HEADER_ALG = 1
COSE_KEY_KTY = 1
COSE_KEY_ALG = 3
COSE_KEY_CRV = -1
COSE_KEY_X = -2

COSE_ALG_EDDSA = -8
COSE_KTY_OKP = 1
COSE_CRV_ED25519 = 6
