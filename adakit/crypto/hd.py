"""Hierarchical Deterministic key derivation for adakit (BIP32-Ed25519, Icarus)."""

import logging
from typing import Tuple

from bip_utils import CardanoIcarusBip32

from ..constants import COIN_TYPE, HARDENED_OFFSET, PURPOSE
from ..crypto.keys import PrivateKey, PublicKey
from ..exceptions import CryptoError, InputContractViolation

__all__ = ["HDNode", "harden", "is_hardened"]

logger = logging.getLogger(__name__)

MAX_INDEX = 0xFFFFFFFF


def harden(index: int) -> int:
    """
    Map a path segment to its hardened child index.

    Raises:
        InputContractViolation: If index is not an integer in [0, 2^31)
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise InputContractViolation("Type int required for a path segment")
    if not 0 <= index < HARDENED_OFFSET:
        raise InputContractViolation(f"Path segment out of range: {index}")
    return HARDENED_OFFSET + index


def is_hardened(index: int) -> bool:
    return index >= HARDENED_OFFSET


def _format_index(index: int) -> str:
    if is_hardened(index):
        return f"{index - HARDENED_OFFSET}'"
    return str(index)


class HDNode:
    """
    HD wallet node (BIP32-Ed25519).

    Nodes are immutable; derivation returns a new node. The master node
    is built from BIP39 entropy with an empty passphrase following the
    Icarus scheme used by Shelley wallets.
    """

    def __init__(self, bip32_ctx: CardanoIcarusBip32, path: Tuple[int, ...] = ()) -> None:
        self._ctx = bip32_ctx
        self.path = path

    @classmethod
    def from_entropy(cls, entropy: bytes) -> "HDNode":
        """
        Create master node from mnemonic entropy.

        Raises:
            CryptoError: If entropy is too short to seed a master key
        """
        try:
            # bip_utils requires immutable bytes for the seed
            return cls(CardanoIcarusBip32.FromSeed(bytes(entropy)))
        except ValueError as e:
            raise CryptoError(f"Cannot create master key: {e}") from e

    @property
    def depth(self) -> int:
        return len(self.path)

    @property
    def index(self) -> int:
        return self.path[-1] if self.path else 0

    @property
    def chain_code(self) -> bytes:
        return self._ctx.ChainCode().ToBytes()

    @property
    def path_str(self) -> str:
        """Path in m/1852'/1815'/0'/0/0 notation."""
        return "/".join(["m"] + [_format_index(i) for i in self.path])

    def derive(self, index: int) -> "HDNode":
        """
        Derive child node.

        Args:
            index: Child index; values >= 2^31 derive hardened children

        Raises:
            InputContractViolation: If index is not a 32-bit unsigned integer
        """
        if isinstance(index, bool) or not isinstance(index, int):
            raise InputContractViolation("Type int required for a child index")
        if not 0 <= index <= MAX_INDEX:
            raise InputContractViolation(f"Child index out of range: {index}")

        return HDNode(self._ctx.ChildKey(index), self.path + (index,))

    def derive_path(self, path: str) -> "HDNode":
        """Derive using path like m/1852'/1815'/0'/0/0."""
        if not path or path in ("m", "M"):
            return self

        if path.startswith("m/") or path.startswith("M/"):
            path = path[2:]

        node = self
        for component in path.split("/"):
            if not component:
                continue

            try:
                if component.endswith("'") or component.endswith("h"):
                    index = harden(int(component[:-1]))
                else:
                    index = int(component)
            except ValueError as e:
                raise InputContractViolation(f"Invalid path component: {component!r}") from e

            node = node.derive(index)

        return node

    def derive_account(self, account_index: int) -> "HDNode":
        """Derive m/1852'/1815'/account' from a master node."""
        node = self.derive(harden(PURPOSE)).derive(harden(COIN_TYPE)).derive(harden(account_index))
        logger.debug(f"Derived account node {node.path_str}")
        return node

    def get_private_key(self) -> PrivateKey:
        """Get extended private key (kL || kR)."""
        return PrivateKey(self._ctx.PrivateKey().Raw().ToBytes())

    def get_public_key(self) -> PublicKey:
        """Get public key."""
        # bip_utils prefixes Ed25519 keys with a 0x00 byte
        return PublicKey(self._ctx.PublicKey().RawCompressed().ToBytes()[1:])

    def __repr__(self) -> str:
        return f"HDNode({self.path_str})"
