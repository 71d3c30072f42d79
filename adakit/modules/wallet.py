"""Wallet derivation module for adakit."""

import logging
from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple, Union

from ..constants import ROLE_EXTERNAL, ROLE_STAKING, AddressType, Network
from ..crypto.bip39 import mnemonic_to_entropy, secret_buffer
from ..crypto.hd import HDNode
from ..exceptions import InputContractViolation
from ..types.address import AddressKind
from ..types.common import Address, Bech32Str, KeyHash
from ..utils.encoding import encode_address, hex_to_bytes
from ..utils.validation import validate_account_index, validate_address_type, validate_network

__all__ = ["WalletOptions", "WalletIdentity", "derive_wallet", "derive_account_key"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WalletOptions:
    """Options controlling which address a seed is derived to."""

    address_type: Union[AddressType, str] = AddressType.BASE
    account_index: int = 0
    network: Union[Network, str] = Network.MAINNET

    def validated(self) -> "WalletOptions":
        """
        Return options with normalized enums.

        Raises:
            InputContractViolation: If any option is outside its contract
        """
        return WalletOptions(
            address_type=validate_address_type(self.address_type),
            account_index=validate_account_index(self.account_index),
            network=validate_network(self.network),
        )


@dataclass(frozen=True)
class WalletIdentity:
    """Addresses and signing keys derived from a seed."""

    address: Address
    reward_address: Optional[Address]
    payment_key: Bech32Str
    stake_key: Optional[Bech32Str]
    payment_key_hash: KeyHash
    stake_key_hash: Optional[KeyHash] = None

    @property
    def key_hashes(self) -> Tuple[KeyHash, ...]:
        """Key hashes owned by this identity, payment first."""
        if self.stake_key_hash is None:
            return (self.payment_key_hash,)
        return (self.payment_key_hash, self.stake_key_hash)


def derive_account_key(seed: str, account_index: int = 0) -> HDNode:
    """
    Derive the account node m/1852'/1815'/account' from a mnemonic.

    Args:
        seed: BIP39 mnemonic phrase
        account_index: Hardened account index

    Returns:
        Account HDNode

    Raises:
        CredentialDecodingError: If the mnemonic is malformed
        InputContractViolation: If seed is not a string or account index is invalid
    """
    account_index = validate_account_index(account_index)

    with secret_buffer(mnemonic_to_entropy(seed)) as entropy:
        root = HDNode.from_entropy(entropy)

    return root.derive_account(account_index)


def derive_wallet(
    seed: str,
    options: Optional[WalletOptions] = None,
    **kwargs: Any
) -> WalletIdentity:
    """
    Derive wallet keys and addresses from a mnemonic.

    Payment key is account/0/0 and stake key account/2/0 under
    m/1852'/1815'/account'.

    Args:
        seed: BIP39 mnemonic phrase
        options: Derivation options (defaults: Base, account 0, Mainnet)
        **kwargs: Overrides for individual options fields

    Returns:
        WalletIdentity; reward address and stake key are None for
        Enterprise addresses

    Raises:
        CredentialDecodingError: If the mnemonic is malformed
        InputContractViolation: If seed is not a string or an option is invalid

    Example:
        >>> wallet = derive_wallet(mnemonic, network="Testnet")
        >>> wallet.address.startswith("addr_test1")
        True
    """
    options = options or WalletOptions()
    try:
        options = replace(options, **kwargs)
    except TypeError as e:
        raise InputContractViolation(f"Unknown wallet option: {e}") from e
    options = options.validated()

    account = derive_account_key(seed, options.account_index)
    payment_node = account.derive(ROLE_EXTERNAL).derive(0)
    stake_node = account.derive(ROLE_STAKING).derive(0)

    payment_key = payment_node.get_private_key()
    stake_key = stake_node.get_private_key()
    payment_hash = payment_node.get_public_key().hash()
    stake_hash = stake_node.get_public_key().hash()

    if options.address_type == AddressType.BASE:
        address = encode_address(
            AddressKind.BASE_KEY_KEY,
            options.network,
            hex_to_bytes(payment_hash),
            hex_to_bytes(stake_hash),
        )
        reward_address = encode_address(
            AddressKind.REWARD_KEY,
            options.network,
            stake_hash=hex_to_bytes(stake_hash),
        )
        identity = WalletIdentity(
            address=address,
            reward_address=reward_address,
            payment_key=payment_key.to_bech32(),
            stake_key=stake_key.to_bech32(),
            payment_key_hash=payment_hash,
            stake_key_hash=stake_hash,
        )
    else:
        address = encode_address(
            AddressKind.ENTERPRISE_KEY,
            options.network,
            hex_to_bytes(payment_hash),
        )
        identity = WalletIdentity(
            address=address,
            reward_address=None,
            payment_key=payment_key.to_bech32(),
            stake_key=None,
            payment_key_hash=payment_hash,
        )

    logger.info(
        f"Derived {options.address_type.value} wallet for account "
        f"{options.account_index} on {options.network.value}"
    )
    return identity
