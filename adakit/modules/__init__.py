"""adakit wallet modules."""

from ..modules.wallet import WalletOptions, WalletIdentity, derive_wallet, derive_account_key
from ..modules.signers import (
    discover_signers,
    collect_signer_candidates,
    key_hashes_from_inputs,
    key_hashes_from_certificates,
    key_hashes_from_native_scripts,
)

__all__ = [
    # Wallet
    "WalletOptions",
    "WalletIdentity",
    "derive_wallet",
    "derive_account_key",

    # Signers
    "discover_signers",
    "collect_signer_candidates",
    "key_hashes_from_inputs",
    "key_hashes_from_certificates",
    "key_hashes_from_native_scripts",
]
