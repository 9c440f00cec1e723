"""
Wallet package - Seed handling and account derivation.

Contains:
- encrypt_seed / decrypt_seed: Opaque encrypted seed handles
- DerivationService: Address derivation (Ethereum built in, substrate pluggable)
"""

from .crypto import (
    encrypt_seed,
    decrypt_seed,
    generate_seed_phrase,
    is_valid_seed_phrase,
)
from .derivation import (
    DerivationFailed,
    DerivationService,
    derive_ethereum_address,
    ethereum_account_id,
)

__all__ = [
    "encrypt_seed",
    "decrypt_seed",
    "generate_seed_phrase",
    "is_valid_seed_phrase",
    "DerivationFailed",
    "DerivationService",
    "derive_ethereum_address",
    "ethereum_account_id",
]
