"""
Derivation Service - Turn (seed, path) into an address.

Ethereum accounts are derived here with BIP-44 (m/44'/60'/0'/0/0); the
ethereum "path" is only the chain id, so every chain shares one address.
Substrate key maths (sr25519) is supplied by the caller as a backend:

    backend(path, seed_phrase, prefix, password) -> address

Every failure surfaces as DerivationFailed. Nothing is retried here.
"""

import logging
from typing import Callable, Optional

from mnemonic import Mnemonic
from eth_account import Account
from eth_account.hdaccount import seed_from_mnemonic, key_from_seed

from ..paths import EthereumPath, parse_path

# Enable HD wallet features
Account.enable_unaudited_hdwallet_features()

logger = logging.getLogger(__name__)


# BIP-44 derivation path for Ethereum
ETH_DERIVATION_PATH = "m/44'/60'/0'/0/{}"

SubstrateBackend = Callable[[str, str, int, str], str]


class DerivationFailed(Exception):
    """Deriving an account failed; ``cause`` is human readable."""

    def __init__(self, cause: str):
        super().__init__(cause)
        self.cause = cause


def ethereum_account_id(address: str, chain_id: str) -> str:
    """Per-chain account id, e.g. ethereum:0xabc...@1"""
    return f"ethereum:{address.lower()}@{chain_id}"


def derive_ethereum_address(seed_phrase: str, index: int = 0) -> str:
    """Derive the BIP-44 Ethereum address at the given index."""
    if not Mnemonic("english").check(seed_phrase):
        raise DerivationFailed("Invalid seed phrase")
    seed = seed_from_mnemonic(seed_phrase, passphrase="")
    private_key = key_from_seed(seed, ETH_DERIVATION_PATH.format(index))
    return Account.from_key(private_key).address


class DerivationService:
    """
    Derives account addresses for the identity store.

    Usage:
        service = DerivationService(substrate_backend=my_sr25519_derive)
        address = service.derive("//kusama//default", seed, 2, "Default")
    """

    def __init__(self, substrate_backend: Optional[SubstrateBackend] = None):
        self._substrate_backend = substrate_backend

    @property
    def supports_substrate(self) -> bool:
        return self._substrate_backend is not None

    def derive(self, path: str, seed_phrase: str, prefix: int,
               name: str, password: str = "") -> str:
        """
        Derive the address for ``path``.

        Raises:
            DerivationFailed: If the seed, path or backend rejects the request
        """
        if isinstance(parse_path(path), EthereumPath):
            # Derivation passwords only apply to substrate paths
            address = derive_ethereum_address(seed_phrase)
        else:
            address = self._derive_substrate(path, seed_phrase, prefix, password)

        logger.info(f"Derived account {name or path!r}")
        return address

    def _derive_substrate(self, path: str, seed_phrase: str, prefix: int, password: str) -> str:
        if self._substrate_backend is None:
            raise DerivationFailed("No substrate derivation backend configured")
        try:
            address = self._substrate_backend(path, seed_phrase, prefix, password)
        except DerivationFailed:
            raise
        except Exception as e:
            raise DerivationFailed(str(e) or type(e).__name__) from e
        if not address:
            raise DerivationFailed(f"Backend returned no address for {path!r}")
        return address
