"""
Identity Store - JSON persistence for identities.

The store is the single owner of the identity list. Every mutation runs
under one lock on a working copy, which only replaces the in-memory list
once it has been written to disk; readers get deep copies so grouping and
resolution always see a consistent snapshot.
"""

import copy
import logging
import threading
from pathlib import Path
from typing import Callable, Optional

from ..networks import NETWORK_LIST, UNKNOWN_NETWORK_KEY
from ..resolver import get_network_key_by_path
from ..utils import get_identities_path
from ..wallet.crypto import encrypt_seed, set_secure_permissions
from ..wallet.derivation import DerivationService, ethereum_account_id
from .codec import deserialize_identities, serialize_identities
from .identity import AccountMeta, Identity

logger = logging.getLogger(__name__)


class IdentityStore:
    """Manages storage of identities and their derived accounts."""

    def __init__(self, data_dir: Path, derivation: Optional[DerivationService] = None,
                 networks=NETWORK_LIST):
        self.data_dir = Path(data_dir)
        self.identities_file = get_identities_path(self.data_dir)
        self.derivation = derivation or DerivationService()
        self.networks = networks

        # Ensure data directory exists
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._lock = threading.RLock()
        self._identities: list[Identity] = []
        self.load()

    # ============================================
    # Disk
    # ============================================

    def load(self) -> None:
        """
        (Re)load identities from disk.

        Raises:
            CorruptIdentityStore: If the file cannot be decoded; the
                in-memory identities are left untouched
        """
        if not self.identities_file.exists():
            return
        with open(self.identities_file, "rb") as f:
            raw = f.read()
        try:
            identities = deserialize_identities(raw)
        except ValueError as e:
            logger.error(f"Failed to load identities: {e}")
            raise
        with self._lock:
            self._identities = identities
        logger.info(f"Loaded {len(identities)} identities")

    def _save(self, identities: list[Identity]) -> None:
        """Save identities to disk."""
        text = serialize_identities(identities)
        temp_path = self.identities_file.with_suffix('.tmp')
        with open(temp_path, "w", encoding="utf-8") as f:
            f.write(text)
        temp_path.replace(self.identities_file)
        set_secure_permissions(self.identities_file)

    def _update(self, change: Callable[[list[Identity]], object]):
        """
        Apply ``change`` to a copy of the identities, save, then commit.

        If ``change`` raises or the write fails, the in-memory identities
        are left as they were.
        """
        with self._lock:
            working = copy.deepcopy(self._identities)
            result = change(working)
            self._save(working)
            self._identities = working
            return result

    @staticmethod
    def _find(identities: list[Identity], name: str) -> Identity:
        for identity in identities:
            if identity.name == name:
                return identity
        raise ValueError(f"Unknown identity: {name}")

    # ============================================
    # Identities
    # ============================================

    def get_identities(self) -> list[Identity]:
        """Snapshot of all identities."""
        with self._lock:
            return copy.deepcopy(self._identities)

    def get_identity(self, name: str) -> Optional[Identity]:
        """Snapshot of one identity, or None."""
        with self._lock:
            for identity in self._identities:
                if identity.name == name:
                    return copy.deepcopy(identity)
        return None

    def add_identity(self, identity: Identity) -> None:
        """Add an identity (names are unique)."""
        identity.check_invariant()

        def change(identities):
            if any(i.name == identity.name for i in identities):
                raise ValueError(f"Identity '{identity.name}' already exists")
            identities.append(copy.deepcopy(identity))

        self._update(change)
        logger.info(f"Added identity {identity.name!r}")

    def create_identity(self, name: str, seed_phrase: str, password: str,
                        derivation_password: str = "") -> Identity:
        """Encrypt a seed phrase and add it as a new, empty identity."""
        identity = Identity.create(name, encrypt_seed(seed_phrase, password), derivation_password)
        self.add_identity(identity)
        return identity

    def rename_identity(self, name: str, new_name: str) -> None:
        def change(identities):
            if any(i.name == new_name for i in identities):
                raise ValueError(f"Identity '{new_name}' already exists")
            self._find(identities, name).name = new_name

        self._update(change)

    def remove_identity(self, name: str) -> None:
        """Delete an identity and all its accounts."""
        self._update(lambda identities: identities.remove(self._find(identities, name)))
        logger.info(f"Removed identity {name!r}")

    # ============================================
    # Accounts
    # ============================================

    def derive_new_path(self, identity_name: str, path: str, seed_phrase: str,
                        network_key: str, name: str,
                        password: Optional[str] = None) -> AccountMeta:
        """
        Derive an account and record it on the identity.

        The path is checked before deriving; the identity only changes once
        derivation succeeds. ``password`` defaults to the identity's own
        derivation password. When the path alone would resolve to another
        network, the chosen network is stored as an override.

        Raises:
            ValueError: Unknown identity or network, or path already derived
            DerivationFailed: The derivation service rejected the request
        """
        network = self.networks.get(network_key)
        if network is None:
            raise ValueError(f"Unknown network: {network_key}")
        if network.is_ethereum and path != network.ethereum_chain_id:
            raise ValueError(f"Ethereum accounts use the chain id as path, got {path!r}")

        with self._lock:
            identity = self._find(self._identities, identity_name)
            if identity.has_path(path):
                raise ValueError(f"Path {path!r} already exists")
            if password is None:
                password = identity.derivation_password

        address = self.derivation.derive(path, seed_phrase, network.prefix, name, password)
        if network.is_ethereum:
            # One BIP-44 address serves every chain; keep the map keys unique
            address = ethereum_account_id(address, network.ethereum_chain_id)

        network_path_id = None
        if network_key != UNKNOWN_NETWORK_KEY and \
                get_network_key_by_path(path, None, self.networks) != network_key:
            network_path_id = network.path_id

        meta = self._update(
            lambda identities: self._find(identities, identity_name).add_account(
                path, address, name, network_path_id)
        )
        logger.info(f"Recorded {path!r} on identity {identity_name!r}")
        return copy.deepcopy(meta)

    def derive_ethereum_account(self, identity_name: str, seed_phrase: str,
                                network_key: str, name: str = "") -> AccountMeta:
        """Derive the Ethereum account for a chain; its path is the chain id."""
        network = self.networks.get(network_key)
        if network is None or not network.is_ethereum:
            raise ValueError(f"Not an ethereum network: {network_key}")
        return self.derive_new_path(identity_name, network.ethereum_chain_id,
                                    seed_phrase, network_key, name)

    def rename_path(self, identity_name: str, path: str, name: str) -> None:
        self._update(
            lambda identities: self._find(identities, identity_name).rename_account(path, name)
        )

    def delete_path(self, identity_name: str, path: str) -> None:
        """Forget an account."""
        self._update(
            lambda identities: self._find(identities, identity_name).remove_account(path)
        )
        logger.info(f"Deleted {path!r} from identity {identity_name!r}")
