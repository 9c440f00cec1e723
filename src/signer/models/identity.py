"""
Identity model.

An identity is one encrypted root seed plus every account derived from it.
Accounts are tracked in two ordered maps that must always agree:

    addresses: address -> path
    meta:      path -> AccountMeta

All mutations go through Identity methods so both maps change together.
"""

import time
from dataclasses import dataclass, asdict, field
from typing import Optional


def now_ms() -> int:
    """Current time as integer milliseconds."""
    return int(time.time() * 1000)


def _check_str(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string, got {value!r}")
    return value


def _check_timestamp(data: dict, key: str) -> int:
    value = data.get(key)
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValueError(f"{key} must be a non-negative integer, got {value!r}")
    return value


def _pairs_to_dict(pairs, label: str) -> dict:
    """Rebuild an ordered dict from [key, value] pairs, rejecting duplicates."""
    if not isinstance(pairs, list):
        raise ValueError(f"{label} must be a list of pairs")
    result = {}
    for pair in pairs:
        if not isinstance(pair, list) or len(pair) != 2 or not isinstance(pair[0], str):
            raise ValueError(f"Malformed {label} entry: {pair!r}")
        if pair[0] in result:
            raise ValueError(f"Duplicate {label} key: {pair[0]!r}")
        result[pair[0]] = pair[1]
    return result


@dataclass
class AccountMeta:
    """Metadata for one derived account."""
    address: str
    name: str
    created_at: int                        # ms timestamp
    updated_at: int                        # ms timestamp, refreshed on rename
    network_path_id: Optional[str] = None  # Explicit network, overrides the path's own

    def to_dict(self) -> dict:
        d = asdict(self)
        # Absent override is omitted; an empty string is kept
        if d["network_path_id"] is None:
            del d["network_path_id"]
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "AccountMeta":
        """Create from dictionary with input validation."""
        if not isinstance(data, dict):
            raise ValueError(f"Account meta must be an object, got {data!r}")
        unknown = set(data) - {"address", "name", "created_at", "updated_at", "network_path_id"}
        if unknown:
            raise ValueError(f"Unexpected account meta fields: {sorted(unknown)}")

        network_path_id = data.get("network_path_id")
        if network_path_id is not None and not isinstance(network_path_id, str):
            raise ValueError(f"network_path_id must be a string, got {network_path_id!r}")

        return cls(
            address=_check_str(data, "address"),
            name=_check_str(data, "name"),
            created_at=_check_timestamp(data, "created_at"),
            updated_at=_check_timestamp(data, "updated_at"),
            network_path_id=network_path_id,
        )


@dataclass
class Identity:
    """A root seed and all accounts derived from it."""
    name: str
    encrypted_seed: str                    # Opaque handle, see wallet.crypto
    derivation_password: str = ""
    addresses: dict[str, str] = field(default_factory=dict)          # address -> path
    meta: dict[str, AccountMeta] = field(default_factory=dict)       # path -> meta

    @classmethod
    def create(cls, name: str, encrypted_seed: str, derivation_password: str = "") -> "Identity":
        """Create an identity with no accounts yet."""
        return cls(name=name, encrypted_seed=encrypted_seed,
                   derivation_password=derivation_password)

    # ============================================
    # Invariant
    # ============================================

    def is_consistent(self) -> bool:
        """addresses and meta describe the same accounts, one-to-one."""
        if len(self.addresses) != len(self.meta):
            return False
        for address, path in self.addresses.items():
            meta = self.meta.get(path)
            if meta is None or meta.address != address:
                return False
        return True

    def check_invariant(self) -> None:
        assert self.is_consistent(), f"Identity {self.name!r}: addresses and meta disagree"

    # ============================================
    # Accounts
    # ============================================

    @property
    def paths(self) -> list[str]:
        """All account paths in derivation order."""
        return list(self.meta.keys())

    def has_path(self, path: str) -> bool:
        return path in self.meta

    def get_path_by_address(self, address: str) -> Optional[str]:
        return self.addresses.get(address)

    def add_account(self, path: str, address: str, name: str,
                    network_path_id: Optional[str] = None,
                    timestamp: Optional[int] = None) -> AccountMeta:
        """Record a freshly derived account."""
        if path in self.meta:
            raise ValueError(f"Path {path!r} already exists in identity {self.name!r}")
        if address in self.addresses:
            raise ValueError(f"Address {address} already exists in identity {self.name!r}")

        created = now_ms() if timestamp is None else timestamp
        meta = AccountMeta(
            address=address,
            name=name,
            created_at=created,
            updated_at=created,
            network_path_id=network_path_id,
        )
        self.meta[path] = meta
        self.addresses[address] = path
        self.check_invariant()
        return meta

    def rename_account(self, path: str, name: str,
                       timestamp: Optional[int] = None) -> AccountMeta:
        """Rename an account, refreshing its updated_at."""
        if path not in self.meta:
            raise ValueError(f"Unknown path {path!r} in identity {self.name!r}")
        meta = self.meta[path]
        meta.name = name
        meta.updated_at = now_ms() if timestamp is None else timestamp
        return meta

    def remove_account(self, path: str) -> AccountMeta:
        """Forget an account. Returns its removed metadata."""
        if path not in self.meta:
            raise ValueError(f"Unknown path {path!r} in identity {self.name!r}")
        meta = self.meta.pop(path)
        del self.addresses[meta.address]
        self.check_invariant()
        return meta

    # ============================================
    # Persistence
    # ============================================

    def to_dict(self) -> dict:
        """Flat form; ordered maps become lists of [key, value] pairs."""
        return {
            "name": self.name,
            "encrypted_seed": self.encrypted_seed,
            "derivation_password": self.derivation_password,
            "addresses": [[address, path] for address, path in self.addresses.items()],
            "meta": [[path, meta.to_dict()] for path, meta in self.meta.items()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Identity":
        """Create from dictionary with input validation."""
        if not isinstance(data, dict):
            raise ValueError(f"Identity must be an object, got {type(data).__name__}")
        unknown = set(data) - {"name", "encrypted_seed", "derivation_password", "addresses", "meta"}
        if unknown:
            raise ValueError(f"Unexpected identity fields: {sorted(unknown)}")

        addresses = _pairs_to_dict(data.get("addresses"), "addresses")
        for address, path in addresses.items():
            if not isinstance(path, str):
                raise ValueError(f"Path for {address} must be a string, got {path!r}")

        meta = {
            path: AccountMeta.from_dict(item)
            for path, item in _pairs_to_dict(data.get("meta"), "meta").items()
        }

        return cls(
            name=_check_str(data, "name"),
            encrypted_seed=_check_str(data, "encrypted_seed"),
            derivation_password=_check_str(data, "derivation_password"),
            addresses=addresses,
            meta=meta,
        )
