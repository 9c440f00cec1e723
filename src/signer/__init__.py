"""
Signer - Identity manager for a cold-storage wallet.

Each identity holds one encrypted root seed; accounts are derived from it
along paths such as //kusama//funding/1, or are Ethereum accounts keyed
by chain id. This package parses those paths, resolves them to networks,
groups them for display and persists identities losslessly.
"""

__version__ = "0.1.0"

from .paths import (
    parse_path,
    render_path,
    is_hard_derived_path,
    get_path_name,
)
from .networks import NETWORK_LIST, UNKNOWN_NETWORK_KEY, NetworkSpec
from .resolver import (
    get_network_key_by_path,
    get_existed_network_keys,
    get_paths_with_network_key,
)
from .grouping import PathGroup, group_paths
from .models import (
    AccountMeta,
    Identity,
    CorruptIdentityStore,
    serialize_identities,
    deserialize_identities,
    IdentityStore,
)

__all__ = [
    "parse_path",
    "render_path",
    "is_hard_derived_path",
    "get_path_name",
    "NETWORK_LIST",
    "UNKNOWN_NETWORK_KEY",
    "NetworkSpec",
    "get_network_key_by_path",
    "get_existed_network_keys",
    "get_paths_with_network_key",
    "PathGroup",
    "group_paths",
    "AccountMeta",
    "Identity",
    "CorruptIdentityStore",
    "serialize_identities",
    "deserialize_identities",
    "IdentityStore",
]
