"""
Network Resolver - Which network does an account path belong to?

Resolution never fails: anything that matches no configured network
resolves to UNKNOWN_NETWORK_KEY.
"""

from typing import TYPE_CHECKING, Iterable, Mapping, Optional

from .networks import (
    NETWORK_LIST,
    UNKNOWN_NETWORK_KEY,
    NetworkProtocol,
    NetworkSpec,
    get_protocol,
)
from .paths import EthereumPath, RootPath, parse_path

if TYPE_CHECKING:
    from .models.identity import AccountMeta, Identity


def get_network_key_by_path_id(path_id: str,
                               networks: Mapping[str, NetworkSpec] = NETWORK_LIST) -> str:
    """Network key whose path id matches, or the unknown key."""
    for network_key, network in networks.items():
        if network.path_id == path_id:
            return network_key
    return UNKNOWN_NETWORK_KEY


def get_network_key_by_path(path: str,
                            meta: Optional["AccountMeta"] = None,
                            networks: Mapping[str, NetworkSpec] = NETWORK_LIST) -> str:
    """
    Resolve the network key for an account path.

    Rules, first match wins:
    1. an explicit network_path_id on the account meta
    2. ethereum paths: the network with that chain id
    3. root: unknown
    4. a first hard segment naming a substrate network, e.g. //kusama//x
    """
    if meta is not None and meta.network_path_id is not None:
        return get_network_key_by_path_id(meta.network_path_id, networks)

    parsed = parse_path(path)

    if isinstance(parsed, EthereumPath):
        for network_key, network in networks.items():
            if network.is_ethereum and network.ethereum_chain_id == parsed.chain_id:
                return network_key
        return UNKNOWN_NETWORK_KEY

    if isinstance(parsed, RootPath):
        return UNKNOWN_NETWORK_KEY

    first = parsed.segments[0]
    if first.hard:
        for network_key, network in networks.items():
            if network.is_substrate and network.path_id == first.value:
                return network_key
    return UNKNOWN_NETWORK_KEY


def get_paths_with_network_key(identity: "Identity", network_key: str,
                               networks: Mapping[str, NetworkSpec] = NETWORK_LIST) -> list[str]:
    """All paths of an identity that resolve to the given network."""
    return [
        path for path, meta in identity.meta.items()
        if get_network_key_by_path(path, meta, networks) == network_key
    ]


def _unique(keys: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(keys))


def get_existed_network_keys(identity: "Identity",
                             networks: Mapping[str, NetworkSpec] = NETWORK_LIST) -> list[str]:
    """
    Networks that an identity has at least one account on.

    Ordered: ethereum networks (address order), substrate networks
    (first seen in meta), then unknown.
    """
    resolved = {
        path: get_network_key_by_path(path, meta, networks)
        for path, meta in identity.meta.items()
    }

    ethereum = _unique(
        resolved[path] for path in identity.addresses.values()
        if get_protocol(resolved[path], networks) == NetworkProtocol.ETHEREUM
    )
    substrate = _unique(
        key for key in resolved.values()
        if get_protocol(key, networks) == NetworkProtocol.SUBSTRATE
    )
    unknown = _unique(
        key for key in resolved.values()
        if get_protocol(key, networks) == NetworkProtocol.UNKNOWN
    )
    return ethereum + substrate + unknown
