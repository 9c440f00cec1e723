"""
Signer Networks - Static network registry.

Every account path resolves to one of these networks. The registry is
read-only: callers may pass their own mapping (e.g. test fixtures) anywhere
a ``networks`` argument is accepted.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


# ============================================
# Protocols & Keys
# ============================================

class NetworkProtocol:
    """Protocol families a network can belong to."""
    SUBSTRATE = "substrate"
    ETHEREUM = "ethereum"
    UNKNOWN = "unknown"


# Synthetic key for paths that match no configured network
UNKNOWN_NETWORK_KEY = "unknown"


class EthereumNetworkKeys:
    """Ethereum networks are keyed by their chain id."""
    FRONTIER = "1"
    ROPSTEN = "3"
    GOERLI = "5"
    KOVAN = "42"
    CLASSIC = "61"


class SubstrateNetworkKeys:
    """Substrate networks are keyed by their genesis hash."""
    KUSAMA = "0xb0a8d493285c2df73290dfb7e61f870f17b41801197a149ca93654499ea3dafe"
    POLKADOT = "0x91b171bb158e2d3848fa23a9f1c25182fb8e20313b2c1eb49219da7a70ce90c3"
    WESTEND = "0xe143f23803ac50e8f6f8e62695d1ce9e4e1d68aa36c1cd2cfd15340213f3423e"
    EDGEWARE = "0x742a2ca70c2fda6cee4f8df98d64c4c670a052d9568058982dad9d5a7a135c5b"


# ============================================
# Network Configurations
# ============================================

@dataclass(frozen=True)
class NetworkSpec:
    """Configuration for a blockchain network."""
    network_key: str
    path_id: str                # Root derivation segment, e.g. "kusama" for //kusama
    title: str
    protocol: str               # One of NetworkProtocol
    prefix: int = 0             # SS58 address prefix (substrate only)
    genesis_hash: Optional[str] = None
    ethereum_chain_id: Optional[str] = None

    @property
    def is_substrate(self) -> bool:
        return self.protocol == NetworkProtocol.SUBSTRATE

    @property
    def is_ethereum(self) -> bool:
        return self.protocol == NetworkProtocol.ETHEREUM


def _ethereum(chain_id: str, path_id: str, title: str) -> NetworkSpec:
    return NetworkSpec(
        network_key=chain_id,
        path_id=path_id,
        title=title,
        protocol=NetworkProtocol.ETHEREUM,
        ethereum_chain_id=chain_id,
    )


def _substrate(genesis_hash: str, path_id: str, title: str, prefix: int) -> NetworkSpec:
    return NetworkSpec(
        network_key=genesis_hash,
        path_id=path_id,
        title=title,
        protocol=NetworkProtocol.SUBSTRATE,
        prefix=prefix,
        genesis_hash=genesis_hash,
    )


ETHEREUM_NETWORK_LIST: Mapping[str, NetworkSpec] = MappingProxyType({
    EthereumNetworkKeys.FRONTIER: _ethereum(EthereumNetworkKeys.FRONTIER, "ethereum", "Ethereum"),
    EthereumNetworkKeys.CLASSIC: _ethereum(EthereumNetworkKeys.CLASSIC, "ethereum_classic", "Ethereum Classic"),
    EthereumNetworkKeys.ROPSTEN: _ethereum(EthereumNetworkKeys.ROPSTEN, "ropsten", "Ropsten Testnet"),
    EthereumNetworkKeys.GOERLI: _ethereum(EthereumNetworkKeys.GOERLI, "goerli", "Görli Testnet"),
    EthereumNetworkKeys.KOVAN: _ethereum(EthereumNetworkKeys.KOVAN, "kovan", "Kovan Testnet"),
})

SUBSTRATE_NETWORK_LIST: Mapping[str, NetworkSpec] = MappingProxyType({
    SubstrateNetworkKeys.KUSAMA: _substrate(SubstrateNetworkKeys.KUSAMA, "kusama", "Kusama", 2),
    SubstrateNetworkKeys.POLKADOT: _substrate(SubstrateNetworkKeys.POLKADOT, "polkadot", "Polkadot", 0),
    SubstrateNetworkKeys.WESTEND: _substrate(SubstrateNetworkKeys.WESTEND, "westend", "Westend", 42),
    SubstrateNetworkKeys.EDGEWARE: _substrate(SubstrateNetworkKeys.EDGEWARE, "edgeware", "Edgeware", 7),
})

UNKNOWN_NETWORK = NetworkSpec(
    network_key=UNKNOWN_NETWORK_KEY,
    path_id="",
    title="Unknown network",
    protocol=NetworkProtocol.UNKNOWN,
    prefix=2,
)

# All supported networks, keyed by network key
NETWORK_LIST: Mapping[str, NetworkSpec] = MappingProxyType({
    **ETHEREUM_NETWORK_LIST,
    **SUBSTRATE_NETWORK_LIST,
    UNKNOWN_NETWORK_KEY: UNKNOWN_NETWORK,
})


# ============================================
# Utility Functions
# ============================================

def get_protocol(network_key: str,
                 networks: Mapping[str, NetworkSpec] = NETWORK_LIST) -> str:
    """Protocol of a network key; keys outside the registry count as unknown."""
    network = networks.get(network_key)
    return network.protocol if network else NetworkProtocol.UNKNOWN
