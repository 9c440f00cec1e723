import pytest

from signer.models import AccountMeta, Identity


TIMESTAMP = 1573142786972

# (address, path, stored name, network override, expected display name)
ACCOUNTS = [
    ("addressDefault", "//kusama//default", "", None, "default"),
    ("address1", "//kusama//funding/1", "funding account1", None, "funding account1"),
    ("address3", "//kusama/softKey1", "", None, "softKey1"),
    ("address2", "//kusama//funding/2", "", "westend", "funding2"),
    ("address4", "//kusama//staking/1", "", None, "staking1"),
    ("address5", "//polkadot_test//default", "", None, "default"),
    ("address6", "1", "", None, "No name"),
    ("addressKusamaRoot", "//kusama", "", None, "kusama"),
    ("addressRoot", "", "", None, "Identity root"),
    ("addressCustom", "//custom", "CustomName", None, "CustomName"),
    ("addressKusamaSoft", "/kusama", "", None, "kusama"),
    ("softAddress", "/kusama/1", "", None, "1"),
    ("softAddress2", "/polkadot_test/1", "", None, "1"),
    ("polkadotReservedAddress", "//polkadot//reserved", "", None, "reserved"),
]

KUSAMA_PATHS = [
    "//kusama//default",
    "//kusama//funding/1",
    "//kusama/softKey1",
    "//kusama//funding/2",
    "//kusama//staking/1",
    "//kusama",
]


def build_identity(name: str, encrypted_seed: str) -> Identity:
    identity = Identity.create(name, encrypted_seed)
    for address, path, account_name, network_path_id, _ in ACCOUNTS:
        identity.meta[path] = AccountMeta(
            address=address,
            name=account_name,
            created_at=TIMESTAMP,
            updated_at=TIMESTAMP,
            network_path_id=network_path_id,
        )
        identity.addresses[address] = path
    return identity


@pytest.fixture
def identity():
    return build_identity("identity1", "yyyy")


@pytest.fixture
def identities():
    return [build_identity("identity1", "yyyy"), build_identity("identity2", "xxxx")]
