import pytest

from signer.models import AccountMeta, Identity
from signer.networks import (
    NETWORK_LIST,
    UNKNOWN_NETWORK_KEY,
    EthereumNetworkKeys,
    NetworkProtocol,
    NetworkSpec,
    SubstrateNetworkKeys,
)
from signer.resolver import (
    get_existed_network_keys,
    get_network_key_by_path,
    get_network_key_by_path_id,
    get_paths_with_network_key,
)


def _meta(network_path_id=None):
    return AccountMeta(address="a", name="", created_at=0, updated_at=0,
                       network_path_id=network_path_id)


class TestGetNetworkKeyByPath:
    """Test cases for resolving a path to a network"""

    def test_literal_cases(self, identity):
        """Test resolution of the fixture identity's paths"""
        def resolve(path):
            return get_network_key_by_path(path, identity.meta.get(path))

        assert resolve("") == UNKNOWN_NETWORK_KEY
        assert resolve("//kusama") == SubstrateNetworkKeys.KUSAMA
        assert resolve("//kusama//funding/1") == SubstrateNetworkKeys.KUSAMA
        assert resolve("//kusama//funding/2") == SubstrateNetworkKeys.WESTEND
        assert resolve("1") == EthereumNetworkKeys.FRONTIER

    def test_without_meta(self):
        assert get_network_key_by_path("//polkadot//reserved") == SubstrateNetworkKeys.POLKADOT
        assert get_network_key_by_path("42") == EthereumNetworkKeys.KOVAN

    def test_unknown_shapes(self):
        """Test unmatched paths degrade to the unknown network"""
        assert get_network_key_by_path("//polkadot_test//default") == UNKNOWN_NETWORK_KEY
        assert get_network_key_by_path("/kusama") == UNKNOWN_NETWORK_KEY
        assert get_network_key_by_path("//custom") == UNKNOWN_NETWORK_KEY
        assert get_network_key_by_path("999999") == UNKNOWN_NETWORK_KEY

    def test_override_wins(self):
        """Test network_path_id beats the path's own network"""
        assert get_network_key_by_path("//kusama", _meta("polkadot")) == SubstrateNetworkKeys.POLKADOT
        assert get_network_key_by_path("", _meta("westend")) == SubstrateNetworkKeys.WESTEND

    def test_unmatched_override_is_unknown(self):
        assert get_network_key_by_path("//kusama", _meta("nowhere")) == UNKNOWN_NETWORK_KEY

    def test_meta_without_override_uses_path(self):
        assert get_network_key_by_path("//kusama", _meta()) == SubstrateNetworkKeys.KUSAMA

    def test_fixture_registry(self):
        networks = {
            "0xabc": NetworkSpec(network_key="0xabc", path_id="testnet", title="Testnet",
                                 protocol=NetworkProtocol.SUBSTRATE),
        }
        assert get_network_key_by_path("//testnet//x", None, networks) == "0xabc"
        assert get_network_key_by_path("//kusama", None, networks) == UNKNOWN_NETWORK_KEY

    def test_get_network_key_by_path_id(self):
        assert get_network_key_by_path_id("kusama") == SubstrateNetworkKeys.KUSAMA
        assert get_network_key_by_path_id("missing") == UNKNOWN_NETWORK_KEY


class TestExistedNetworkKeys:
    """Test cases for listing an identity's networks"""

    def test_literal_case(self, identity):
        """Test ethereum first, substrate in first-seen order, unknown last"""
        assert get_existed_network_keys(identity) == [
            EthereumNetworkKeys.FRONTIER,
            SubstrateNetworkKeys.KUSAMA,
            SubstrateNetworkKeys.WESTEND,
            SubstrateNetworkKeys.POLKADOT,
            UNKNOWN_NETWORK_KEY,
        ]

    def test_no_missing_accounts(self, identity):
        """Test every account is listed under exactly one network"""
        listed = []
        for network_key in get_existed_network_keys(identity):
            listed.extend(get_paths_with_network_key(identity, network_key))
        assert len(listed) == len(identity.meta)
        assert sorted(listed) == sorted(identity.meta)

    def test_paths_with_network_key(self, identity):
        assert get_paths_with_network_key(identity, SubstrateNetworkKeys.KUSAMA) == [
            "//kusama//default",
            "//kusama//funding/1",
            "//kusama/softKey1",
            "//kusama//staking/1",
            "//kusama",
        ]
        assert get_paths_with_network_key(identity, UNKNOWN_NETWORK_KEY) == [
            "//polkadot_test//default",
            "",
            "//custom",
            "/kusama",
            "/kusama/1",
            "/polkadot_test/1",
        ]

    def test_ethereum_in_address_order(self):
        """Test ethereum networks follow the order accounts were derived in"""
        identity = Identity.create("eth", "seed")
        identity.add_account("61", "ethereum:0x1@61", "", timestamp=1)
        identity.add_account("//kusama", "kusamaRoot", "", timestamp=1)
        identity.add_account("1", "ethereum:0x1@1", "", timestamp=1)
        assert get_existed_network_keys(identity) == [
            EthereumNetworkKeys.CLASSIC,
            EthereumNetworkKeys.FRONTIER,
            SubstrateNetworkKeys.KUSAMA,
        ]

    def test_empty_identity(self):
        assert get_existed_network_keys(Identity.create("empty", "seed")) == []

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            NETWORK_LIST["new"] = None
