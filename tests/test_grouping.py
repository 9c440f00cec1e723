from signer.grouping import PathGroup, group_network_paths, group_paths
from signer.networks import NetworkProtocol, NetworkSpec, SubstrateNetworkKeys

from conftest import KUSAMA_PATHS


def _as_tuples(groups):
    return [(g.title, g.paths) for g in groups]


class TestGroupPaths:
    """Test cases for path grouping"""

    def test_kusama_paths(self):
        """Test the network root comes first and siblings group under their segment"""
        groups = group_paths([
            "//kusama",
            "//kusama//default",
            "//kusama/softKey1",
            "//kusama//staking/1",
            "//kusama//funding/1",
            "//kusama//funding/2",
        ])
        assert groups == [
            PathGroup(title="Kusama root", paths=["//kusama"]),
            PathGroup(title="//default", paths=["//kusama//default"]),
            PathGroup(title="/softKey1", paths=["//kusama/softKey1"]),
            PathGroup(title="//staking", paths=["//kusama//staking/1"]),
            PathGroup(title="//funding", paths=["//kusama//funding/1", "//kusama//funding/2"]),
        ]

    def test_kusama_paths_in_derivation_order(self):
        """Test the result does not depend on derivation order"""
        assert _as_tuples(group_paths(KUSAMA_PATHS)) == [
            ("Kusama root", ["//kusama"]),
            ("//default", ["//kusama//default"]),
            ("/softKey1", ["//kusama/softKey1"]),
            ("//staking", ["//kusama//staking/1"]),
            ("//funding", ["//kusama//funding/1", "//kusama//funding/2"]),
        ]

    def test_unknown_paths(self):
        """Test paths outside any network root group by their own first segment"""
        groups = group_paths([
            "//polkadot_test//default",
            "",
            "//custom",
            "/kusama",
            "/kusama/1",
            "/polkadot_test/1",
        ])
        assert _as_tuples(groups) == [
            ("Identity root", [""]),
            ("//custom", ["//custom"]),
            ("/polkadot_test", ["/polkadot_test/1"]),
            ("//polkadot_test", ["//polkadot_test//default"]),
            ("/kusama", ["/kusama", "/kusama/1"]),
        ]

    def test_members_are_sorted(self):
        groups = group_paths(["//westend//stash/3", "//westend//stash/1", "//westend//stash/2"])
        assert _as_tuples(groups) == [
            ("//stash", ["//westend//stash/1", "//westend//stash/2", "//westend//stash/3"]),
        ]

    def test_soft_network_name_is_not_a_network_root(self):
        """Test /kusama alone is a custom path, not Kusama root"""
        assert _as_tuples(group_paths(["/kusama"])) == [("/kusama", ["/kusama"])]

    def test_ethereum_path_gets_its_own_group(self):
        assert _as_tuples(group_paths(["1"])) == [("1", ["1"])]

    def test_empty_input(self):
        assert group_paths([]) == []

    def test_fixture_registry(self):
        """Test network roots come from the registry that is passed in"""
        networks = {
            "0xabc": NetworkSpec(
                network_key="0xabc",
                path_id="testnet",
                title="Testnet",
                protocol=NetworkProtocol.SUBSTRATE,
            ),
        }
        groups = group_paths(["//testnet", "//testnet//a/1", "//kusama"], networks)
        assert _as_tuples(groups) == [
            ("//kusama", ["//kusama"]),
            ("Testnet root", ["//testnet"]),
            ("//a", ["//testnet//a/1"]),
        ]


class TestGroupNetworkPaths:
    """Test cases for grouping one network of an identity"""

    def test_override_moves_path_to_other_network(self, identity):
        """Test //kusama//funding/2 is listed under Westend, not Kusama"""
        kusama = group_network_paths(identity, SubstrateNetworkKeys.KUSAMA)
        assert ("//funding", ["//kusama//funding/1"]) in _as_tuples(kusama)

        westend = group_network_paths(identity, SubstrateNetworkKeys.WESTEND)
        assert _as_tuples(westend) == [("//funding", ["//kusama//funding/2"])]
