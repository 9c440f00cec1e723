import pytest

from signer.models import Identity


class TestIdentityAccounts:
    """Test cases for identity mutations"""

    def test_add_account(self):
        identity = Identity.create("alice", "seed")
        meta = identity.add_account("//kusama//default", "addr1", "Default", timestamp=100)
        assert identity.addresses == {"addr1": "//kusama//default"}
        assert identity.meta["//kusama//default"] is meta
        assert meta.created_at == meta.updated_at == 100
        assert meta.network_path_id is None

    def test_add_duplicate_path_changes_nothing(self):
        identity = Identity.create("alice", "seed")
        identity.add_account("//kusama", "addr1", "", timestamp=1)
        with pytest.raises(ValueError):
            identity.add_account("//kusama", "addr2", "", timestamp=1)
        assert identity.addresses == {"addr1": "//kusama"}
        assert list(identity.meta) == ["//kusama"]

    def test_add_duplicate_address_changes_nothing(self):
        identity = Identity.create("alice", "seed")
        identity.add_account("//kusama", "addr1", "", timestamp=1)
        with pytest.raises(ValueError):
            identity.add_account("//polkadot", "addr1", "", timestamp=1)
        assert list(identity.meta) == ["//kusama"]

    def test_rename_refreshes_updated_at(self):
        identity = Identity.create("alice", "seed")
        identity.add_account("//kusama", "addr1", "old", timestamp=1)
        meta = identity.rename_account("//kusama", "new", timestamp=50)
        assert meta.name == "new"
        assert meta.created_at == 1
        assert meta.updated_at == 50

    def test_remove_account_updates_both_maps(self, identity):
        removed = identity.remove_account("//kusama//default")
        assert removed.address == "addressDefault"
        assert "//kusama//default" not in identity.meta
        assert "addressDefault" not in identity.addresses
        assert identity.is_consistent()

    def test_unknown_path(self, identity):
        with pytest.raises(ValueError):
            identity.remove_account("//nowhere")
        with pytest.raises(ValueError):
            identity.rename_account("//nowhere", "x")

    def test_paths_in_derivation_order(self):
        identity = Identity.create("alice", "seed")
        for i, path in enumerate(["//b", "//a", "//c"]):
            identity.add_account(path, f"addr{i}", "", timestamp=1)
        assert identity.paths == ["//b", "//a", "//c"]
        assert identity.get_path_by_address("addr1") == "//a"


class TestInvariant:
    """Test cases for the addresses/meta invariant"""

    def test_fixture_is_consistent(self, identity):
        assert identity.is_consistent()
        identity.check_invariant()

    def test_mismatched_address_is_detected(self, identity):
        identity.addresses["addressDefault"] = "//kusama//funding/1"
        assert not identity.is_consistent()
        with pytest.raises(AssertionError):
            identity.check_invariant()

    def test_missing_meta_is_detected(self, identity):
        del identity.meta["//custom"]
        assert not identity.is_consistent()
