"""
Models package - Identity data model for Signer.

Contains:
- Identity, AccountMeta: One root seed and its derived accounts
- serialize_identities / deserialize_identities: Text form of the identity list
- IdentityStore: JSON persistence
"""

from .identity import AccountMeta, Identity
from .codec import (
    CorruptIdentityStore,
    serialize_identities,
    deserialize_identities,
)
from .store import IdentityStore

__all__ = [
    "AccountMeta",
    "Identity",
    "CorruptIdentityStore",
    "serialize_identities",
    "deserialize_identities",
    "IdentityStore",
]
