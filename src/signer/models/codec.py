"""
Identity Codec - Text form of the identity list.

Layout (JSON):

    {
      "version": 1,
      "identities": [
        {
          "name": ..., "encrypted_seed": ..., "derivation_password": ...,
          "addresses": [[address, path], ...],
          "meta": [[path, {address, name, created_at, updated_at, network_path_id?}], ...]
        }
      ]
    }

Ordered maps are stored as pair lists so insertion order survives a round
trip. Decoding is all-or-nothing: any problem raises CorruptIdentityStore.
"""

import json
import logging
from typing import Union

from .identity import Identity

logger = logging.getLogger(__name__)


STORE_VERSION = 1


class CorruptIdentityStore(ValueError):
    """Persisted identity text could not be decoded."""


def serialize_identities(identities: list[Identity]) -> str:
    """Encode identities to text."""
    for identity in identities:
        identity.check_invariant()
    data = {
        "version": STORE_VERSION,
        "identities": [identity.to_dict() for identity in identities],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def deserialize_identities(text: Union[str, bytes]) -> list[Identity]:
    """
    Decode identities from text (bytes must be UTF-8).

    Raises:
        CorruptIdentityStore: If the text is not a valid identity store
    """
    try:
        if isinstance(text, bytes):
            text = text.decode("utf-8")
        data = json.loads(text)
    except UnicodeDecodeError as e:
        raise CorruptIdentityStore(f"Identity store is not valid UTF-8: {e}") from e
    except (json.JSONDecodeError, TypeError) as e:
        raise CorruptIdentityStore(f"Identity store is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise CorruptIdentityStore("Identity store must be a JSON object")

    version = data.get("version")
    if version != STORE_VERSION:
        raise CorruptIdentityStore(f"Unsupported identity store version: {version}")

    items = data.get("identities")
    if not isinstance(items, list):
        raise CorruptIdentityStore("Identity store has no identity list")

    identities = []
    for position, item in enumerate(items):
        try:
            identity = Identity.from_dict(item)
        except ValueError as e:
            raise CorruptIdentityStore(f"Identity #{position} is malformed: {e}") from e
        if not identity.is_consistent():
            raise CorruptIdentityStore(
                f"Identity {identity.name!r}: addresses and meta disagree"
            )
        identities.append(identity)

    logger.debug(f"Decoded {len(identities)} identities")
    return identities
