"""
Seed Crypto - Encryption of identity root seeds.

Industry-standard security:
- BIP-39 seed phrases
- Argon2id key derivation (memory-hard)
- AES-256-GCM authenticated encryption

The result of encrypt_seed() is the opaque ``encrypted_seed`` handle stored
on an Identity. Seed phrases never exist unencrypted on disk.
"""

import json
import os
import secrets
from pathlib import Path

# Cryptography
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from argon2.low_level import hash_secret_raw, Type

# Mnemonics
from mnemonic import Mnemonic
from eth_account.hdaccount import Language, generate_mnemonic


# ============================================
# Security Constants
# ============================================

# Argon2id parameters (OWASP recommendations for high-security)
ARGON2_TIME_COST = 3
ARGON2_MEMORY_COST = 65536  # 64 MB
ARGON2_PARALLELISM = 4
ARGON2_HASH_LEN = 32  # 256 bits for AES-256

AES_IV_SIZE = 12  # 96 bits (recommended for GCM)
SALT_SIZE = 16

# Secure file permissions (Unix only)
SECURE_FILE_MODE = 0o600  # Owner read/write only


def set_secure_permissions(filepath: Path) -> None:
    """
    Set restrictive file permissions on Unix systems.

    No-op on Windows (NTFS uses ACLs, not Unix permissions).
    """
    if os.name == 'posix':
        try:
            os.chmod(filepath, SECURE_FILE_MODE)
        except OSError:
            # Best effort - don't fail save operation if chmod fails
            pass


# ============================================
# Seed Phrases
# ============================================

def generate_seed_phrase(word_count: int = 24) -> str:
    """Generate a fresh BIP-39 seed phrase (12 or 24 words)."""
    if word_count not in (12, 24):
        raise ValueError("word_count must be 12 or 24")
    return generate_mnemonic(num_words=word_count, lang=Language.ENGLISH)


def is_valid_seed_phrase(seed_phrase: str) -> bool:
    """Check BIP-39 wordlist and checksum."""
    return Mnemonic("english").check(seed_phrase)


# ============================================
# Encryption
# ============================================

def derive_key(password: str, salt: bytes,
               time_cost: int = ARGON2_TIME_COST,
               memory_cost: int = ARGON2_MEMORY_COST,
               parallelism: int = ARGON2_PARALLELISM) -> bytes:
    """Derive an encryption key from password using Argon2id."""
    return hash_secret_raw(
        secret=password.encode('utf-8'),
        salt=salt,
        time_cost=time_cost,
        memory_cost=memory_cost,
        parallelism=parallelism,
        hash_len=ARGON2_HASH_LEN,
        type=Type.ID
    )


def encrypt_seed(seed_phrase: str, password: str) -> str:
    """
    Encrypt a seed phrase with a password.

    Returns: the encrypted seed handle (a JSON string)
    """
    salt = secrets.token_bytes(SALT_SIZE)
    key = derive_key(password, salt)
    iv = secrets.token_bytes(AES_IV_SIZE)

    aesgcm = AESGCM(key)
    ciphertext_and_tag = aesgcm.encrypt(iv, seed_phrase.encode('utf-8'), None)

    return json.dumps({
        "kdf": {
            "algorithm": "argon2id",
            "salt": salt.hex(),
            "time_cost": ARGON2_TIME_COST,
            "memory_cost": ARGON2_MEMORY_COST,
            "parallelism": ARGON2_PARALLELISM
        },
        "iv": iv.hex(),
        "ciphertext": ciphertext_and_tag.hex(),
    }, sort_keys=True)


def decrypt_seed(encrypted_seed: str, password: str) -> str:
    """
    Decrypt a seed handle produced by encrypt_seed().

    Raises: ValueError if password is wrong or the handle is tampered.
    """
    try:
        data = json.loads(encrypted_seed)
        kdf = data["kdf"]
        salt = bytes.fromhex(kdf["salt"])
        iv = bytes.fromhex(data["iv"])
        ciphertext_and_tag = bytes.fromhex(data["ciphertext"])
        key = derive_key(password, salt, kdf["time_cost"], kdf["memory_cost"], kdf["parallelism"])
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise ValueError("Corrupted seed handle") from e

    try:
        plaintext = AESGCM(key).decrypt(iv, ciphertext_and_tag, None)
    except InvalidTag as e:
        raise ValueError("Wrong password or corrupted seed") from e

    return plaintext.decode('utf-8')
