"""
Password hashing.

Hashes are stored as "scrypt$<salt hex>$<hash hex>" with a fresh
random salt per password. Verification re-derives the hash with
the stored salt and compares in constant time.
"""

import hashlib
import hmac
import secrets

SCHEME = "scrypt"
SALT_BYTES = 16
# Interactive-login cost parameters
SCRYPT_N = 2 ** 14
SCRYPT_R = 8
SCRYPT_P = 1
DKLEN = 32


def _derive(password: str, salt: bytes) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt,
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        dklen=DKLEN,
    )


def hash_password(password: str) -> str:
    salt = secrets.token_bytes(SALT_BYTES)
    return f"{SCHEME}${salt.hex()}${_derive(password, salt).hex()}"


def verify_password(password: str, stored_hash: str) -> bool:
    """Return True if password matches stored_hash. Malformed hashes never match."""
    try:
        scheme, salt_hex, hash_hex = stored_hash.split("$")
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    if scheme != SCHEME:
        return False
    return hmac.compare_digest(_derive(password, salt), expected)
