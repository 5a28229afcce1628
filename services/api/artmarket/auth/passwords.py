"""Salted password hashing with PBKDF2-HMAC-SHA256.

Stored format is ``<iterations>$<salt hex>$<hash hex>`` so the work factor
can be raised later without invalidating existing hashes.
"""

import hashlib
import hmac
import os

PBKDF2_ITERATIONS = 200_000
SALT_BYTES = 16


def hash_password(password: str, iterations: int = PBKDF2_ITERATIONS) -> str:
    """Hash a plain text password with a fresh random salt."""
    salt = os.urandom(SALT_BYTES)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{iterations}${salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a stored hash.

    Returns False for a malformed stored value instead of raising, so a
    corrupt record reads as a failed login.
    """
    try:
        iterations_str, salt_hex, hash_hex = hashed_password.split("$", 2)
        iterations = int(iterations_str)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False

    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, iterations)
    # Constant-time comparison
    return hmac.compare_digest(dk, stored_hash)
