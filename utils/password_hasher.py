"""
Password Hashing

Salted one-way password hashes built on PBKDF2-HMAC-SHA256 from the
``cryptography`` package.

Stored format:
    pbkdf2_sha256$<iterations>$<salt base64>$<hash base64>

The iteration count is stored with each hash, so raising
PASSWORD_HASH_ITERATIONS only affects new hashes; old ones keep verifying.

Usage:
    encoded = hash_password("s3cret")
    verify_password("s3cret", encoded)  # True
"""

import base64
import os

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

import config

ALGORITHM = "pbkdf2_sha256"
SALT_BYTES = 16
KEY_LENGTH = 32


def _kdf(salt: bytes, iterations: int) -> PBKDF2HMAC:
    return PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=salt,
        iterations=iterations,
    )


def hash_password(password: str, iterations: int | None = None) -> str:
    """
    Hash a password with a fresh random salt.

    Args:
        password: Plain text password
        iterations: PBKDF2 rounds (defaults to config.PASSWORD_HASH_ITERATIONS)

    Returns:
        Encoded hash string safe to store in users.password_hash
    """
    iterations = iterations or config.PASSWORD_HASH_ITERATIONS
    salt = os.urandom(SALT_BYTES)
    derived = _kdf(salt, iterations).derive(password.encode('utf-8'))
    return "$".join([
        ALGORITHM,
        str(iterations),
        base64.b64encode(salt).decode('ascii'),
        base64.b64encode(derived).decode('ascii'),
    ])


def verify_password(password: str, encoded: str) -> bool:
    """
    Check a password against a stored hash.

    Malformed or foreign hash strings verify as False rather than raising.
    """
    try:
        algorithm, iterations_str, salt_b64, hash_b64 = encoded.split("$")
        if algorithm != ALGORITHM:
            return False
        iterations = int(iterations_str)
        salt = base64.b64decode(salt_b64)
        expected = base64.b64decode(hash_b64)
    except (ValueError, AttributeError):
        return False

    try:
        _kdf(salt, iterations).verify(password.encode('utf-8'), expected)
        return True
    except InvalidKey:
        return False
