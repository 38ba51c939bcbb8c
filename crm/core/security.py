"""Password hashing for CRM user accounts.

Stored hashes are self-describing: ``pbkdf2_sha256$<iterations>$<salt>$<hex digest>``.
Each hash carries its own random salt; the configured pepper is mixed into the
password and never stored.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets

ALGORITHM = "pbkdf2_sha256"
DEFAULT_ITERATIONS = 120_000


def _derive(password: str, pepper: str, salt: str, iterations: int) -> str:
    secret = f"{pepper}:{password}".encode("utf-8")
    return hashlib.pbkdf2_hmac("sha256", secret, salt.encode("ascii"), iterations).hex()


def hash_password(password: str, pepper: str = "", iterations: int = DEFAULT_ITERATIONS) -> str:
    salt = secrets.token_hex(16)
    return f"{ALGORITHM}${iterations}${salt}${_derive(password, pepper, salt, iterations)}"


def verify_password(password: str, hashed_password: str, pepper: str = "") -> bool:
    """Check `password` against a stored hash; malformed hashes never match."""
    try:
        algorithm, iterations, salt, digest = hashed_password.split("$")
        rounds = int(iterations)
    except (AttributeError, ValueError):
        return False
    if algorithm != ALGORITHM or rounds < 1:
        return False
    return hmac.compare_digest(_derive(password, pepper, salt, rounds), digest)
