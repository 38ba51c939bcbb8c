from __future__ import annotations

from crm.core.security import ALGORITHM, hash_password, verify_password


def test_hash_is_salted_and_self_describing():
    first = hash_password("password123", iterations=1_000)
    second = hash_password("password123", iterations=1_000)

    assert first != second
    algorithm, iterations, salt, digest = first.split("$")
    assert (algorithm, iterations) == (ALGORITHM, "1000")
    assert len(salt) == 32 and len(digest) == 64


def test_verify_checks_password_and_pepper():
    stored = hash_password("password123", pepper="pepper", iterations=1_000)

    assert verify_password("password123", stored, pepper="pepper") is True
    assert verify_password("password123", stored) is False
    assert verify_password("wrong", stored, pepper="pepper") is False


def test_verify_rejects_malformed_hashes():
    assert verify_password("password123", "") is False
    assert verify_password("password123", "sha256$abc") is False
    assert verify_password("password123", "md5$10$salt$digest") is False
    assert verify_password("password123", "pbkdf2_sha256$many$salt$digest") is False
