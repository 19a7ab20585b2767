from __future__ import annotations

from stanblog.application.services.password_hashing import WerkzeugPasswordHasher


def test_hash_never_equals_plaintext() -> None:
    hasher = WerkzeugPasswordHasher()

    hashed = hasher.hash("secret")

    assert hashed != "secret"
    assert "secret" not in hashed


def test_hash_is_salted_per_call() -> None:
    hasher = WerkzeugPasswordHasher()

    assert hasher.hash("secret") != hasher.hash("secret")


def test_verify_accepts_only_matching_password() -> None:
    hasher = WerkzeugPasswordHasher()
    hashed = hasher.hash("secret")

    assert hasher.verify("secret", hashed) is True
    assert hasher.verify("Secret", hashed) is False
    assert hasher.verify("secret", "") is False
