"""Password hashing: bcrypt round trips, mismatches, and the missing-user path."""

import bcrypt
import pytest

from chirpy.auth.errors import CredentialError
from chirpy.auth.password import hash_password, verify_password

ROUNDS = 4


@pytest.mark.parametrize("password", ["hunter2", "correct horse battery staple", "pässwörd✓", " "])
def test_hash_then_verify(password):
    hashed = hash_password(password, ROUNDS)
    assert verify_password(password, hashed)


def test_wrong_password_fails():
    hashed = hash_password("hunter2", ROUNDS)
    assert not verify_password("hunter3", hashed)
    assert not verify_password("Hunter2", hashed)
    assert not verify_password("", hashed)


def test_hash_is_salted_and_not_plaintext():
    a = hash_password("hunter2", ROUNDS)
    b = hash_password("hunter2", ROUNDS)
    assert a != b
    assert "hunter2" not in a
    assert a.startswith("$2")


def test_cost_factor_is_encoded_in_hash():
    assert hash_password("hunter2", 5).startswith("$2b$05$")


def test_missing_hash_never_verifies():
    assert verify_password("anything", None, ROUNDS) is False


def test_garbage_hash_is_a_mismatch_not_an_error():
    assert verify_password("hunter2", "not-a-bcrypt-hash") is False


def test_long_passwords_are_truncated_consistently():
    long_pw = "a" * 100
    hashed = hash_password(long_pw, ROUNDS)
    assert verify_password(long_pw, hashed)
    # Only the first 72 bytes count
    assert verify_password("a" * 72, hashed)


def test_backend_failure_raises_credential_error(monkeypatch):
    def broken_gensalt(rounds=12, prefix=b"2b"):
        raise ValueError("entropy source unavailable")

    monkeypatch.setattr(bcrypt, "gensalt", broken_gensalt)
    with pytest.raises(CredentialError):
        hash_password("hunter2", ROUNDS)
