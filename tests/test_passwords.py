import pytest

from healthrec.core.errors import HashingError
from healthrec.services.passwords import PasswordHasher


def test_hash_and_verify(hasher):
    digest = hasher.hash("correct horse")
    assert digest != "correct horse"
    assert hasher.verify(digest, "correct horse")
    assert not hasher.verify(digest, "correct horsE")


def test_hash_is_salted(hasher):
    assert hasher.hash("same-password") != hasher.hash("same-password")


def test_work_factor_is_encoded_in_digest():
    digest = PasswordHasher(rounds=5).hash("pw-12345")
    assert digest.startswith("$2b$05$")


def test_malformed_digest_is_false_not_error(hasher):
    assert hasher.verify("not-a-bcrypt-hash", "whatever") is False
    assert hasher.verify("", "whatever") is False


def test_overlong_password_raises_hashing_error(hasher):
    with pytest.raises(HashingError):
        hasher.hash("x" * 100)
