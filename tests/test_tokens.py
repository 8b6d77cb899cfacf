from datetime import datetime, timedelta, timezone

import jwt
import pytest

from healthrec.services.tokens import TokenService

SECRET = "unit-test-secret"


def test_issue_then_verify_round_trip():
    service = TokenService(SECRET)
    assert service.verify(service.issue("user-123")) == "user-123"


def test_claims_are_subject_and_expiry_only():
    service = TokenService(SECRET, ttl_seconds=3600)
    claims = jwt.decode(service.issue("u1"), SECRET, algorithms=["HS256"])
    assert set(claims) == {"sub", "exp"}
    assert service.expires_in == 3600


def test_token_issued_in_the_past_is_expired():
    past = datetime.now(timezone.utc) - timedelta(hours=2)
    issuer = TokenService(SECRET, clock=lambda: past)
    token = issuer.issue("u1")
    assert TokenService(SECRET).verify(token) is None


def test_expiry_follows_injected_clock():
    now = datetime(2030, 1, 1, tzinfo=timezone.utc)
    clock = {"now": now}
    service = TokenService(SECRET, ttl_seconds=60, clock=lambda: clock["now"])
    token = service.issue("u1")
    clock["now"] = now + timedelta(seconds=59)
    assert service.verify(token) == "u1"
    clock["now"] = now + timedelta(seconds=60)
    assert service.verify(token) is None


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_tokens_are_invalid(token):
    assert TokenService(SECRET).verify(token) is None


def test_wrong_signature_is_invalid():
    token = TokenService("other-secret").issue("u1")
    assert TokenService(SECRET).verify(token) is None


def test_unsigned_token_is_invalid():
    exp = datetime.now(timezone.utc) + timedelta(hours=1)
    token = jwt.encode({"sub": "u1", "exp": exp}, None, algorithm="none")
    assert TokenService(SECRET).verify(token) is None


def test_missing_subject_is_invalid():
    exp = datetime.now(timezone.utc) + timedelta(hours=1)
    token = jwt.encode({"exp": exp}, SECRET, algorithm="HS256")
    assert TokenService(SECRET).verify(token) is None


def test_empty_secret_fails_at_construction():
    with pytest.raises(ValueError):
        TokenService("")
