"""Access token codec: issue, validate, expiry, secrets, issuer, subject."""

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from chirpy.auth.jwt import (
    AccessTokenCodec,
    InvalidIssuer,
    InvalidToken,
    MalformedSubject,
    TokenError,
    TokenExpired,
)

SECRET = "s1-0123456789abcdef0123456789abcdef"
OTHER_SECRET = "s2-fedcba9876543210fedcba9876543210"
HOUR = timedelta(hours=1)


@pytest.fixture()
def codec(clock):
    return AccessTokenCodec(SECRET, clock=clock)


def test_validate_returns_subject_right_after_issue(codec):
    user_id = uuid.uuid4()
    assert codec.validate(codec.issue(user_id, HOUR)) == user_id


def test_claims(codec, clock):
    user_id = uuid.uuid4()
    payload = jwt.decode(
        codec.issue(user_id, HOUR),
        SECRET,
        algorithms=["HS256"],
        options={"verify_exp": False, "verify_iat": False},
    )
    assert payload["iss"] == "chirpy"
    assert payload["sub"] == str(user_id)
    assert payload["iat"] == int(clock.now.timestamp())
    assert payload["exp"] == int((clock.now + HOUR).timestamp())


def test_valid_until_just_before_expiry(codec, clock):
    user_id = uuid.uuid4()
    token = codec.issue(user_id, HOUR)
    clock.advance(HOUR - timedelta(seconds=1))
    assert codec.validate(token) == user_id


def test_expired_at_exactly_ttl(codec, clock):
    token = codec.issue(uuid.uuid4(), HOUR)
    clock.advance(HOUR)
    with pytest.raises(TokenExpired):
        codec.validate(token)


def test_expired_long_after(codec, clock):
    token = codec.issue(uuid.uuid4(), timedelta(seconds=5))
    clock.advance(timedelta(days=3))
    with pytest.raises(TokenExpired):
        codec.validate(token)


def test_other_secret_rejects(clock):
    token = AccessTokenCodec(SECRET, clock=clock).issue(uuid.uuid4(), HOUR)
    with pytest.raises(InvalidToken):
        AccessTokenCodec(OTHER_SECRET, clock=clock).validate(token)


def test_codecs_with_same_config_agree(clock):
    user_id = uuid.uuid4()
    token = AccessTokenCodec(SECRET, clock=clock).issue(user_id, HOUR)
    assert AccessTokenCodec(SECRET, clock=clock).validate(token) == user_id


def test_wrong_issuer(clock):
    token = AccessTokenCodec(SECRET, issuer="someone-else", clock=clock).issue(
        uuid.uuid4(), HOUR
    )
    with pytest.raises(InvalidIssuer):
        AccessTokenCodec(SECRET, clock=clock).validate(token)


def test_missing_issuer(codec, clock):
    token = jwt.encode(
        {"sub": str(uuid.uuid4()), "iat": clock.now, "exp": clock.now + HOUR},
        SECRET,
        algorithm="HS256",
    )
    with pytest.raises(InvalidToken):
        codec.validate(token)


def test_subject_not_a_uuid(codec, clock):
    token = jwt.encode(
        {"iss": "chirpy", "sub": "not-a-user", "iat": clock.now, "exp": clock.now + HOUR},
        SECRET,
        algorithm="HS256",
    )
    with pytest.raises(MalformedSubject):
        codec.validate(token)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "Bearer x.y.z"])
def test_garbage_tokens(codec, token):
    with pytest.raises(InvalidToken):
        codec.validate(token)


def test_unsigned_token_rejected(codec, clock):
    token = jwt.encode(
        {"iss": "chirpy", "sub": str(uuid.uuid4()), "iat": clock.now, "exp": clock.now + HOUR},
        None,
        algorithm="none",
    )
    with pytest.raises(InvalidToken):
        codec.validate(token)


def test_all_failures_are_token_errors():
    for exc in (InvalidToken, InvalidIssuer, TokenExpired, MalformedSubject):
        assert issubclass(exc, TokenError)


def test_issuer_clock_ahead_of_validator():
    now = datetime.now(timezone.utc)
    user_id = uuid.uuid4()
    issuer = AccessTokenCodec(SECRET, clock=lambda: now + timedelta(seconds=5))
    assert AccessTokenCodec(SECRET).validate(issuer.issue(user_id, HOUR)) == user_id


def test_codec_clock_in_the_future_validates_own_tokens():
    tomorrow = datetime.now(timezone.utc) + timedelta(days=1)
    codec = AccessTokenCodec(SECRET, clock=lambda: tomorrow)
    user_id = uuid.uuid4()
    assert codec.validate(codec.issue(user_id, HOUR)) == user_id
