import time
import uuid
from datetime import timedelta

import pytest
from jose import jwt
from pydantic import SecretStr

from catalog.core.exceptions import TokenExpiredError, TokenInvalidError
from catalog.core.security import (
    AccessTokenCodec,
    access_token_codec,
    generate_refresh_token_value,
    get_password_hash,
    verify_password,
)

SECRET = "unit-test-secret-0123456789abcdef0123456789"


def _codec(secret=SECRET):
    return AccessTokenCodec(SecretStr(secret), "HS256", timedelta(minutes=5))


def test_access_token_round_trip():
    codec = _codec()
    token = codec.mint("alice")
    assert codec.validate(token) == "alice"


def test_access_token_payload_carries_type_and_expiry():
    token = _codec().mint("alice")
    claims = jwt.get_unverified_claims(token)
    assert claims["typ"] == "access"
    assert claims["sub"] == "alice"
    assert claims["exp"] - claims["iat"] == 300
    assert claims["jti"]


def test_expired_token_is_reported_as_expired():
    codec = _codec()
    token = codec.mint("alice", ttl=timedelta(seconds=-30))
    with pytest.raises(TokenExpiredError):
        codec.validate(token)


def test_token_signed_with_other_secret_is_invalid():
    token = _codec("some-other-secret-0123456789abcdef").mint("alice")
    with pytest.raises(TokenInvalidError):
        _codec().validate(token)


def test_swapped_payload_breaks_signature():
    codec = _codec()
    header, _, signature = codec.mint("alice").split(".")
    _, mallory_payload, _ = codec.mint("mallory").split(".")
    with pytest.raises(TokenInvalidError):
        codec.validate(".".join([header, mallory_payload, signature]))


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
def test_malformed_tokens_are_invalid(token):
    with pytest.raises(TokenInvalidError):
        _codec().validate(token)


def test_non_access_token_is_rejected():
    token = jwt.encode(
        {"sub": "alice", "typ": "refresh", "exp": int(time.time()) + 60},
        SECRET,
        algorithm="HS256",
    )
    with pytest.raises(TokenInvalidError):
        _codec().validate(token)


def test_token_without_subject_is_rejected():
    token = jwt.encode({"typ": "access", "exp": int(time.time()) + 60}, SECRET, algorithm="HS256")
    with pytest.raises(TokenInvalidError):
        _codec().validate(token)


def test_codec_does_not_reveal_secret():
    codec = _codec()
    assert SECRET not in repr(codec)
    assert codec.expires_in == 300


def test_codec_requires_secret():
    with pytest.raises(ValueError):
        AccessTokenCodec(SecretStr(""))


def test_process_codec_uses_configured_lifetime():
    assert access_token_codec.algorithm == "HS256"
    assert access_token_codec.expires_in == 60 * 60


def test_password_hash_verifies_and_is_salted():
    first = get_password_hash("pw123")
    second = get_password_hash("pw123")
    assert first != "pw123"
    assert first != second
    assert verify_password("pw123", first)
    assert not verify_password("pw124", first)


def test_unparseable_hash_is_a_mismatch():
    assert verify_password("pw123", "not-a-bcrypt-hash") is False


def test_long_passwords_hash_without_error():
    password = "x" * 100
    assert verify_password(password, get_password_hash(password))


def test_refresh_token_values_are_random_uuid4():
    values = {generate_refresh_token_value() for _ in range(50)}
    assert len(values) == 50
    assert all(uuid.UUID(value).version == 4 for value in values)
