"""
测试密码哈希与JWT令牌
"""
from datetime import timedelta

from jose import jwt

from sitecms.core.config import settings
from sitecms.core.security import (
    Identity, create_access_token, hash_password, verify_password, verify_token
)
from sitecms.utils.auth import extract_bearer_token

IDENTITY = Identity(user_id="u-1", username="alice", role="editor")


def test_hash_is_salted_and_verifiable():
    first = hash_password("s3cret!")
    second = hash_password("s3cret!")

    assert first != second
    assert first != "s3cret!"
    assert verify_password("s3cret!", first)
    assert verify_password("s3cret!", second)
    assert not verify_password("wrong", first)


def test_verify_password_with_malformed_hash():
    assert verify_password("anything", "not-a-bcrypt-hash") is False


def test_token_round_trip():
    token = create_access_token(IDENTITY)
    assert verify_token(token) == IDENTITY


def test_token_carries_iat_and_exp():
    token = create_access_token(IDENTITY)
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])

    assert payload["sub"] == "u-1"
    assert payload["role"] == "editor"
    assert payload["exp"] - payload["iat"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60


def test_expired_token_is_rejected():
    token = create_access_token(IDENTITY, expires_delta=timedelta(seconds=-10))
    assert verify_token(token) is None


def test_tampered_token_is_rejected():
    token = create_access_token(IDENTITY)
    header, payload, signature = token.split(".")
    flipped = signature[:-2] + ("AA" if signature[-2:] != "AA" else "BB")

    assert verify_token(f"{header}.{payload}.{flipped}") is None


def test_token_signed_with_other_secret_is_rejected():
    token = jwt.encode(
        {"sub": "u-1", "username": "alice", "role": "admin"},
        "another-secret",
        algorithm="HS256"
    )
    assert verify_token(token) is None


def test_token_without_identity_claims_is_rejected():
    token = jwt.encode({"sub": "u-1"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    assert verify_token(token) is None


def test_garbage_token_is_rejected():
    assert verify_token("not.a.token") is None
    assert verify_token("") is None


def test_extract_bearer_token():
    assert extract_bearer_token("Bearer abc") == "abc"
    assert extract_bearer_token(None) is None
    assert extract_bearer_token("") is None
    assert extract_bearer_token("bearer abc") is None
    assert extract_bearer_token("Token abc") is None
    assert extract_bearer_token("Bearer") is None
    assert extract_bearer_token("Bearer a b") is None
